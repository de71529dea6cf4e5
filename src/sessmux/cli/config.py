"""Configuration commands."""
import json

import click

from ..config import BOOL_FIELDS, PATH_FIELDS, default_config, dump_config


def _echo_config(config, fmt: str):
    if fmt == "json":
        click.echo(json.dumps(config.model_dump(), indent=2))
    else:
        click.echo(dump_config(config), nl=False)


@click.group()
def config():
    """Show and change manager settings."""
    pass


@config.command()
@click.option("--format", "fmt", type=click.Choice(["kv", "json"]), default="kv", show_default=True)
@click.pass_obj
def show(obj, fmt):
    """Show the current configuration."""
    _echo_config(obj.load_state().config, fmt)


@config.command()
@click.option("--format", "fmt", type=click.Choice(["kv", "json"]), default="kv", show_default=True)
@click.pass_obj
def defaults(obj, fmt):
    """Show the default configuration for the backend."""
    _echo_config(default_config(obj.backend), fmt)


@config.command()
@click.argument("field", type=click.Choice(BOOL_FIELDS))
@click.pass_obj
def toggle(obj, field):
    """Flip a boolean setting."""
    store = obj.load_state().store
    value = store.toggle(field)
    for notice in store.pop_notices():
        click.echo(notice, err=True)
    click.echo(f"{field} is now {'enabled' if value else 'disabled'}.")


@config.command("set")
@click.argument("field", type=click.Choice(PATH_FIELDS))
@click.argument("value")
@click.pass_obj
def set_path(obj, field, value):
    """Set a path setting."""
    store = obj.load_state().store
    if not store.set_path(field, value):
        click.echo(f"No path entered. {field} remains unchanged.", err=True)
        raise click.Abort()
    for notice in store.pop_notices():
        click.echo(notice, err=True)
    click.echo(f"{field} set to {value}")
