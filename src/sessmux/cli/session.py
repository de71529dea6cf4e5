"""Session management commands."""
import click

from ..errors import SessionManagerError
from ..layouts import resolve_layout, scan_layouts
from ..registry import SessionRegistry
from ..serializer import SessionSerializer


def _registry(obj) -> SessionRegistry:
    registry = SessionRegistry(obj.load_state())
    # Populate the index table so numbers resolve like in the menu
    registry.list()
    return registry


def _fail(action: str, error: Exception):
    click.echo(f"Failed to {action}: {error}", err=True)
    raise click.Abort()


@click.command("list")
@click.pass_obj
def list_sessions(obj):
    """List live sessions."""
    try:
        sessions = _registry(obj).list()
    except SessionManagerError as e:
        _fail("list sessions", e)

    if not sessions:
        click.echo("-- No active sessions --")
    for index, name in enumerate(sessions, 1):
        click.echo(f"{index}. {name}")


@click.command()
@click.argument("name")
@click.option("--layout", default=None, help="Zellij layout name or number")
@click.pass_obj
def create(obj, name, layout):
    """Create a detached session."""
    try:
        registry = _registry(obj)
        layout_path = None
        if layout:
            available = scan_layouts(registry.state.config.layout_folder)
            layout_path = resolve_layout(layout, available)
            if layout_path is None:
                click.echo(f"Layout '{layout}' not found", err=True)
                raise click.Abort()

        name = registry.create(name, layout=str(layout_path) if layout_path else None, attach=False)
        SessionSerializer(registry.state).snapshot()
    except SessionManagerError as e:
        _fail("create session", e)

    click.echo(f"Session '{name}' created.")
    if registry.state.config.attach_after_creation:
        try:
            registry.attach(name)
        except SessionManagerError as e:
            _fail("attach to session", e)


@click.command()
@click.argument("identifier")
@click.pass_obj
def delete(obj, identifier):
    """Delete a session by number or name."""
    try:
        registry = _registry(obj)
        name = registry.delete(identifier)
        SessionSerializer(registry.state).snapshot()
    except SessionManagerError as e:
        _fail("delete session", e)

    click.echo(f"Session '{name}' has been deleted.")


@click.command()
@click.argument("identifier")
@click.argument("new_name")
@click.pass_obj
def rename(obj, identifier, new_name):
    """Rename a session by number or name."""
    try:
        registry = _registry(obj)
        name = registry.rename(identifier, new_name)
        SessionSerializer(registry.state).snapshot()
    except SessionManagerError as e:
        _fail("rename session", e)

    click.echo(f"Session '{name}' has been renamed to '{new_name}'.")


@click.command()
@click.argument("identifier")
@click.pass_obj
def attach(obj, identifier):
    """Attach to a session by number or name."""
    try:
        _registry(obj).attach(identifier)
    except SessionManagerError as e:
        _fail("attach", e)


@click.command()
@click.pass_obj
def save(obj):
    """Write the session file now."""
    try:
        snapshot = SessionSerializer(obj.load_state()).snapshot()
    except SessionManagerError as e:
        _fail("save sessions", e)

    if snapshot is None:
        click.echo("Session saving is disabled.")
    else:
        click.echo(f"Saved {len(snapshot)} session(s).")


@click.command()
@click.pass_obj
def restore(obj):
    """Recreate sessions from the session file."""
    try:
        created = SessionSerializer(obj.load_state()).restore()
    except SessionManagerError as e:
        _fail("restore sessions", e)

    if created:
        click.echo(f"Restored sessions: {', '.join(created)}")
    else:
        click.echo("No sessions restored.")


@click.command()
@click.pass_obj
def layouts(obj):
    """List available Zellij layouts."""
    state = obj.load_state()
    available = scan_layouts(state.config.layout_folder)

    click.echo("Available Layouts:")
    if not available:
        click.echo("-- No layouts available --")
    for index, name in enumerate(available, 1):
        click.echo(f"{index}. {name}")
