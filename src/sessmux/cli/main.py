#!/usr/bin/env python3
"""Main CLI entry point for sessmux."""
import logging
import signal
import sys
from dataclasses import dataclass
from typing import Optional

import click

from ..backends import BACKENDS, get_backend
from ..config import ConfigStore, default_config
from ..errors import SessionManagerError
from ..log import setup_logging
from ..menu import MenuLoop
from ..serializer import SessionSerializer
from ..state import ManagerState
from .config import config
from .session import attach, create, delete, layouts, list_sessions, rename, restore, save

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Options shared by every subcommand."""
    backend: str
    config_file: Optional[str] = None

    def load_state(self) -> ManagerState:
        store = ConfigStore(default_config(self.backend), self.config_file)
        store.load()
        return ManagerState(backend=get_backend(self.backend), store=store)


def install_hangup_handler(serializer: SessionSerializer) -> None:
    """Save sessions when the controlling terminal goes away."""

    def save_on_exit(signum=None, frame=None):
        logger.info("Saving sessions due to terminal close")
        try:
            serializer.snapshot()
        except SessionManagerError as e:
            logger.error(f"Failed to save sessions on hangup: {e}")
        sys.exit(0)

    signal.signal(signal.SIGHUP, save_on_exit)


@click.group(invoke_without_command=True)
@click.option('--backend', type=click.Choice(sorted(BACKENDS)), default='tmux', show_default=True,
              envvar='SESSMUX_BACKEND', help='Terminal multiplexer to manage')
@click.option('--config-file', type=click.Path(dir_okay=False), default=None,
              help='Configuration file (default depends on backend)')
@click.option('--log-level', default=None, type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Set logging level')
@click.option('--log-file', type=click.Path(dir_okay=False), default=None,
              help='Write logs to this file')
@click.version_option(package_name='sessmux')
@click.pass_context
def cli(ctx, backend, config_file, log_level, log_file):
    """Session manager for tmux and Zellij.

    Without a subcommand, starts the interactive menu.
    """
    interactive = ctx.invoked_subcommand in (None, 'menu')
    setup_logging(log_level, log_file, interactive=interactive)
    ctx.obj = AppContext(backend=backend, config_file=config_file)

    if ctx.invoked_subcommand is None:
        ctx.invoke(menu)


@cli.command()
@click.pass_obj
def menu(obj: AppContext):
    """Run the interactive session menu."""
    loop = MenuLoop(obj.load_state())
    install_hangup_handler(loop.serializer)
    sys.exit(loop.run())


cli.add_command(list_sessions)
cli.add_command(create)
cli.add_command(delete)
cli.add_command(rename)
cli.add_command(attach)
cli.add_command(save)
cli.add_command(restore)
cli.add_command(layouts)
cli.add_command(config)


if __name__ == "__main__":
    cli()
