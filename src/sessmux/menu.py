"""Interactive menu loop."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

import click

from .errors import SessionManagerError
from .layouts import resolve_layout, scan_layouts
from .registry import SessionRegistry
from .serializer import SessionSerializer
from .state import ManagerState

logger = logging.getLogger(__name__)


class Command(Enum):
    """Main menu commands."""
    ATTACH = "attach"
    CREATE = "create"
    RENAME = "rename"
    DELETE = "delete"
    CONFIG = "config"
    LAYOUTS = "layouts"
    EXIT = "exit"
    INVALID = "invalid"


KEYWORDS = {
    "a": Command.ATTACH,
    "c": Command.CREATE,
    "r": Command.RENAME,
    "d": Command.DELETE,
    "s": Command.CONFIG,
    "ll": Command.LAYOUTS,
    "x": Command.EXIT,
}


@dataclass(frozen=True)
class ParsedCommand:
    """A main menu command and its optional argument."""
    command: Command
    argument: Optional[str] = None


def parse_command(text: str, sessions: Sequence[str] = ()) -> ParsedCommand:
    """Parse one line of main menu input.

    Digits select a session by number. Keywords are case-insensitive and
    take precedence over session names. Any other text attaches only if it
    is the exact name of a listed session.
    """
    text = text.strip()
    if not text:
        return ParsedCommand(Command.INVALID)
    if text.isdigit():
        return ParsedCommand(Command.ATTACH, text)

    command = KEYWORDS.get(text.lower())
    if command is not None:
        return ParsedCommand(command)
    if text in sessions:
        return ParsedCommand(Command.ATTACH, text)
    return ParsedCommand(Command.INVALID, text)


class MenuState(Enum):
    MAIN = "main"
    CONFIG = "config"
    ATTACHED = "attached"
    EXIT = "exit"


class ConfigCommand(Enum):
    """Configuration menu entries."""
    TOGGLE_SAVING = "Toggle session save file"
    TOGGLE_ATTACH = "Toggle attach after session creation"
    SESSION_FILE = "Set session file path"
    CONFIG_FILE = "Set configuration file path"
    LAYOUT_FOLDER = "Set layout folder path"
    PROGRAM_BASE_FOLDER = "Set program base folder path"
    RETURN = "Return to Main Menu"


def config_entries(supports_layouts: bool) -> List[ConfigCommand]:
    entries = [ConfigCommand.TOGGLE_SAVING, ConfigCommand.TOGGLE_ATTACH,
               ConfigCommand.SESSION_FILE, ConfigCommand.CONFIG_FILE]
    if supports_layouts:
        entries.extend([ConfigCommand.LAYOUT_FOLDER, ConfigCommand.PROGRAM_BASE_FOLDER])
    entries.append(ConfigCommand.RETURN)
    return entries


def parse_config_choice(text: str, entries: Sequence[ConfigCommand]) -> Optional[ConfigCommand]:
    """Map a 1-based menu number to an entry; None if out of range."""
    text = text.strip()
    if text.isdigit() and 0 < int(text) <= len(entries):
        return entries[int(text) - 1]
    return None


def _prompt(text: str) -> str:
    return click.prompt(text, default="", show_default=False, prompt_suffix=" ")


def _enabled(value: bool) -> str:
    return click.style("Enabled", fg="green") if value else click.style("Disabled", fg="red")


class MenuLoop:
    """Single-threaded menu: render, read one line, dispatch, repeat."""

    def __init__(self, state: ManagerState,
                 prompt: Callable[[str], str] = _prompt,
                 echo: Callable[..., None] = click.echo,
                 clear: Callable[[], None] = click.clear):
        self.state = state
        self.registry = SessionRegistry(state)
        self.serializer = SessionSerializer(state)
        self.prompt = prompt
        self.echo = echo
        self.clear = clear
        self.menu_state = MenuState.MAIN
        self.notices: List[Tuple[str, Optional[str]]] = []

    @property
    def backend(self):
        return self.state.backend

    def notify(self, message: str, fg: Optional[str] = None) -> None:
        self.notices.append((message, fg))

    def run(self) -> int:
        """Create missing folders, restore saved sessions, then loop until exit."""
        self.state.store.ensure_folders()
        self._take_store_notices()
        self._guard(self._restore)

        while self.menu_state != MenuState.EXIT:
            try:
                if self.menu_state == MenuState.CONFIG:
                    self.config_step()
                else:
                    self.main_step()
            except (click.Abort, EOFError):
                self.echo("")
                self.menu_state = MenuState.EXIT

        logger.info("Session manager exiting")
        return 0

    def _guard(self, action: Callable[[], None]) -> None:
        try:
            action()
        except SessionManagerError as e:
            logger.warning(f"{type(e).__name__}: {e}")
            self.notify(str(e), fg="red")
        finally:
            self._take_store_notices()

    def _take_store_notices(self) -> None:
        for notice in self.state.store.pop_notices():
            self.notify(notice, fg="yellow")

    def _restore(self) -> None:
        created = self.serializer.restore()
        if created:
            self.notify(f"Restored sessions: {', '.join(created)}", fg="green")

    def _snapshot(self) -> None:
        if self.serializer.snapshot() is not None:
            logger.debug("Session file updated")

    # Main menu

    def main_step(self) -> None:
        self._guard(self.registry.list)
        self.render_main()
        parsed = parse_command(self.prompt("Selection:"), self.state.sessions)
        self._guard(lambda: self.dispatch(parsed))

    def render_main(self) -> None:
        config = self.state.config
        self.clear()
        self.echo(click.style(f"\n{self.backend.name.upper()} Session Manager", fg="blue", bold=True))
        self.echo("--------------------------------------\n")
        self.echo(f"Session file: {config.session_file_path} [{_enabled(config.session_file_enabled)}]\n")

        self.echo(click.style("Available Sessions", fg="cyan", bold=True) + ":")
        if not self.state.sessions:
            self.echo("-- No active sessions --")
        for index, name in enumerate(self.state.sessions, 1):
            self.echo(f"{click.style(str(index), fg='green')}. {name}")

        if self.notices:
            self.echo("")
            for message, fg in self.notices:
                self.echo(click.style(message, fg=fg) if fg else message)
            self.notices = []

        self.echo("\n" + click.style("Commands", fg="cyan", bold=True) + ":")
        for key, label in self.command_labels():
            self.echo(f"{click.style(key, fg='yellow')} - {label}")
        self.echo("")

    def command_labels(self) -> List[Tuple[str, str]]:
        labels = [("C", "Create a new session"),
                  ("A", "Attach to an existing session")]
        if self.backend.supports_rename:
            labels.append(("R", "Rename an existing session"))
        labels.extend([("D", "Delete a session"),
                       ("S", "Session Manager Configuration")])
        if self.backend.supports_layouts:
            labels.append(("LL", "List available layouts"))
        labels.append(("X", "Exit"))
        return labels

    def dispatch(self, parsed: ParsedCommand) -> None:
        command = parsed.command

        if command == Command.ATTACH:
            self.attach(parsed.argument)
        elif command == Command.CREATE:
            self.create()
        elif command == Command.RENAME:
            self.rename()
        elif command == Command.DELETE:
            self.delete()
        elif command == Command.CONFIG:
            self.menu_state = MenuState.CONFIG
        elif command == Command.LAYOUTS:
            self.list_layouts()
        elif command == Command.EXIT:
            self.menu_state = MenuState.EXIT
        else:
            self.notify("Invalid option! Please try again.", fg="red")

    def attach(self, identifier: Optional[str] = None) -> None:
        if identifier is None:
            identifier = self.prompt("Enter session name or number to attach:")

        self.menu_state = MenuState.ATTACHED
        try:
            self.registry.attach(identifier)
        finally:
            self.menu_state = MenuState.MAIN

    def create(self) -> None:
        name = self.prompt("Enter new session name:")
        layout = self.choose_layout() if self.backend.supports_layouts else None

        name = self.registry.create(name, layout=str(layout) if layout else None, attach=False)
        self.notify(f"Session '{name}' created.", fg="green")
        self._snapshot()

        if self.state.config.attach_after_creation:
            self.menu_state = MenuState.ATTACHED
            try:
                self.registry.attach(name)
            finally:
                self.menu_state = MenuState.MAIN

    def choose_layout(self):
        layouts = scan_layouts(self.state.config.layout_folder)
        if not layouts:
            return None

        self.echo("Available Layouts:")
        for index, name in enumerate(layouts, 1):
            self.echo(f"{index}. {name}")

        choice = self.prompt("Enter a layout to use (leave empty for no layout):")
        layout = resolve_layout(choice, layouts)
        if choice.strip() and layout is None:
            self.notify("Invalid layout choice. Continuing without a layout.", fg="yellow")
        return layout

    def rename(self) -> None:
        self.registry.check_rename_supported()
        identifier = self.prompt("Enter session number or current name to rename:")
        name = self.registry.resolve(identifier)
        new_name = self.prompt("Enter new session name:")

        self.registry.rename(identifier, new_name)
        self.notify(f"Session '{name}' has been renamed to '{new_name.strip()}'.", fg="green")
        self._snapshot()

    def delete(self) -> None:
        identifier = self.prompt("Enter session number or name to delete:")
        name = self.registry.delete(identifier)
        self.notify(f"Session '{name}' has been deleted.", fg="green")
        self._snapshot()

    def list_layouts(self) -> None:
        if not self.backend.supports_layouts:
            self.notify(f"Layouts are not supported by {self.backend.name}.", fg="yellow")
            return

        layouts = scan_layouts(self.state.config.layout_folder)
        self.notify("Available Layouts:")
        if not layouts:
            self.notify("-- No layouts available --")
        for index, name in enumerate(layouts, 1):
            self.notify(f"{index}. {name}")

    # Configuration menu

    def config_step(self) -> None:
        entries = config_entries(self.backend.supports_layouts)
        self.render_config(entries)
        choice = parse_config_choice(self.prompt("Select option:"), entries)

        if choice is None:
            self.notify("Invalid option! Please try again.", fg="red")
        elif choice == ConfigCommand.RETURN:
            self.menu_state = MenuState.MAIN
        else:
            self._guard(lambda: self.apply_config(choice))

    def render_config(self, entries: Sequence[ConfigCommand]) -> None:
        config = self.state.config
        current = {
            ConfigCommand.TOGGLE_SAVING: _enabled(config.session_file_enabled),
            ConfigCommand.TOGGLE_ATTACH: _enabled(config.attach_after_creation),
            ConfigCommand.SESSION_FILE: config.session_file_path,
            ConfigCommand.CONFIG_FILE: str(self.state.store.path),
            ConfigCommand.LAYOUT_FOLDER: config.layout_folder or "",
            ConfigCommand.PROGRAM_BASE_FOLDER: config.program_base_folder or "",
        }

        self.clear()
        self.echo(click.style("Session Manager Configuration", fg="blue", bold=True))
        self.echo("------------------------------")
        for index, entry in enumerate(entries, 1):
            if entry == ConfigCommand.RETURN:
                self.echo(f"\n{index} - {click.style(entry.value, fg='yellow')}")
            else:
                self.echo(f"{index} - {entry.value} [Currently: {current[entry]}]")
        self.echo("------------------------------")

        for message, fg in self.notices:
            self.echo(click.style(message, fg=fg) if fg else message)
        self.notices = []

    def apply_config(self, choice: ConfigCommand) -> None:
        store = self.state.store

        if choice == ConfigCommand.TOGGLE_SAVING:
            value = store.toggle("session_file_enabled")
            self.notify(f"Session saving is now {'enabled' if value else 'disabled'}.")
        elif choice == ConfigCommand.TOGGLE_ATTACH:
            value = store.toggle("attach_after_creation")
            self.notify(f"Attach directly after creation is now {'enabled' if value else 'disabled'}.")
        else:
            field, label = {
                ConfigCommand.SESSION_FILE: ("session_file_path", "Session file path"),
                ConfigCommand.CONFIG_FILE: ("config_file_path", "Configuration file path"),
                ConfigCommand.LAYOUT_FOLDER: ("layout_folder", "Layout folder path"),
                ConfigCommand.PROGRAM_BASE_FOLDER: ("program_base_folder", "Program base folder path"),
            }[choice]
            value = self.prompt(f"Enter new {label[0].lower() + label[1:]}:")
            if store.set_path(field, value):
                self.notify(f"{label} set to {value.strip()}")
            else:
                self.notify(f"No path entered. {label} remains unchanged.")
