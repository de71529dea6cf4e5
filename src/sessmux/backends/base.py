"""Interface every multiplexer adapter implements."""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..errors import InvalidSessionNameError, UnsupportedOperationError
from ..models import Window


class MultiplexerBackend(ABC):
    """Narrow view of a terminal multiplexer's CLI.

    Adapters own all output parsing. Callers only see session names and
    models. Window targets are opaque strings returned by the adapter.
    """

    name = "multiplexer"
    supports_rename = False
    supports_windows = False
    supports_layouts = False

    @abstractmethod
    def list_sessions(self) -> List[str]:
        """Return live session names in multiplexer order.

        Empty when there are no sessions or no running server.
        """

    def has_session(self, name: str) -> bool:
        return name in self.list_sessions()

    def validate_name(self, name: str) -> None:
        """Reject a session name this multiplexer would not store verbatim.

        Raises:
            InvalidSessionNameError: If the name is empty
        """
        if not name:
            raise InvalidSessionNameError("Session name cannot be empty")

    @abstractmethod
    def create_session(self, name: str, window_name: Optional[str] = None,
                       layout: Optional[str] = None) -> Optional[str]:
        """Create a detached session.

        Returns:
            Target of the initial window, if the backend addresses windows
        """

    @abstractmethod
    def kill_session(self, name: str) -> None:
        """Destroy a session."""

    def rename_session(self, name: str, new_name: str) -> None:
        raise UnsupportedOperationError(self.name, "renaming sessions")

    @abstractmethod
    def attach_session(self, name: str) -> None:
        """Attach the terminal to a session; blocks until detach."""

    def list_windows(self, session: str) -> List[Window]:
        """Return the windows of a session, panes included."""
        return []

    def new_window(self, session: str, name: str) -> str:
        raise UnsupportedOperationError(self.name, "creating windows")

    def rename_window(self, target: str, name: str) -> None:
        raise UnsupportedOperationError(self.name, "renaming windows")

    def change_directory(self, target: str, path: str) -> None:
        raise UnsupportedOperationError(self.name, "changing pane directories")

    def split_pane(self, target: str, path: str) -> None:
        raise UnsupportedOperationError(self.name, "splitting panes")

    def set_layout(self, target: str, layout: str) -> None:
        raise UnsupportedOperationError(self.name, "window layouts")
