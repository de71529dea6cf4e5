"""Live session registry backed by the multiplexer."""
import logging
from typing import List, Optional

from .errors import (
    DuplicateSessionError,
    SessionNotFoundError,
    UnsupportedOperationError,
)
from .state import ManagerState

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Session operations addressed by 1-based index or name.

    Indexes refer to the result of the last ``list()`` call. The multiplexer
    is always asked whether a session exists; nothing is cached beyond that
    index table.
    """

    def __init__(self, state: ManagerState):
        self.state = state

    @property
    def backend(self):
        return self.state.backend

    def list(self) -> List[str]:
        # A failed listing must not leave stale indexes behind
        self.state.sessions = []
        self.state.sessions = self.backend.list_sessions()
        return self.state.sessions

    def resolve(self, identifier: str) -> str:
        """Turn an index or name into a live session name.

        Index interpretation wins when the string is a valid index.

        Raises:
            SessionNotFoundError: If neither an index nor a live name matches
        """
        identifier = identifier.strip()
        if not identifier:
            raise SessionNotFoundError(identifier)

        sessions = self.state.sessions
        if identifier.isdigit() and 0 < int(identifier) <= len(sessions):
            name = sessions[int(identifier) - 1]
            if self.backend.has_session(name):
                return name
            raise SessionNotFoundError(name)

        if self.backend.has_session(identifier):
            return identifier
        raise SessionNotFoundError(identifier)

    def create(self, name: str, layout: Optional[str] = None,
               attach: Optional[bool] = None) -> str:
        """Create a detached session.

        Args:
            name: Session name; surrounding whitespace is dropped
            layout: Layout file handed to the backend
            attach: Attach afterwards; None follows attach_after_creation
        """
        name = name.strip()
        self.backend.validate_name(name)
        if self.backend.has_session(name):
            raise DuplicateSessionError(name)

        self.backend.create_session(name, layout=layout)
        logger.info(f"Session '{name}' created")

        if attach is None:
            attach = self.state.config.attach_after_creation
        if attach:
            self.backend.attach_session(name)
        return name

    def delete(self, identifier: str) -> str:
        name = self.resolve(identifier)
        self.backend.kill_session(name)
        logger.info(f"Session '{name}' deleted")
        return name

    def check_rename_supported(self) -> None:
        if not self.backend.supports_rename:
            raise UnsupportedOperationError(self.backend.name, "renaming sessions")

    def rename(self, identifier: str, new_name: str) -> str:
        self.check_rename_supported()

        name = self.resolve(identifier)
        new_name = new_name.strip()
        self.backend.validate_name(new_name)
        if new_name != name and self.backend.has_session(new_name):
            raise DuplicateSessionError(new_name)

        self.backend.rename_session(name, new_name)
        logger.info(f"Session '{name}' renamed to '{new_name}'")
        return name

    def attach(self, identifier: str) -> str:
        name = self.resolve(identifier)
        logger.info(f"Attaching to session '{name}'")
        self.backend.attach_session(name)
        logger.info(f"Detached from session '{name}'")
        return name
