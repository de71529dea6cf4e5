"""Exceptions raised by sessmux."""
from typing import List, Optional


class SessionManagerError(Exception):
    """Base class for all session manager errors."""


class ConfigLoadError(SessionManagerError):
    """Config file is unreadable or corrupt."""


class SessionNotFoundError(SessionManagerError):
    """No live session matches the given index or name."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Session '{identifier}' was not found")


class DuplicateSessionError(SessionManagerError):
    """A live session with the same name already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Session '{name}' already exists")


class InvalidSessionNameError(SessionManagerError):
    """Session name is empty or contains characters the backend rejects."""


class UnsupportedOperationError(SessionManagerError):
    """The backend does not implement the requested operation."""

    def __init__(self, backend: str, operation: str):
        self.backend = backend
        self.operation = operation
        super().__init__(f"{backend} does not support {operation}")


class ExternalToolError(SessionManagerError):
    """Multiplexer binary is missing or exited with a nonzero status."""

    def __init__(self, cmd: List[str], returncode: Optional[int] = None, stderr: str = ""):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr

        if returncode is None:
            message = f"Command not found: {cmd[0]}"
        else:
            message = f"Command failed with exit code {returncode}: {' '.join(cmd)}"
            if stderr:
                message += f" ({stderr.strip()})"
        super().__init__(message)


class SnapshotError(SessionManagerError):
    """Session snapshot file cannot be read or parsed."""
