"""Snapshot and restore of the live session hierarchy."""
import logging
from typing import List, Optional

from .models import Session, Snapshot, dump_snapshot, load_snapshot
from .errors import SnapshotError
from .state import ManagerState
from .utils import expand_path

logger = logging.getLogger(__name__)

RESTORE_LAYOUT = "tiled"


class SessionSerializer:
    """Writes the session file and replays it at startup.

    Only structure and working directories are captured; processes running
    inside panes are not.
    """

    def __init__(self, state: ManagerState):
        self.state = state

    @property
    def session_file(self):
        return expand_path(self.state.config.session_file_path)

    def capture(self) -> Snapshot:
        """Read the live hierarchy from the multiplexer."""
        backend = self.state.backend
        return [Session(name=name, windows=backend.list_windows(name))
                for name in backend.list_sessions()]

    def snapshot(self) -> Optional[Snapshot]:
        """Capture and write the session file if saving is enabled.

        Returns:
            The written snapshot, or None when saving is disabled
        """
        if not self.state.config.session_file_enabled:
            return None

        snapshot = self.capture()
        path = self.session_file
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dump_snapshot(snapshot))
        except OSError as e:
            raise SnapshotError(f"Cannot write {path}: {e}")
        logger.info(f"Saved {len(snapshot)} session(s) to {path}")
        return snapshot

    def load(self) -> Snapshot:
        path = self.session_file
        try:
            text = path.read_text()
        except OSError as e:
            raise SnapshotError(f"Cannot read {path}: {e}")
        return load_snapshot(text)

    def restore(self) -> List[str]:
        """Recreate sessions from the session file.

        Sessions that are already live are skipped. There is no rollback:
        if a step fails, sessions created before it remain.

        Returns:
            Names of the sessions created
        """
        if not self.state.config.session_file_enabled or not self.session_file.is_file():
            logger.debug("Session file does not exist or session saving is disabled")
            return []

        logger.info(f"Restoring sessions from {self.session_file}")
        created = []
        for session in self.load():
            if self.state.backend.has_session(session.name):
                logger.info(f"Session '{session.name}' already exists, skipping")
                continue
            self.restore_session(session)
            created.append(session.name)
        return created

    def restore_session(self, session: Session) -> None:
        backend = self.state.backend
        first_name = session.windows[0].name if session.windows else None
        initial_window = backend.create_session(session.name, window_name=first_name)

        if not backend.supports_windows:
            return

        for index, window in enumerate(session.windows):
            if index == 0:
                target = initial_window
            else:
                target = backend.new_window(session.name, window.name)

            for pane_index, pane in enumerate(window.panes):
                if pane_index == 0:
                    backend.change_directory(target, pane.path)
                else:
                    backend.split_pane(target, pane.path)

            backend.set_layout(target, RESTORE_LAYOUT)
            logger.debug(f"Restored window '{window.name}' with {len(window.panes)} pane(s)")
