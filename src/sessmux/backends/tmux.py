"""tmux adapter."""
import logging
import shlex
from typing import List, Optional

from .. import proc
from ..errors import ExternalToolError, InvalidSessionNameError
from ..models import Pane, Window
from .base import MultiplexerBackend

logger = logging.getLogger(__name__)


class TmuxBackend(MultiplexerBackend):
    """Drives tmux through its command line."""

    name = "tmux"
    supports_rename = True
    supports_windows = True

    def __init__(self, binary: str = "tmux"):
        self.binary = binary

    def _cmd(self, *args: str) -> List[str]:
        return [self.binary, *args]

    def list_sessions(self) -> List[str]:
        # Exits nonzero when no server is running
        result = proc.run(self._cmd("list-sessions", "-F", "#{session_name}"), check=False)
        if result.returncode != 0:
            return []
        return [line for line in result.stdout.splitlines() if line]

    def has_session(self, name: str) -> bool:
        # "=" forces an exact match instead of tmux's prefix matching
        result = proc.run(self._cmd("has-session", "-t", f"={name}"), check=False)
        return result.returncode == 0

    def validate_name(self, name: str) -> None:
        super().validate_name(name)
        # tmux rewrites these to "_" instead of failing
        bad = [c for c in ".:" if c in name]
        if bad:
            raise InvalidSessionNameError(
                f"tmux session names cannot contain {' or '.join(repr(c) for c in bad)}: {name!r}"
            )

    def create_session(self, name: str, window_name: Optional[str] = None,
                       layout: Optional[str] = None) -> Optional[str]:
        cmd = self._cmd("new-session", "-d", "-s", name, "-P", "-F", "#{window_id}")
        if window_name:
            cmd.extend(["-n", window_name])

        result = proc.run(cmd)
        window_id = result.stdout.strip()
        logger.info(f"Created tmux session {name} (initial window {window_id})")
        return window_id or f"={name}:"

    def kill_session(self, name: str) -> None:
        proc.run(self._cmd("kill-session", "-t", f"={name}"))
        logger.info(f"Killed tmux session {name}")

    def rename_session(self, name: str, new_name: str) -> None:
        proc.run(self._cmd("rename-session", "-t", f"={name}", new_name))
        logger.info(f"Renamed tmux session {name} to {new_name}")

    def attach_session(self, name: str) -> None:
        proc.run_foreground(self._cmd("attach-session", "-t", f"={name}"))

    def list_windows(self, session: str) -> List[Window]:
        result = proc.run(self._cmd("list-windows", "-t", f"={session}", "-F",
                                    "#{window_id}|#{window_name}"))

        windows = []
        for line in result.stdout.splitlines():
            if not line:
                continue
            window_id, _, window_name = line.partition("|")
            windows.append(Window(id=window_id, name=window_name,
                                  panes=self.list_panes(window_id)))
        return windows

    def list_panes(self, window_id: str) -> List[Pane]:
        result = proc.run(self._cmd("list-panes", "-t", window_id, "-F",
                                    "#{pane_id}|#{pane_current_path}"))

        panes = []
        for line in result.stdout.splitlines():
            if not line:
                continue
            pane_id, _, path = line.partition("|")
            panes.append(Pane(id=pane_id, path=path))
        return panes

    def new_window(self, session: str, name: str) -> str:
        result = proc.run(self._cmd("new-window", "-d", "-t", f"={session}:", "-n", name,
                                    "-P", "-F", "#{window_id}"))
        window_id = result.stdout.strip()
        if not window_id:
            raise ExternalToolError(self._cmd("new-window"), 0, "no window id returned")
        return window_id

    def rename_window(self, target: str, name: str) -> None:
        proc.run(self._cmd("rename-window", "-t", target, name))

    def change_directory(self, target: str, path: str) -> None:
        proc.run(self._cmd("send-keys", "-t", target, f"cd {shlex.quote(path)}", "C-m"))

    def split_pane(self, target: str, path: str) -> None:
        proc.run(self._cmd("split-window", "-t", target, "-c", path))

    def set_layout(self, target: str, layout: str) -> None:
        proc.run(self._cmd("select-layout", "-t", target, layout))
