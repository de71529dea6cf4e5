"""Zellij adapter."""
import logging
from typing import List, Optional

from .. import proc
from ..utils import strip_ansi
from .base import MultiplexerBackend

logger = logging.getLogger(__name__)


def parse_session_list(output: str) -> List[str]:
    """Extract session names from ``zellij list-sessions`` output.

    Lines look like ``dev [Created 2h ago] (current)`` with ANSI colors;
    the name is the first field.
    """
    names = []
    for line in strip_ansi(output).splitlines():
        fields = line.split()
        if not fields or line.startswith("No active"):
            continue
        names.append(fields[0])
    return names


class ZellijBackend(MultiplexerBackend):
    """Drives Zellij through its command line.

    Zellij cannot rename sessions or enumerate tabs and panes from outside a
    session, so only session-level operations are available.
    """

    name = "zellij"
    supports_layouts = True

    def __init__(self, binary: str = "zellij"):
        self.binary = binary

    def _cmd(self, *args: str) -> List[str]:
        return [self.binary, *args]

    def list_sessions(self) -> List[str]:
        # Exits nonzero with "No active zellij sessions found."
        result = proc.run(self._cmd("list-sessions"), check=False)
        if result.returncode != 0:
            return []
        return parse_session_list(result.stdout)

    def create_session(self, name: str, window_name: Optional[str] = None,
                       layout: Optional[str] = None) -> Optional[str]:
        cmd = self._cmd("attach", "--create-background", name)
        if layout:
            cmd.extend(["options", "--default-layout", layout])

        proc.run(cmd)
        logger.info(f"Created zellij session {name}" + (f" with layout {layout}" if layout else ""))
        return None

    def kill_session(self, name: str) -> None:
        proc.run(self._cmd("kill-session", name))
        logger.info(f"Killed zellij session {name}")

    def attach_session(self, name: str) -> None:
        proc.run_foreground(self._cmd("attach", name))
