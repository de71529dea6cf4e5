"""Data models for sessmux."""
from .pane import Pane
from .session import Session, Snapshot, load_snapshot, dump_snapshot
from .window import Window

__all__ = ["Pane", "Window", "Session", "Snapshot", "load_snapshot", "dump_snapshot"]
