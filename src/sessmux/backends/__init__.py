"""Multiplexer backends."""
from typing import Dict, Type

from .base import MultiplexerBackend
from .tmux import TmuxBackend
from .zellij import ZellijBackend

BACKENDS: Dict[str, Type[MultiplexerBackend]] = {
    TmuxBackend.name: TmuxBackend,
    ZellijBackend.name: ZellijBackend,
}


def get_backend(name: str) -> MultiplexerBackend:
    """Create a backend by name."""
    try:
        return BACKENDS[name]()
    except KeyError:
        raise ValueError(f"Unknown backend: {name}")


__all__ = ["MultiplexerBackend", "TmuxBackend", "ZellijBackend", "BACKENDS", "get_backend"]
