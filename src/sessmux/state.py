"""Runtime state of a session manager instance."""
from dataclasses import dataclass, field
from typing import List

from .backends import MultiplexerBackend
from .config import Config, ConfigStore


@dataclass
class ManagerState:
    """Everything the menu loop and its actions share."""
    backend: MultiplexerBackend
    store: ConfigStore
    sessions: List[str] = field(default_factory=list)

    @property
    def config(self) -> Config:
        if self.store.config is None:
            self.store.load()
        return self.store.config
