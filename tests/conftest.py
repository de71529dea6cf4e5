"""Shared test fixtures."""
import itertools
from typing import Dict, List, Optional

import pytest

from sessmux.backends import MultiplexerBackend
from sessmux.config import ConfigStore, default_config
from sessmux.models import Pane, Window
from sessmux.state import ManagerState


class FakeBackend(MultiplexerBackend):
    """In-memory multiplexer."""

    name = "fake"
    supports_rename = True
    supports_windows = True

    def __init__(self, start_path: str = "/home/user"):
        self.start_path = start_path
        self.sessions: Dict[str, List[Window]] = {}
        self.attached: List[str] = []
        self.created_layouts: List[Optional[str]] = []
        self.window_layouts: Dict[str, str] = {}
        self._ids = itertools.count()

    def _window(self, target: str) -> Window:
        for windows in self.sessions.values():
            for window in windows:
                if window.id == target:
                    return window
        raise KeyError(target)

    def _new_window(self, name: str) -> Window:
        return Window(id=f"@{next(self._ids)}", name=name,
                      panes=[Pane(id=f"%{next(self._ids)}", path=self.start_path)])

    def add_session(self, name: str) -> None:
        self.sessions[name] = [self._new_window("bash")]

    def list_sessions(self) -> List[str]:
        return list(self.sessions)

    def create_session(self, name, window_name=None, layout=None):
        window = self._new_window(window_name or "bash")
        self.sessions[name] = [window]
        self.created_layouts.append(layout)
        return window.id

    def kill_session(self, name):
        del self.sessions[name]

    def rename_session(self, name, new_name):
        self.sessions = {(new_name if key == name else key): value
                         for key, value in self.sessions.items()}

    def attach_session(self, name):
        self.attached.append(name)

    def list_windows(self, session):
        return [window.model_copy(deep=True) for window in self.sessions[session]]

    def new_window(self, session, name):
        window = self._new_window(name)
        self.sessions[session].append(window)
        return window.id

    def rename_window(self, target, name):
        self._window(target).name = name

    def change_directory(self, target, path):
        self._window(target).panes[-1].path = path

    def split_pane(self, target, path):
        self._window(target).panes.append(Pane(id=f"%{next(self._ids)}", path=path))

    def set_layout(self, target, layout):
        self.window_layouts[target] = layout


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point $HOME at a temp dir and clear sessmux env overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("SESSMUX_CONFIG_FILE", "SESSMUX_BACKEND", "SESSMUX_LOG_LEVEL", "SESSMUX_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def backend():
    """Provide an empty in-memory multiplexer."""
    return FakeBackend()


@pytest.fixture
def store(tmp_path):
    """Provide a loaded config store writing under tmp_path."""
    defaults = default_config("tmux").model_copy(update={
        "session_file_path": str(tmp_path / "sessions.sav"),
        "config_file_path": str(tmp_path / "manager.conf"),
    })
    store = ConfigStore(defaults)
    store.load()
    store.pop_notices()
    return store


@pytest.fixture
def state(backend, store):
    """Provide manager state over the fake backend."""
    return ManagerState(backend=backend, store=store)
