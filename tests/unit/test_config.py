"""Tests for configuration system."""
from pathlib import Path

import pytest

from sessmux.config import (
    Config, ConfigStore, default_config, dump_config, parse_config,
)
from sessmux.errors import ConfigLoadError


def test_default_config_tmux(isolated_home):
    """Test default tmux configuration values."""
    config = default_config("tmux")

    assert config.session_file_enabled is False
    assert config.attach_after_creation is False
    assert config.session_file_path == str(isolated_home / ".tmux_session_manager_savefile.sav")
    assert config.config_file_path == str(isolated_home / ".tmux_session_manager_settings.conf")
    assert config.layout_folder is None
    assert config.program_base_folder is None


def test_default_config_zellij(isolated_home):
    """Test zellij defaults live under the program base folder."""
    config = default_config("zellij")
    base = isolated_home / ".zellij_session_manager"

    assert config.session_file_path == str(base / "zellij_session_manager_savefile.sav")
    assert config.layout_folder == str(base / ".zellij_layouts")
    assert config.program_base_folder == str(base)


def test_default_config_env_override(monkeypatch, tmp_path):
    """Test SESSMUX_CONFIG_FILE overrides the config path."""
    monkeypatch.setenv("SESSMUX_CONFIG_FILE", str(tmp_path / "custom.conf"))

    assert default_config().config_file_path == str(tmp_path / "custom.conf")


def test_parse_config():
    """Test key=value parsing over defaults."""
    defaults = Config(session_file_path="/default.sav", config_file_path="/default.conf")
    text = "saving_enabled=true\nsession_file_path=/data/s.sav\nattach_after_creation=false\n"

    config = parse_config(text, defaults)

    assert config.session_file_enabled is True
    assert config.session_file_path == "/data/s.sav"
    assert config.attach_after_creation is False
    # Unspecified keys keep their defaults
    assert config.config_file_path == "/default.conf"


def test_parse_config_ignores_unknown_keys_and_blank_lines():
    defaults = Config(session_file_path="/s", config_file_path="/c")
    config = parse_config("\nlast_session=dev\n\nsaving_enabled=yes\n", defaults)

    assert config.session_file_enabled is True


def test_parse_config_strips_values():
    defaults = Config(session_file_path="/s", config_file_path="/c")

    config = parse_config("session_file_path= /x \nsaving_enabled = true\nprogram_base_folder=/base\n", defaults)

    assert config.session_file_path == "/x"
    assert config.session_file_enabled is True
    assert config.program_base_folder == "/base"


def test_parse_config_value_may_contain_equals():
    defaults = Config(session_file_path="/s", config_file_path="/c")
    config = parse_config("session_file_path=/tmp/a=b.sav\n", defaults)

    assert config.session_file_path == "/tmp/a=b.sav"


@pytest.mark.parametrize("text", [
    "saving_enabled\n",
    "saving_enabled=maybe\n",
])
def test_parse_config_corrupt(text):
    defaults = Config(session_file_path="/s", config_file_path="/c")
    with pytest.raises(ConfigLoadError):
        parse_config(text, defaults)


def test_dump_config():
    """Test config file layout."""
    config = Config(session_file_enabled=True, session_file_path="/s.sav",
                    config_file_path="/c.conf")

    assert dump_config(config) == (
        "saving_enabled=true\n"
        "session_file_path=/s.sav\n"
        "config_file_path=/c.conf\n"
        "attach_after_creation=false\n"
    )


def test_dump_config_includes_layout_folder():
    config = Config(session_file_path="/s", config_file_path="/c", layout_folder="/layouts")

    assert dump_config(config).endswith("layout_folder=/layouts\n")


class TestConfigStore:
    """Tests for ConfigStore."""

    def test_load_missing_file_persists_defaults(self, tmp_path):
        path = tmp_path / "sub" / "manager.conf"
        store = ConfigStore(Config(session_file_path="/s", config_file_path=str(path)))

        config = store.load()

        assert config.session_file_enabled is False
        assert path.exists()
        assert "saving_enabled=false" in path.read_text()
        assert store.pop_notices() == ["No configuration file found. Using default settings."]

    def test_load_existing_file(self, tmp_path):
        path = tmp_path / "manager.conf"
        path.write_text("saving_enabled=true\nattach_after_creation=true\n")
        store = ConfigStore(Config(session_file_path="/s", config_file_path=str(path)))

        config = store.load()

        assert config.session_file_enabled is True
        assert config.attach_after_creation is True
        assert store.pop_notices() == []

    def test_load_corrupt_file_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "manager.conf"
        path.write_text("this is not a config\n")
        store = ConfigStore(Config(session_file_enabled=False, session_file_path="/s",
                                   config_file_path=str(path)))

        config = store.load()

        assert config.session_file_enabled is False
        # Corrupt file is left untouched
        assert path.read_text() == "this is not a config\n"
        notices = store.pop_notices()
        assert len(notices) == 1
        assert "invalid" in notices[0]

    def test_load_uses_store_path_for_config_file_path(self, tmp_path):
        path = tmp_path / "manager.conf"
        store = ConfigStore(Config(session_file_path="/s", config_file_path="/elsewhere"), str(path))

        assert store.load().config_file_path == str(path)

    def test_save_failure_is_tolerated(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        store = ConfigStore(Config(session_file_path="/s", config_file_path=str(blocker / "manager.conf")))

        config = store.load()

        assert config.session_file_enabled is False
        assert store.save() is False
        assert any("Could not save" in n for n in store.pop_notices())

    def test_toggle_saves_immediately(self, store):
        assert store.toggle("session_file_enabled") is True
        assert "saving_enabled=true" in store.path.read_text()

    def test_toggle_twice_restores_original(self, store):
        original = store.config.session_file_enabled
        store.toggle("session_file_enabled")
        store.toggle("session_file_enabled")

        assert store.config.session_file_enabled is original
        reloaded = ConfigStore(store.defaults, str(store.path)).load()
        assert reloaded.session_file_enabled is original

    def test_toggle_rejects_non_boolean(self, store):
        with pytest.raises(ValueError):
            store.toggle("session_file_path")

    def test_set_path(self, store, tmp_path):
        assert store.set_path("session_file_path", str(tmp_path / "other.sav")) is True
        assert f"session_file_path={tmp_path / 'other.sav'}" in store.path.read_text()

    def test_set_path_empty_is_noop(self, store):
        before = store.config.session_file_path

        assert store.set_path("session_file_path", "   ") is False
        assert store.config.session_file_path == before

    def test_set_config_file_path_moves_store(self, store, tmp_path):
        new_path = tmp_path / "moved.conf"

        store.set_path("config_file_path", str(new_path))

        assert store.path == new_path
        assert new_path.exists()
        assert f"config_file_path={new_path}" in new_path.read_text()

    def test_path_expansion(self, isolated_home):
        store = ConfigStore(Config(session_file_path="/s", config_file_path="~/manager.conf"))

        assert store.path == Path(isolated_home) / "manager.conf"

    def test_load_ignores_config_file_path_from_file(self, tmp_path):
        path = tmp_path / "manager.conf"
        path.write_text("session_file_path= /x\nconfig_file_path=/elsewhere.conf\n")
        store = ConfigStore(Config(session_file_path="/s", config_file_path=str(path)))

        config = store.load()
        store.save()

        assert config.session_file_path == "/x"
        assert config.config_file_path == str(path)
        assert f"config_file_path={path}\n" in path.read_text()
        assert "/elsewhere.conf" not in path.read_text()

    def test_ensure_folders_creates_missing(self, store, tmp_path):
        store.config.program_base_folder = str(tmp_path / "base")
        store.config.layout_folder = str(tmp_path / "base" / "layouts")

        store.ensure_folders()

        assert (tmp_path / "base" / "layouts").is_dir()
        assert store.pop_notices() == []

    def test_ensure_folders_failure_is_reported(self, store, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        store.config.program_base_folder = str(blocker / "base")

        store.ensure_folders()

        assert any("Could not create folder" in n for n in store.pop_notices())
