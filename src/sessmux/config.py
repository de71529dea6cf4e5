"""Configuration store for sessmux.

Settings live in a flat ``key=value`` file that is rewritten on every
change. Missing or corrupt files fall back to backend defaults.
"""
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field

from .errors import ConfigLoadError
from .utils import expand_path, format_bool, parse_bool

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "SESSMUX_CONFIG_FILE"

# Config field -> key in the config file
FILE_KEYS: Dict[str, str] = {
    "session_file_enabled": "saving_enabled",
    "session_file_path": "session_file_path",
    "config_file_path": "config_file_path",
    "attach_after_creation": "attach_after_creation",
    "layout_folder": "layout_folder",
    "program_base_folder": "program_base_folder",
}

BOOL_FIELDS = ("session_file_enabled", "attach_after_creation")
PATH_FIELDS = ("session_file_path", "config_file_path", "layout_folder", "program_base_folder")


class Config(BaseModel):
    """Session manager settings."""

    session_file_enabled: bool = Field(False, description="Write session snapshots to the session file")
    attach_after_creation: bool = Field(False, description="Attach to a session right after creating it")
    session_file_path: str = Field(..., description="Path of the session snapshot file")
    config_file_path: str = Field(..., description="Path of this config file")
    layout_folder: Optional[str] = Field(None, description="Folder of Zellij .kdl layouts")
    program_base_folder: Optional[str] = Field(None, description="Folder holding the Zellij manager's own files")


def default_config(backend: str = "tmux") -> Config:
    """Return the default settings for a backend."""
    home = Path.home()

    if backend == "zellij":
        base = home / ".zellij_session_manager"
        config = Config(
            session_file_path=str(base / "zellij_session_manager_savefile.sav"),
            config_file_path=str(base / ".zellij_session_manager_settings.conf"),
            layout_folder=str(base / ".zellij_layouts"),
            program_base_folder=str(base),
        )
    else:
        config = Config(
            session_file_path=str(home / ".tmux_session_manager_savefile.sav"),
            config_file_path=str(home / ".tmux_session_manager_settings.conf"),
        )

    env_path = os.environ.get(CONFIG_FILE_ENV)
    if env_path:
        config.config_file_path = env_path

    return config


def parse_config(text: str, defaults: Config) -> Config:
    """Parse ``key=value`` lines over a set of defaults.

    Unknown keys are ignored. Blank lines are skipped.

    Raises:
        ConfigLoadError: On a line without ``=`` or a malformed boolean
    """
    by_key = {key: field for field, key in FILE_KEYS.items()}
    values = defaults.model_dump()

    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line:
            continue
        if "=" not in line:
            raise ConfigLoadError(f"Line {lineno}: expected key=value, got {line!r}")

        key, value = (part.strip() for part in line.split("=", 1))
        field = by_key.get(key)
        if field is None:
            logger.debug(f"Ignoring unknown config key: {key}")
            continue

        if field in BOOL_FIELDS:
            try:
                values[field] = parse_bool(value)
            except ValueError as e:
                raise ConfigLoadError(f"Line {lineno}: {e}")
        else:
            values[field] = value

    return Config(**values)


def dump_config(config: Config) -> str:
    """Format a config as ``key=value`` lines."""
    lines = []
    for field, key in FILE_KEYS.items():
        value = getattr(config, field)
        if value is None:
            continue
        if field in BOOL_FIELDS:
            value = format_bool(value)
        lines.append(f"{key}={value}")
    return "\n".join(lines) + "\n"


class ConfigStore:
    """Loads, saves and mutates the session manager config."""

    def __init__(self, defaults: Config, path: Optional[str] = None):
        """Initialize store.

        Args:
            defaults: Settings used when the file is missing or corrupt
            path: Config file path; defaults to defaults.config_file_path
        """
        self.defaults = defaults
        self.path = expand_path(path or defaults.config_file_path)
        self.config: Optional[Config] = None
        self.notices = []

    def _defaults(self) -> Config:
        return self.defaults.model_copy(update={"config_file_path": str(self.path)})

    def load(self) -> Config:
        """Read the config file, falling back to defaults.

        A missing file is created with the defaults. A corrupt file is left
        alone; defaults are used and a notice is recorded.
        """
        if not self.path.exists():
            logger.info(f"No configuration file at {self.path}, using defaults")
            self.notices.append("No configuration file found. Using default settings.")
            self.config = self._defaults()
            self.save(self.config)
            return self.config

        try:
            try:
                text = self.path.read_text()
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigLoadError(f"Cannot read {self.path}: {e}")
            config = parse_config(text, self._defaults())
            # The file being read is the config file, whatever it says
            self.config = config.model_copy(update={"config_file_path": str(self.path)})
        except ConfigLoadError as e:
            logger.warning(f"Invalid configuration file {self.path}: {e}")
            self.notices.append(f"Configuration file {self.path} is invalid, using defaults.")
            self.config = self._defaults()
            return self.config

        logger.info(f"Configuration restored from {self.path}")
        return self.config

    def save(self, config: Optional[Config] = None) -> bool:
        """Overwrite the config file with the current settings.

        Returns:
            False if the file could not be written
        """
        if config is not None:
            self.config = config
        if self.config is None:
            raise RuntimeError("No configuration loaded")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(dump_config(self.config))
        except OSError as e:
            logger.warning(f"Cannot write configuration file {self.path}: {e}")
            self.notices.append(f"Could not save configuration to {self.path}; settings will not persist.")
            return False

        logger.debug(f"Configuration saved to {self.path}")
        return True

    def toggle(self, field: str) -> bool:
        """Flip a boolean setting and save.

        Returns:
            The new value
        """
        if field not in BOOL_FIELDS:
            raise ValueError(f"Not a boolean setting: {field}")

        value = not getattr(self.config, field)
        setattr(self.config, field, value)
        self.save()
        return value

    def set_path(self, field: str, value: str) -> bool:
        """Set a path setting and save.

        Empty values leave the setting unchanged. Changing the config file
        path moves the store itself.

        Returns:
            True if the setting changed
        """
        if field not in PATH_FIELDS:
            raise ValueError(f"Not a path setting: {field}")

        value = value.strip()
        if not value:
            return False

        setattr(self.config, field, value)
        if field == "config_file_path":
            self.path = expand_path(value)
        self.save()
        return True

    def ensure_folders(self) -> None:
        """Create the program base and layout folders if they are missing."""
        config = self.config or self.load()
        for field in ("program_base_folder", "layout_folder"):
            value = getattr(config, field)
            if not value:
                continue
            folder = expand_path(value)
            if folder.is_dir():
                continue
            try:
                folder.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.warning(f"Cannot create {folder}: {e}")
                self.notices.append(f"Could not create folder {folder}.")
                continue
            logger.info(f"Created folder {folder}")

    def pop_notices(self):
        """Return and clear pending user notices."""
        notices, self.notices = self.notices, []
        return notices
