"""Utility functions for sessmux."""
import os
import re
from pathlib import Path
from typing import Union

ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;?]*[A-Za-z]')

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


def strip_ansi(text: str) -> str:
    """
    Remove ANSI color and cursor escape sequences from text.

    Args:
        text: Raw terminal output

    Returns:
        The text without escape sequences

    Example:
        >>> strip_ansi("\\x1b[32;1mdev\\x1b[m [Created 1h ago]")
        'dev [Created 1h ago]'
    """
    return ANSI_ESCAPE.sub('', text)


def parse_bool(value: str) -> bool:
    """
    Parse a boolean from a config or environment value.

    Args:
        value: One of true/false, 1/0, yes/no, on/off (any case)

    Returns:
        The parsed boolean

    Raises:
        ValueError: If the value is not a recognised boolean
    """
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def format_bool(value: bool) -> str:
    """Format a boolean the way the config file stores it."""
    return "true" if value else "false"


def expand_path(path: Union[str, Path]) -> Path:
    """Expand ~ and environment variables in a path."""
    return Path(os.path.expandvars(str(path))).expanduser()
