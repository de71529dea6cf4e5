"""Zellij layout discovery."""
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .utils import expand_path

logger = logging.getLogger(__name__)

LAYOUT_SUFFIX = ".kdl"


def scan_layouts(folder: Union[str, Path, None]) -> Dict[str, Path]:
    """
    Find layout files in a folder.

    Args:
        folder: Directory holding ``*.kdl`` files (not searched recursively)

    Returns:
        Mapping of layout name (file stem) to absolute path, sorted by name.
        Empty if the folder is unset or missing.
    """
    if not folder:
        return {}

    path = expand_path(folder)
    if not path.is_dir():
        logger.debug(f"Layout folder does not exist: {path}")
        return {}

    layouts = {f.stem: f.resolve() for f in path.iterdir()
               if f.is_file() and f.suffix == LAYOUT_SUFFIX}
    return dict(sorted(layouts.items()))


def resolve_layout(choice: str, layouts: Dict[str, Path]) -> Optional[Path]:
    """
    Pick a layout by 1-based index or by name.

    Args:
        choice: User input; empty means no layout
        layouts: Result of scan_layouts()

    Returns:
        The layout path, or None if the choice is empty or matches nothing
    """
    choice = choice.strip()
    if not choice:
        return None

    names = list(layouts)
    if choice.isdigit() and 0 < int(choice) <= len(names):
        return layouts[names[int(choice) - 1]]
    return layouts.get(choice)
