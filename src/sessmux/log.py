"""Logging setup for sessmux."""
import logging
import os
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_level: Optional[str] = None, log_file: Optional[str] = None,
                  interactive: bool = False) -> None:
    """Configure logging for the application.

    Interactive sessions only log to a file, since console output would
    interleave with the menu. Without a log file they log nowhere.
    """
    log_level = (log_level or os.getenv('SESSMUX_LOG_LEVEL', 'WARNING')).upper()
    log_file = log_file or os.getenv('SESSMUX_LOG_FILE')

    handlers = []
    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))
    elif interactive:
        handlers.append(logging.NullHandler())
    else:
        handlers.append(logging.StreamHandler())  # stderr

    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True  # Override any existing config
    )

    logging.getLogger('sessmux').setLevel(getattr(logging, log_level, logging.WARNING))
