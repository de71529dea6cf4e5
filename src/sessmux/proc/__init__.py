"""Process utilities."""
import logging
import subprocess
from typing import List

from ..errors import ExternalToolError

logger = logging.getLogger(__name__)


def run(cmd: List[str], check: bool = True, **kwargs) -> subprocess.CompletedProcess:
    """Run a subprocess synchronously with automatic logging.

    Args:
        cmd: Command to run as list of strings
        check: Raise ExternalToolError on a nonzero exit code
        **kwargs: Additional arguments passed to subprocess.run

    Returns:
        CompletedProcess result

    Raises:
        ExternalToolError: If the binary is missing, or if check is set and
            the command exits nonzero
    """
    logger.debug(f"Running: {' '.join(cmd)}")

    # Capture output by default for logging
    kwargs.setdefault('capture_output', True)
    kwargs.setdefault('text', True)

    try:
        result = subprocess.run(cmd, **kwargs)
    except FileNotFoundError:
        logger.error(f"Command not found: {cmd[0]}")
        raise ExternalToolError(cmd)

    if result.stdout:
        logger.debug(f"stdout: {result.stdout.strip()}")
    if result.stderr:
        logger.debug(f"stderr: {result.stderr.strip()}")

    if result.returncode != 0:
        if check:
            logger.error(f"Command failed with exit code {result.returncode}: {' '.join(cmd)}")
            raise ExternalToolError(cmd, result.returncode, result.stderr or "")
        logger.debug(f"Command exited {result.returncode}: {' '.join(cmd)}")
    else:
        logger.debug(f"Command succeeded: {' '.join(cmd)}")

    return result


def run_foreground(cmd: List[str]) -> int:
    """Hand the terminal to a child process and wait for it to exit.

    Output is not captured; the child owns stdin/stdout until it returns.

    Returns:
        The child's exit code
    """
    logger.debug(f"Running in foreground: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd)
    except FileNotFoundError:
        logger.error(f"Command not found: {cmd[0]}")
        raise ExternalToolError(cmd)

    logger.debug(f"Foreground command exited {result.returncode}: {' '.join(cmd)}")
    if result.returncode != 0:
        raise ExternalToolError(cmd, result.returncode)
    return result.returncode
