"""
Small filesystem helpers.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def file_exists(path: str) -> bool:
    """Return True if path exists and is a regular file."""
    return Path(path).is_file()


def write_file(path: str, contents: str) -> None:
    """Write text contents to path, replacing any existing file."""
    Path(path).write_text(contents)


def remove_file(path: str) -> bool:
    """Remove a file, returning False instead of raising if it cannot be removed."""
    try:
        Path(path).unlink()
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning(f"Failed to remove {path}: {e}")
        return False
