"""Request-path sanitizing and the filesystem loaders used by the server."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

PARENT_DIR = ".."


def sanitize_path(raw: str) -> Optional[Path]:
    """Turn a user-supplied path into a safe relative path.

    Returns None for empty input, absolute paths, and anything with a
    ``..`` segment. The root of a base directory ("" or "/") is handled by
    the caller and never reaches this function.
    """
    trimmed = raw.strip()
    if not trimmed or Path(trimmed).is_absolute():
        logger.warning("[Serve] Invalid or absolute path attempt: %r", raw)
        return None

    path = Path(trimmed)
    if PARENT_DIR in path.parts:
        logger.warning("[Serve] Unsafe path traversal attempt: %r", raw)
        return None

    return path


def load_text(path: Path) -> Optional[str]:
    """Read a UTF-8 file, or None if it is missing or unreadable."""
    logger.debug("Loading file: %s", path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not load %s: %s", path, e)
        return None


def load_binary(path: Path) -> Optional[bytes]:
    """Read a file as raw bytes, or None if it is missing or unreadable."""
    logger.debug("Loading binary file: %s", path)
    try:
        return path.read_bytes()
    except OSError as e:
        logger.debug("Could not load %s: %s", path, e)
        return None
