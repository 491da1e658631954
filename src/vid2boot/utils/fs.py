"""Filesystem helpers: writability probes, executable lookup, frame listing."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

Which = Callable[[str], Optional[str]]


def is_writable_dir(path: Path) -> bool:
    """True if ``path`` is an existing directory the process may create entries in."""
    return path.is_dir() and os.access(path, os.W_OK | os.X_OK)


def resolve_executable(configured: str, which: Which) -> str | None:
    """Resolve a tool either as an existing file path or through command lookup.

    Returns the path to invoke, or None if the tool cannot be found.
    """
    if not configured:
        return None
    if Path(configured).is_file():
        return str(Path(configured))
    found = which(configured)
    if found:
        logger.debug(f"Resolved '{configured}' -> {found}")
    return found


def list_frame_files(frames_dir: Path) -> list[Path]:
    """Return the frame files of ``frames_dir`` sorted by file name.

    Extracted frames are named with fixed-width indices, so name order is
    temporal order.
    """
    return sorted((p for p in frames_dir.iterdir() if p.is_file()), key=lambda p: p.name)
