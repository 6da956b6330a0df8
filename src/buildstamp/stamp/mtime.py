"""Modification time lookup with an explicit sentinel for missing files."""

from __future__ import annotations

import os
from pathlib import Path

# Oldest representable 64-bit nanosecond timestamp. Any existing file is newer.
MISSING_MTIME_NS = -(2**63)


def mtime_ns(path: str | os.PathLike[str]) -> int:
    """Get a file's modification time in nanoseconds.

    Args:
        path: File to inspect.

    Returns:
        The modification time, or MISSING_MTIME_NS if the file can't be stat'ed.
    """
    try:
        return Path(path).stat().st_mtime_ns
    except OSError:
        return MISSING_MTIME_NS
