"""Directory invalidation driven by stamp modification times."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from buildstamp.stamp.exceptions import BuildEnvironmentError
from buildstamp.stamp.mtime import mtime_ns
from buildstamp.stamp.stamp import BuildStamp

logger = logging.getLogger("buildstamp.stamp")


class VerboseSink(Protocol):
    """Anything that can emit verbose notices, such as a Builder."""

    def verbose(self, message: Callable[[], str]) -> None: ...


def clear_if_dirty(
    builder: VerboseSink,
    directory: str | os.PathLike[str],
    input_path: str | os.PathLike[str],
) -> bool:
    """Clear out a directory if its input is newer than its stamp.

    A missing stamp counts as older than any input. Afterwards the directory
    and its (empty) '.stamp' file are guaranteed to exist.

    Args:
        builder: Sink for the "Dirty - {directory}" notice.
        directory: Output directory to check.
        input_path: File whose modification time the outputs depend on.

    Returns:
        True if the directory was wiped.

    Raises:
        BuildEnvironmentError: If the directory or its stamp can't be created.
    """
    directory = Path(directory)
    stamp = BuildStamp.from_dir(directory)
    cleared = False

    if mtime_ns(stamp.path) < mtime_ns(input_path):
        builder.verbose(lambda: f"Dirty - {directory}")
        # Best effort. A symlinked directory loses the link, not its target.
        if directory.is_symlink():
            try:
                directory.unlink(missing_ok=True)
            except OSError:
                logger.warning("Could not unlink %s", directory)
        else:
            shutil.rmtree(directory, ignore_errors=True)
        cleared = True
    elif stamp.exists():
        return cleared

    try:
        directory.mkdir(parents=True, exist_ok=True)
        stamp.write()
    except OSError as e:
        raise BuildEnvironmentError(f"failed to restamp `{directory}`: {e}") from e

    logger.debug("Stamped %s (cleared=%s)", directory, cleared)
    return cleared
