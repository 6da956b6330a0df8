"""BuildStamp - Marker file recording the expected build state of a directory.

A stamp is a path plus an opaque content string. The file on disk is the only
durable state: every query re-reads the filesystem.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from buildstamp.stamp.exceptions import InvalidStampPrefixError, StampReadError

logger = logging.getLogger("buildstamp.stamp")

DEFAULT_STAMP_NAME = ".stamp"


def prefixed_stamp_name(filename: str, prefix: str) -> str:
    """Rewrite a stamp filename to carry a prefix.

    One leading dot is stripped from the filename before re-prefixing, so
    prefixes compose: ".stamp" -> ".libstd-stamp" -> ".extra-libstd-stamp".

    Args:
        filename: Current stamp filename.
        prefix: Prefix to add. Must not start or end with '.'.

    Returns:
        The new filename, ".{prefix}-{filename without its leading dot}".

    Raises:
        InvalidStampPrefixError: If prefix starts or ends with '.'.
    """
    if prefix.startswith(".") or prefix.endswith("."):
        raise InvalidStampPrefixError(f"prefix can not start or end with '.': {prefix!r}")

    base = filename[1:] if filename.startswith(".") else filename
    return f".{prefix}-{base}"


@dataclass(frozen=True)
class BuildStamp:
    """Stamp file tracking the build state of a directory.

    Two stamps are equal when their paths are equal; content only matters
    when checking freshness.
    """

    path: Path
    content: str = field(default="", compare=False)

    @classmethod
    def from_dir(cls, directory: str | os.PathLike[str]) -> BuildStamp:
        """Create a stamp named '.stamp' inside directory, with empty content."""
        return cls(path=Path(directory) / DEFAULT_STAMP_NAME)

    def __fspath__(self) -> str:
        return os.fspath(self.path)

    def with_content(self, value: object) -> BuildStamp:
        """Return a copy whose content is str(value)."""
        return replace(self, content=str(value))

    def with_prefix(self, prefix: str) -> BuildStamp:
        """Return a copy whose filename is prefixed.

        Raises:
            InvalidStampPrefixError: If prefix starts or ends with '.'.
        """
        return replace(self, path=self.path.with_name(prefixed_stamp_name(self.path.name, prefix)))

    def exists(self) -> bool:
        """Check whether the stamp file is present."""
        return self.path.exists()

    def write(self) -> None:
        """Create or overwrite the stamp file with the current content.

        Raises:
            OSError: If the directory is missing or not writable.
        """
        # Raw bytes, no newline translation
        self.path.write_bytes(self.content.encode("utf-8"))
        logger.debug("Wrote stamp %s", self.path)

    def remove(self) -> None:
        """Remove the stamp file. A missing file is not an error.

        Raises:
            OSError: If the file exists but can't be removed.
        """
        self.path.unlink(missing_ok=True)
        logger.debug("Removed stamp %s", self.path)

    def is_up_to_date(self) -> bool:
        """Check if the stamp file content matches the expected content.

        Returns:
            True if the file exists and holds exactly this stamp's content.

        Raises:
            StampReadError: If the file exists but can't be read.
        """
        try:
            recorded = self.path.read_bytes()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StampReadError(f"failed to read stamp file `{self.path}`: {e}") from e

        return recorded == self.content.encode("utf-8")
