"""Stamp files - Track whether build output directories are still valid."""

from buildstamp.stamp.artifacts import (
    OutputResolver,
    codegen_backend_stamp,
    librustc_stamp,
    libstd_stamp,
)
from buildstamp.stamp.exceptions import (
    BuildEnvironmentError,
    InvalidStampPrefixError,
    StampError,
    StampReadError,
)
from buildstamp.stamp.invalidate import VerboseSink, clear_if_dirty
from buildstamp.stamp.mtime import MISSING_MTIME_NS, mtime_ns
from buildstamp.stamp.stamp import DEFAULT_STAMP_NAME, BuildStamp, prefixed_stamp_name

__all__ = [
    "DEFAULT_STAMP_NAME",
    "MISSING_MTIME_NS",
    "BuildEnvironmentError",
    "BuildStamp",
    "InvalidStampPrefixError",
    "OutputResolver",
    "StampError",
    "StampReadError",
    "VerboseSink",
    "clear_if_dirty",
    "codegen_backend_stamp",
    "librustc_stamp",
    "libstd_stamp",
    "mtime_ns",
    "prefixed_stamp_name",
]
