"""Custom exceptions for build stamps."""


class StampError(Exception):
    """Base exception for stamp errors."""


class StampReadError(StampError):
    """Stamp file exists but could not be read."""


class BuildEnvironmentError(StampError):
    """Output directory or its stamp file could not be created."""


class InvalidStampPrefixError(AssertionError):
    """Stamp prefix starts or ends with '.'. Always a bug in the caller."""
