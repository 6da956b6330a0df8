"""buildstamp - Stamp files for deciding when build outputs must be rebuilt."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the current version of buildstamp."""
    return __version__
