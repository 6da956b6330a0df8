"""Configuration loading for buildstamp projects."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "buildstamp.yaml"
VALID_PROFILES = ("release", "debug")


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class BuildConfig:
    """Build output configuration.

    Output directories are laid out as:
    - {out}/{host}/stage{N}-std/{target}/{profile}/.libstd-stamp
    - {out}/{host}/stage{N}-codegen/{target}/{profile}/.librustc_codegen_{backend}-stamp
    """

    out: str = "build/"
    build: str | None = None
    profile: str = "release"
    verbose: bool = False
    root_path: Path = field(default_factory=Path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], root_path: Path) -> BuildConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.
            root_path: Root directory containing the config file.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a field has an invalid value.
        """
        profile = data.get("profile", "release")
        if profile not in VALID_PROFILES:
            raise ConfigError(
                f"Invalid profile {profile!r}, expected one of: {', '.join(VALID_PROFILES)}"
            )

        verbose = data.get("verbose", False)
        if not isinstance(verbose, bool):
            raise ConfigError(f"'verbose' must be a boolean, got {type(verbose).__name__}")

        build = data.get("build")
        if build is not None and not isinstance(build, str):
            raise ConfigError(f"'build' must be a target triple, got {type(build).__name__}")

        return cls(
            out=str(data.get("out", "build/")),
            build=build,
            profile=profile,
            verbose=verbose,
            root_path=root_path,
        )

    def get_out_path(self) -> Path:
        """Get absolute path to the build output root.

        Returns:
            The 'out' directory resolved against the config directory.
        """
        return (self.root_path / self.out).absolute()


def load_config(config_path: Path | str) -> BuildConfig:
    """Load buildstamp configuration from a YAML file.

    Args:
        config_path: Path to buildstamp.yaml file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return BuildConfig.from_dict(data, config_path.parent)


def find_config(start_path: Path | str | None = None) -> Path:
    """Find buildstamp.yaml by walking up directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to buildstamp.yaml file.

    Raises:
        ConfigError: If no config file is found.
    """
    if start_path is None:
        start_path = Path.cwd()
    else:
        start_path = Path(start_path)

    current = start_path.resolve()

    while current != current.parent:
        config_path = current / CONFIG_FILENAME
        if config_path.exists():
            return config_path
        current = current.parent

    # Check root
    config_path = current / CONFIG_FILENAME
    if config_path.exists():
        return config_path

    raise ConfigError(f"No {CONFIG_FILENAME} found in {start_path} or any parent directory")
