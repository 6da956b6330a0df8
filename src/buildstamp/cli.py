"""CLI entry point for buildstamp.

Lets shell-driven builds query and maintain stamp files:
- path/check/write/remove: operate on a single stamp
- clear-if-dirty: wipe an output directory whose input changed
- artifact: print where a build product's stamp lives
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import click

from buildstamp import __version__
from buildstamp.builder import Builder, Compiler, TargetSelection
from buildstamp.config import BuildConfig, ConfigError, find_config, load_config
from buildstamp.logging import get_logger, setup_logging
from buildstamp.stamp import (
    BuildStamp,
    InvalidStampPrefixError,
    StampError,
    clear_if_dirty,
    codegen_backend_stamp,
    librustc_stamp,
    libstd_stamp,
)

ARTIFACT_KINDS = ("libstd", "librustc", "codegen")

logger = get_logger("cli")

config_option = click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to buildstamp.yaml (auto-detected if not specified)",
)
prefix_option = click.option("--prefix", default=None, help="Stamp name prefix, e.g. 'libstd'")
content_option = click.option("--content", default="", help="Expected stamp content")
directory_argument = click.argument(
    "directory", type=click.Path(file_okay=False, path_type=Path)
)


def load_build_config(config_path: Path | None) -> BuildConfig:
    """Load configuration, falling back to defaults when none is found.

    Args:
        config_path: Explicit config file, or None to search upwards.

    Returns:
        The loaded or default configuration.

    Raises:
        ConfigError: If an explicit or discovered config file is invalid.
    """
    if config_path is None:
        try:
            config_path = find_config()
        except ConfigError:
            logger.debug("No config file found, using defaults")
            return BuildConfig(root_path=Path.cwd())
    return load_config(config_path)


def make_stamp(directory: Path, prefix: str | None, content: str = "") -> BuildStamp:
    """Build the stamp addressed by command-line arguments."""
    stamp = BuildStamp.from_dir(directory).with_content(content)
    if prefix is not None:
        stamp = stamp.with_prefix(prefix)
    return stamp


def fail(message: str, code: int) -> NoReturn:
    """Print an error and exit."""
    click.echo(message, err=True)
    sys.exit(code)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """buildstamp - track whether build outputs are still valid."""
    setup_logging(level="DEBUG" if verbose else None)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@directory_argument
@prefix_option
def path(directory: Path, prefix: str | None) -> None:
    """Print the stamp path for DIRECTORY."""
    try:
        click.echo(str(make_stamp(directory, prefix).path))
    except InvalidStampPrefixError as e:
        fail(f"Invalid prefix: {e}", 2)


@main.command()
@directory_argument
@prefix_option
@content_option
def check(directory: Path, prefix: str | None, content: str) -> None:
    """Exit 0 if the stamp in DIRECTORY holds CONTENT, 1 otherwise."""
    try:
        up_to_date = make_stamp(directory, prefix, content).is_up_to_date()
    except InvalidStampPrefixError as e:
        fail(f"Invalid prefix: {e}", 2)
    except StampError as e:
        fail(f"Stamp error: {e}", 2)

    click.echo("up-to-date" if up_to_date else "stale")
    if not up_to_date:
        sys.exit(1)


@main.command()
@directory_argument
@prefix_option
@content_option
def write(directory: Path, prefix: str | None, content: str) -> None:
    """Write the stamp in DIRECTORY with CONTENT."""
    try:
        stamp = make_stamp(directory, prefix, content)
        stamp.write()
    except InvalidStampPrefixError as e:
        fail(f"Invalid prefix: {e}", 2)
    except OSError as e:
        fail(f"Failed to write stamp: {e}", 1)

    click.echo(str(stamp.path))


@main.command()
@directory_argument
@prefix_option
def remove(directory: Path, prefix: str | None) -> None:
    """Remove the stamp in DIRECTORY, if present."""
    try:
        make_stamp(directory, prefix).remove()
    except InvalidStampPrefixError as e:
        fail(f"Invalid prefix: {e}", 2)
    except OSError as e:
        fail(f"Failed to remove stamp: {e}", 1)


@main.command("clear-if-dirty")
@directory_argument
@click.argument("input_path", metavar="INPUT", type=click.Path(path_type=Path))
@config_option
@click.pass_context
def clear_if_dirty_command(
    ctx: click.Context, directory: Path, input_path: Path, config_path: Path | None
) -> None:
    """Wipe DIRECTORY if INPUT is newer than its stamp, then restamp it."""
    try:
        config = load_build_config(config_path)
        config.verbose = config.verbose or ctx.obj["verbose"]
        cleared = clear_if_dirty(Builder(config), directory, input_path)
    except ConfigError as e:
        fail(f"Configuration error: {e}", 1)
    except StampError as e:
        fail(f"Stamp error: {e}", 2)

    click.echo("cleared" if cleared else "fresh")


@main.command()
@click.argument("kind", type=click.Choice(ARTIFACT_KINDS))
@click.option("--stage", type=click.IntRange(min=0), required=True, help="Compiler stage")
@click.option("--target", required=True, help="Target triple")
@click.option("--host", default=None, help="Compiler host triple (default: 'build' from config)")
@click.option("--backend", default=None, help="Codegen backend name (codegen only)")
@config_option
def artifact(
    kind: str,
    stage: int,
    target: str,
    host: str | None,
    backend: str | None,
    config_path: Path | None,
) -> None:
    """Print the stamp path of a build product."""
    try:
        config = load_build_config(config_path)
    except ConfigError as e:
        fail(f"Configuration error: {e}", 1)

    host = host or config.build
    if host is None:
        fail("No host triple: pass --host or set 'build' in buildstamp.yaml", 1)
    if kind == "codegen" and not backend:
        fail("--backend is required for codegen stamps", 1)

    builder = Builder(config)
    compiler = Compiler(stage=stage, host=TargetSelection(host))
    target_selection = TargetSelection(target)

    try:
        if kind == "libstd":
            stamp = libstd_stamp(builder, compiler, target_selection)
        elif kind == "librustc":
            stamp = librustc_stamp(builder, compiler, target_selection)
        else:
            stamp = codegen_backend_stamp(builder, compiler, target_selection, backend)
    except InvalidStampPrefixError as e:
        fail(f"Invalid backend name: {e}", 2)

    click.echo(str(stamp.path))


if __name__ == "__main__":
    main()
