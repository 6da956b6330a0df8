"""Stamps for well-known build products."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from buildstamp.builder.models import Compiler, Mode, TargetSelection
from buildstamp.stamp.stamp import BuildStamp


class OutputResolver(Protocol):
    """Anything that can map a build to its cargo output directory."""

    def cargo_out(self, compiler: Compiler, mode: Mode, target: TargetSelection) -> Path: ...


def codegen_backend_stamp(
    builder: OutputResolver,
    compiler: Compiler,
    target: TargetSelection,
    backend: str,
) -> BuildStamp:
    """Stamp for librustc_codegen_{backend} built by a compiler for a target."""
    return BuildStamp.from_dir(builder.cargo_out(compiler, Mode.CODEGEN, target)).with_prefix(
        f"librustc_codegen_{backend}"
    )


def libstd_stamp(builder: OutputResolver, compiler: Compiler, target: TargetSelection) -> BuildStamp:
    """Stamp for the standard library built by a compiler for a target."""
    return BuildStamp.from_dir(builder.cargo_out(compiler, Mode.STD, target)).with_prefix("libstd")


def librustc_stamp(
    builder: OutputResolver, compiler: Compiler, target: TargetSelection
) -> BuildStamp:
    """Stamp for librustc built by a compiler for a target."""
    return BuildStamp.from_dir(builder.cargo_out(compiler, Mode.RUSTC, target)).with_prefix(
        "librustc"
    )
