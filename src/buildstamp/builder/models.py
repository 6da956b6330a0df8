"""Data models for build product locations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TargetSelection:
    """Target platform, identified by its triple."""

    triple: str

    def __str__(self) -> str:
        return self.triple


@dataclass(frozen=True)
class Compiler:
    """Compiler of a given stage, running on a host platform."""

    stage: int
    host: TargetSelection

    def __post_init__(self) -> None:
        if self.stage < 0:
            raise ValueError(f"stage must be non-negative, got {self.stage}")


class Mode(str, Enum):
    """Kind of build product, which decides its stage output directory."""

    STD = "std"
    RUSTC = "rustc"
    CODEGEN = "codegen"

    @property
    def stage_suffix(self) -> str:
        """Suffix appended to 'stage{N}' for this mode's output directory."""
        return f"-{self.value}"
