"""Builder - Output directory resolution for staged builds."""

from buildstamp.builder.builder import Builder
from buildstamp.builder.models import Compiler, Mode, TargetSelection

__all__ = [
    "Builder",
    "Compiler",
    "Mode",
    "TargetSelection",
]
