"""Builder - Resolves build output directories and reports verbose notices."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from buildstamp.builder.models import Compiler, Mode, TargetSelection
from buildstamp.config import BuildConfig

logger = logging.getLogger("buildstamp.builder")


class Builder:
    """Orchestrator-side context for stamp operations.

    Maps (compiler, mode, target) to cargo output directories and acts as
    the verbose-logging sink for directory invalidation.
    """

    def __init__(self, config: BuildConfig) -> None:
        """Initialize the builder.

        Args:
            config: Build configuration.
        """
        self.config = config

    @property
    def out(self) -> Path:
        """Root of all build outputs."""
        return self.config.get_out_path()

    def is_verbose(self) -> bool:
        """Check if verbose notices are enabled."""
        return self.config.verbose

    def verbose(self, message: Callable[[], str]) -> None:
        """Log a notice if verbose output is enabled.

        Notices go to the 'buildstamp.builder' logger at INFO. Library callers
        must configure logging (e.g. buildstamp.logging.setup_logging) to see them.

        Args:
            message: Produces the notice. Only called when verbose.
        """
        if self.is_verbose():
            logger.info(message())

    def cargo_dir(self) -> str:
        """Get the profile directory name cargo writes into."""
        return "debug" if self.config.profile == "debug" else "release"

    def stage_out(self, compiler: Compiler, mode: Mode) -> Path:
        """Get the output directory for everything a compiler builds in a mode.

        Args:
            compiler: Compiler doing the build.
            mode: Kind of build product.

        Returns:
            {out}/{host}/stage{N}{suffix}
        """
        return self.out / str(compiler.host) / f"stage{compiler.stage}{mode.stage_suffix}"

    def cargo_out(self, compiler: Compiler, mode: Mode, target: TargetSelection) -> Path:
        """Get cargo's output directory for a compiler, mode and target.

        Args:
            compiler: Compiler doing the build.
            mode: Kind of build product.
            target: Platform the product is built for.

        Returns:
            {stage_out}/{target}/{release|debug}
        """
        return self.stage_out(compiler, mode) / str(target) / self.cargo_dir()
