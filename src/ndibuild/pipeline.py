"""
NDI build-script pipeline.

Runs once per build:

    1. select the staging strategy for the target platform
    2. regenerate bindings (only with the bindings feature)
    3. locate the runtime, stage it and emit the link directive

The platform is validated when the configuration is read and the strategy is
selected before anything is written, so an unsupported target aborts the
build with the filesystem untouched.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from .bindings import generate_bindings
from .config import BuildConfig
from .locators import find_library, find_sdk
from .output import TimedLogger, log_detail
from .platforms import StagingResult, get_strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    """Result of a pipeline run.

    Attributes:
        staging: What the platform strategy staged and emitted
        bindings_path: Generated bindings file, None if not requested
        build_time: Wall time of the run in seconds
    """

    staging: StagingResult
    bindings_path: Optional[Path]
    build_time: float


@dataclass(frozen=True)
class Resolution:
    """Where the SDK and runtime were found, without staging anything."""

    sdk_root: Optional[Path]
    runtime_dir: Optional[Path]


class BuildPipeline:
    """Drives binding generation, staging and link configuration."""

    def __init__(self, config: BuildConfig, stream: Optional[TextIO] = None):
        """
        Initialize the pipeline.

        Args:
            config: Build configuration, read once by the caller
            stream: Stream for linker directives (defaults to stdout)
        """
        self.config = config
        self.stream = stream

    @property
    def total_phases(self) -> int:
        return 2 if self.config.bindings else 1

    def run(self) -> BuildResult:
        """Execute the pipeline.

        Returns:
            BuildResult describing the run

        Raises:
            NdiBuildError: On any fatal condition
        """
        start_time = time.time()
        strategy = get_strategy(self.config.platform)
        phase = 0

        bindings_path: Optional[Path] = None
        if self.config.bindings:
            phase += 1
            with TimedLogger("Generating NDI bindings", phase=(phase, self.total_phases)):
                bindings_path = generate_bindings(self.config)
                log_detail(f"Bindings: {bindings_path}")

        phase += 1
        with TimedLogger(f"Configuring NDI runtime for {self.config.platform}", phase=(phase, self.total_phases)):
            staging = strategy.setup(self.config, self.stream)

        build_time = time.time() - start_time
        logger.debug("Pipeline finished in %.2fs", build_time)
        return BuildResult(staging=staging, bindings_path=bindings_path, build_time=build_time)


def resolve(config: BuildConfig) -> Resolution:
    """Run both locators and report what they found."""
    return Resolution(sdk_root=find_sdk(config), runtime_dir=find_library(config))
