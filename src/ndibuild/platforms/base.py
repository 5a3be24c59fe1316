"""Staging strategy base class.

A StagingStrategy knows one platform's artifact layout: which files to copy
out of the runtime directory, which alias symlink to create next to them, and
which library name to hand to the linker. setup() is the template every
platform shares:

    1. locate the runtime directory (skipping staging if there is none)
    2. copy the platform's ArtifactSet into the staging directory
    3. create the alias symlink, tolerating one that already exists
    4. emit the link directive (unless dynamic-link mode is configured)

Any copy failure or unexpected symlink failure raises StagingError. There is
no partial-success mode.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Optional, TextIO

from ..config import BuildConfig, PlatformTarget
from ..errors import StagingError
from ..linker import emit_link_directive
from ..locators import find_library
from ..output import log_detail, log_warning

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Artifact:
    """A runtime file to stage.

    Attributes:
        source: Path relative to the runtime directory
        destination: File name inside the staging directory
    """

    source: str
    destination: str


@dataclass(frozen=True)
class Symlink:
    """An alias created inside the staging directory.

    Attributes:
        name: Link file name
        target: Relative link target (a staged file name)
    """

    name: str
    target: str


@dataclass(frozen=True)
class StagingResult:
    """Outcome of running a platform strategy.

    Attributes:
        platform: Platform the strategy staged for
        runtime_dir: Resolved runtime directory, None if staging was skipped
        staging_dir: Directory artifacts were staged into, None if skipped
        staged: Staged file paths in ArtifactSet order
        symlink: Path of the alias symlink, None if not applicable or skipped
        directive: Emitted link directive, None in dynamic-link mode
    """

    platform: PlatformTarget
    runtime_dir: Optional[Path]
    staging_dir: Optional[Path]
    staged: tuple[Path, ...]
    symlink: Optional[Path]
    directive: Optional[str]

    @property
    def skipped(self) -> bool:
        return self.runtime_dir is None


class StagingStrategy:
    """Stages the NDI runtime for one target platform.

    Subclasses must set PLATFORM, ARTIFACTS and LINK_LIBRARY.
    """

    PLATFORM: ClassVar[PlatformTarget]
    ARTIFACTS: ClassVar[tuple[Artifact, ...]]
    SYMLINK: ClassVar[Optional[Symlink]] = None
    LINK_LIBRARY: ClassVar[str]

    REQUIRED_ATTRIBUTES: ClassVar[tuple[str, ...]] = ("PLATFORM", "ARTIFACTS", "LINK_LIBRARY")

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        missing = [name for name in cls.REQUIRED_ATTRIBUTES if not hasattr(cls, name)]
        if missing:
            raise TypeError(f"{cls.__name__} must define {', '.join(missing)}")

    def setup(self, config: BuildConfig, stream: Optional[TextIO] = None) -> StagingResult:
        """Locate, stage and emit the link directive for this platform.

        Args:
            config: Build configuration
            stream: Stream for the link directive (defaults to stdout)

        Returns:
            StagingResult describing what was done

        Raises:
            StagingError: If an artifact cannot be copied or linked
        """
        runtime_dir = find_library(config)
        staging_dir: Optional[Path] = None
        staged: tuple[Path, ...] = ()
        symlink: Optional[Path] = None

        if runtime_dir is None:
            log_warning("NDI runtime not found, skipping staging (set NDI_RUNTIME_DIR_V6 to stage it)")
        else:
            log_detail(f"Runtime: {runtime_dir}")
            staging_dir = config.staging_dir
            staged = self.stage(runtime_dir, staging_dir)
            symlink = self.link_alias(staging_dir)

        directive = emit_link_directive(self.LINK_LIBRARY, config.link_mode, stream)
        if directive is None:
            log_detail("Dynamic link mode, no link directive emitted", verbose_only=True)
        else:
            log_detail(f"Link: {self.LINK_LIBRARY}", verbose_only=True)

        return StagingResult(
            platform=self.PLATFORM,
            runtime_dir=runtime_dir,
            staging_dir=staging_dir,
            staged=staged,
            symlink=symlink,
            directive=directive,
        )

    def stage(self, runtime_dir: Path, staging_dir: Path) -> tuple[Path, ...]:
        """Copy every artifact from runtime_dir into staging_dir.

        Args:
            runtime_dir: Directory containing the runtime library
            staging_dir: Destination directory (created if missing)

        Returns:
            Staged file paths in ArtifactSet order

        Raises:
            StagingError: If any artifact cannot be copied
        """
        try:
            staging_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StagingError(f"Cannot create staging directory {staging_dir}: {e}") from e

        staged = []
        for artifact in self.ARTIFACTS:
            staged.append(self._copy(runtime_dir / artifact.source, staging_dir / artifact.destination))
        return tuple(staged)

    def link_alias(self, staging_dir: Path) -> Optional[Path]:
        """Create the platform's alias symlink in staging_dir.

        An existing entry under the link name is left alone so repeated
        builds succeed.

        Returns:
            Path of the link, or None if the platform defines no alias

        Raises:
            StagingError: If the link cannot be created for any other reason
        """
        if self.SYMLINK is None:
            return None

        link_path = staging_dir / self.SYMLINK.name
        try:
            link_path.symlink_to(self.SYMLINK.target)
        except FileExistsError:
            logger.debug("Symlink %s already exists", link_path)
        except OSError as e:
            raise StagingError(f"Cannot create symlink {link_path} -> {self.SYMLINK.target}: {e}") from e
        else:
            log_detail(f"Linked {self.SYMLINK.name} -> {self.SYMLINK.target}", verbose_only=True)
        return link_path

    @staticmethod
    def _copy(source: Path, destination: Path) -> Path:
        try:
            shutil.copy(source, destination)
        except shutil.SameFileError:
            logger.debug("%s is already staged", destination)
        except OSError as e:
            raise StagingError(f"copy {source.name}: cannot copy {source} to {destination}: {e}") from e
        else:
            log_detail(f"Staged {destination.name}", verbose_only=True)
        return destination
