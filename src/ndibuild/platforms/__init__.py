"""Per-platform staging strategies.

Each supported PlatformTarget maps to exactly one StagingStrategy subclass.
The pipeline selects it once, up front, with get_strategy().
"""

from ..config import PlatformTarget
from .base import Artifact, StagingResult, StagingStrategy, Symlink
from .platform_linux import LinuxStaging
from .platform_macos import MacOSStaging
from .platform_windows import WindowsStaging

STRATEGIES: dict[PlatformTarget, type[StagingStrategy]] = {
    PlatformTarget.WINDOWS: WindowsStaging,
    PlatformTarget.LINUX: LinuxStaging,
    PlatformTarget.MACOS: MacOSStaging,
}


def get_strategy(platform: PlatformTarget) -> StagingStrategy:
    """Return the staging strategy for platform."""
    return STRATEGIES[platform]()


__all__ = [
    "Artifact",
    "LinuxStaging",
    "MacOSStaging",
    "STRATEGIES",
    "StagingResult",
    "StagingStrategy",
    "Symlink",
    "WindowsStaging",
    "get_strategy",
]
