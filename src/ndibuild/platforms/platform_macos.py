"""macOS staging.

The SDK ships an unversioned libndi.dylib, so the alias symlink has the same
name as the copied file. Creating it always hits "already exists", which is
tolerated; the attempt is kept so all unix platforms stage the same way.
"""

from ..config import PlatformTarget
from .base import Artifact, StagingStrategy, Symlink


class MacOSStaging(StagingStrategy):
    """Stages libndi.dylib."""

    PLATFORM = PlatformTarget.MACOS
    ARTIFACTS = (Artifact("libndi.dylib", "libndi.dylib"),)
    SYMLINK = Symlink(name="libndi.dylib", target="libndi.dylib")
    LINK_LIBRARY = "ndi"
