"""Linux staging.

Copies the versioned shared object and adds an unversioned alias so both
`-lndi` at link time and a SONAME lookup at load time succeed:

    deps/libndi.so.6
    deps/libndi.so -> libndi.so.6
"""

from ..config import PlatformTarget
from .base import Artifact, StagingStrategy, Symlink


class LinuxStaging(StagingStrategy):
    """Stages libndi.so.6 plus the libndi.so alias."""

    PLATFORM = PlatformTarget.LINUX
    ARTIFACTS = (Artifact("libndi.so.6", "libndi.so.6"),)
    SYMLINK = Symlink(name="libndi.so", target="libndi.so.6")
    LINK_LIBRARY = "ndi"
