"""Windows staging.

The NDI runtime installer ships only the DLL; the import library needed at
link time lives in the SDK, two levels up from the runtime directory:

    <NDI>/NDI 6 Runtime/v6/Processing.NDI.Lib.x64.dll      (runtime dir)
    <NDI>/NDI 6 SDK/Lib/x64/Processing.NDI.Lib.x64.lib

Both files are copied into the deps directory so the linker finds the .lib
and the produced executable finds the .dll next to it. Windows gets no alias
symlink.
"""

from ..config import PlatformTarget
from .base import Artifact, StagingStrategy


class WindowsStaging(StagingStrategy):
    """Stages Processing.NDI.Lib.x64.lib and .dll."""

    PLATFORM = PlatformTarget.WINDOWS
    ARTIFACTS = (
        Artifact("../../NDI 6 SDK/Lib/x64/Processing.NDI.Lib.x64.lib", "Processing.NDI.Lib.x64.lib"),
        Artifact("Processing.NDI.Lib.x64.dll", "Processing.NDI.Lib.x64.dll"),
    )
    LINK_LIBRARY = "Processing.NDI.Lib.x64"
