"""SDK and runtime library locators.

Two ordered fallback searches share the same helper:

    find_sdk():     NDI_SDK_DIR -> platform SDK install root
    find_library(): NDI_RUNTIME_DIR_V6 -> <manifest>/lib -> platform runtime dir

The first candidate that exists wins and later candidates are never checked.
Both return None when nothing resolves; deciding whether that is fatal is
left to the caller.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

from .config import RUNTIME_DIR_VAR, SDK_DIR_VAR, BuildConfig, PlatformTarget
from .probe import env_path, existing_path

logger = logging.getLogger(__name__)

Resolver = Callable[[], Optional[Path]]

LOCAL_LIB_DIR = "lib"

# The Windows SDK and runtime installers share one root. The runtime sits beside
# the SDK so the import library at ..\..\NDI 6 SDK\Lib\x64 resolves into it.
WINDOWS_NDI_ROOT = "C:\\NDI"
WINDOWS_SDK_DIR = WINDOWS_NDI_ROOT + "\\NDI 6 SDK"
WINDOWS_RUNTIME_DIR = WINDOWS_NDI_ROOT + "\\NDI 6 Runtime\\v6"

# Standard SDK install roots
SDK_DEFAULT_DIRS: Dict[PlatformTarget, str] = {
    PlatformTarget.WINDOWS: WINDOWS_SDK_DIR,
    PlatformTarget.LINUX: "/usr/local/NDI SDK for Linux 6/",
    PlatformTarget.MACOS: "/Library/NDI SDK for macOS 6/",
}

# Standard runtime library directories
RUNTIME_DEFAULT_DIRS: Dict[PlatformTarget, str] = {
    PlatformTarget.WINDOWS: WINDOWS_RUNTIME_DIR,
    PlatformTarget.LINUX: "/usr/local/NDI SDK for Linux 6/lib/",
    PlatformTarget.MACOS: "/Library/NDI SDK for macOS 6/lib/macOS/",
}


def first_match(resolvers: Iterable[Resolver]) -> Optional[Path]:
    """Call resolvers in order and return the first non-None result."""
    for resolver in resolvers:
        path = resolver()
        if path is not None:
            return path
    return None


def find_sdk(config: BuildConfig) -> Optional[Path]:
    """Locate the NDI SDK install root (headers).

    Args:
        config: Build configuration

    Returns:
        Path to the SDK root, or None if no candidate exists
    """
    path = first_match(
        [
            lambda: env_path(SDK_DIR_VAR, config.environ),
            lambda: existing_path(SDK_DEFAULT_DIRS[config.platform]),
        ]
    )
    logger.debug("SDK root for %s: %s", config.platform, path)
    return path


def find_library(config: BuildConfig) -> Optional[Path]:
    """Locate the directory containing the NDI runtime library.

    The override may point at a bare runtime distribution without headers,
    which is why it is a separate variable from NDI_SDK_DIR.

    Args:
        config: Build configuration

    Returns:
        Path to the runtime directory, or None if no candidate exists
    """
    path = first_match(
        [
            lambda: env_path(RUNTIME_DIR_VAR, config.environ),
            lambda: existing_path(config.manifest_dir / LOCAL_LIB_DIR),
            lambda: existing_path(RUNTIME_DEFAULT_DIRS[config.platform]),
        ]
    )
    logger.debug("Runtime directory for %s: %s", config.platform, path)
    return path
