"""ndibuild - NDI SDK discovery, runtime staging and link configuration.

Run once per build to find the NDI runtime on the host, copy it next to the
build output, and tell the linker how to link against it.

Example:
    >>> from ndibuild import BuildConfig, BuildPipeline
    >>> result = BuildPipeline(BuildConfig.from_env()).run()
    >>> result.staging.directive
    'cargo:rustc-link-lib=ndi'
"""

__version__ = "0.3.0"

from ndibuild.config import BuildConfig, LinkMode, PlatformTarget
from ndibuild.errors import (
    BindingsError,
    ConfigError,
    NdiBuildError,
    SdkNotFoundError,
    StagingError,
    UnsupportedPlatformError,
)
from ndibuild.pipeline import BuildPipeline, BuildResult, Resolution, resolve

__all__ = [
    "BindingsError",
    "BuildConfig",
    "BuildPipeline",
    "BuildResult",
    "ConfigError",
    "LinkMode",
    "NdiBuildError",
    "PlatformTarget",
    "Resolution",
    "SdkNotFoundError",
    "StagingError",
    "UnsupportedPlatformError",
    "resolve",
]
