"""Exceptions raised by the ndibuild pipeline.

Every fatal condition derives from NdiBuildError so the CLI can report it and
exit non-zero. Expected absence (an unset override, a missing default install)
is never an exception; locators return None instead.
"""


class NdiBuildError(Exception):
    """Base class for fatal build-time errors."""

    pass


class ConfigError(NdiBuildError):
    """Raised when the build environment is missing a required value."""

    pass


class UnsupportedPlatformError(ConfigError):
    """Raised when the target OS has no staging strategy."""

    def __init__(self, target_os: str):
        self.target_os = target_os
        super().__init__(f"Unsupported OS for NDI: {target_os!r}")


class SdkNotFoundError(NdiBuildError):
    """Raised when bindings are requested but no SDK root could be found."""

    pass


class BindingsError(NdiBuildError):
    """Raised when binding generation cannot run or fails."""

    pass


class StagingError(NdiBuildError):
    """Raised when a runtime artifact cannot be copied or linked."""

    pass
