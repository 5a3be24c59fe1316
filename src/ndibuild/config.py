"""Build configuration.

The pipeline reads every value it needs from the build environment exactly
once, here, and passes the resulting BuildConfig down to the components.
Nothing else in ndibuild reads os.environ.

Environment contract (Cargo build-script conventions):
    CARGO_CFG_TARGET_OS         target platform ("windows", "linux", "macos")
    OUT_DIR                     build output directory
    CARGO_MANIFEST_DIR          project root
    CARGO_FEATURE_BINDINGS      present -> regenerate bindings
    CARGO_FEATURE_DYNAMIC_LINK  present -> do not emit a link directive

SDK overrides:
    NDI_SDK_DIR                 SDK install root (headers)
    NDI_RUNTIME_DIR_V6          runtime library directory
    NDI_BINDGEN                 bindgen executable
"""

import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError, UnsupportedPlatformError

TARGET_OS_VAR = "CARGO_CFG_TARGET_OS"
OUT_DIR_VAR = "OUT_DIR"
MANIFEST_DIR_VAR = "CARGO_MANIFEST_DIR"
BINDINGS_FEATURE_VAR = "CARGO_FEATURE_BINDINGS"
DYNAMIC_LINK_FEATURE_VAR = "CARGO_FEATURE_DYNAMIC_LINK"

SDK_DIR_VAR = "NDI_SDK_DIR"
RUNTIME_DIR_VAR = "NDI_RUNTIME_DIR_V6"
BINDGEN_VAR = "NDI_BINDGEN"

# OUT_DIR is target/<profile>/build/<crate>-<hash>/out; deps sits three levels up
STAGING_OFFSET = ("..", "..", "..", "deps")


class PlatformTarget(Enum):
    """Target platforms with a staging strategy."""

    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "PlatformTarget":
        """Parse a target OS string.

        Raises:
            UnsupportedPlatformError: If value names no known platform
        """
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedPlatformError(value) from None

    @classmethod
    def host(cls) -> "PlatformTarget":
        """Return the platform of the running interpreter."""
        if sys.platform == "win32":
            return cls.WINDOWS
        if sys.platform == "darwin":
            return cls.MACOS
        if sys.platform.startswith("linux"):
            return cls.LINUX
        raise UnsupportedPlatformError(sys.platform)


class LinkMode(Enum):
    """How the produced binary finds the NDI runtime."""

    STATIC = "static"
    DYNAMIC = "dynamic"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BuildConfig:
    """Configuration for a single pipeline run.

    Attributes:
        platform: Target platform
        link_mode: STATIC emits a link directive, DYNAMIC does not
        bindings: Whether to regenerate bindings from the SDK header
        manifest_dir: Project root (local lib folder, bindings output)
        out_dir: Build output directory, None when the build supplied none
        verbose: Whether to print verbose detail
        environ: Environment snapshot used for SDK/runtime overrides
    """

    platform: PlatformTarget
    link_mode: LinkMode
    bindings: bool
    manifest_dir: Path
    out_dir: Optional[Path]
    verbose: bool = False
    environ: Mapping[str, str] = field(default_factory=dict, repr=False)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        target_os: Optional[str] = None,
        out_dir: Optional[Path] = None,
        manifest_dir: Optional[Path] = None,
        bindings: Optional[bool] = None,
        dynamic_link: Optional[bool] = None,
        verbose: bool = False,
    ) -> "BuildConfig":
        """Read the build configuration from the environment.

        Explicit keyword arguments take precedence over environment values.

        Args:
            environ: Environment mapping (defaults to a copy of os.environ)
            target_os: Target OS override
            out_dir: Output directory override
            manifest_dir: Project root override
            bindings: Bindings feature override
            dynamic_link: Dynamic-link feature override
            verbose: Enable verbose output

        Returns:
            Immutable BuildConfig

        Raises:
            ConfigError: If the target OS or project root is not set
            UnsupportedPlatformError: If the target OS is unknown
        """
        env = dict(os.environ if environ is None else environ)

        os_name = target_os or env.get(TARGET_OS_VAR)
        if not os_name:
            raise ConfigError(f"Could not get OS: {TARGET_OS_VAR} is not set")
        platform = PlatformTarget.parse(os_name)

        if manifest_dir is None:
            manifest_value = env.get(MANIFEST_DIR_VAR)
            if not manifest_value:
                raise ConfigError(f"{MANIFEST_DIR_VAR} is not set")
            manifest_dir = Path(manifest_value)

        if out_dir is None and env.get(OUT_DIR_VAR):
            out_dir = Path(env[OUT_DIR_VAR])

        if bindings is None:
            bindings = BINDINGS_FEATURE_VAR in env
        if dynamic_link is None:
            dynamic_link = DYNAMIC_LINK_FEATURE_VAR in env

        return cls(
            platform=platform,
            link_mode=LinkMode.DYNAMIC if dynamic_link else LinkMode.STATIC,
            bindings=bindings,
            manifest_dir=manifest_dir,
            out_dir=out_dir,
            verbose=verbose,
            environ=env,
        )

    @property
    def staging_dir(self) -> Path:
        """Directory the runtime artifacts are staged into.

        Raises:
            ConfigError: If no output directory was supplied
        """
        if self.out_dir is None:
            raise ConfigError(f"{OUT_DIR_VAR} is not set")
        return self.out_dir.joinpath(*STAGING_OFFSET)
