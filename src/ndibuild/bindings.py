"""Binding Generator.

Regenerates Rust bindings from the NDI C header by running the external
`bindgen` tool. Only runs when the `bindings` feature is enabled.

    <SDK root>/include/Processing.NDI.Lib.h  ->  <manifest>/src/sdk.rs

bindgen itself is a black box here; this module only resolves the header,
fails fast when it cannot, and reports the tool's output when it fails.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import BINDGEN_VAR, SDK_DIR_VAR, BuildConfig
from .errors import BindingsError, SdkNotFoundError
from .locators import find_sdk
from .subprocess_utils import safe_run

logger = logging.getLogger(__name__)

HEADER_PATH = "include/Processing.NDI.Lib.h"
OUTPUT_PATH = "src/sdk.rs"
DEFAULT_BINDGEN = "bindgen"

# The NDI header uses __declspec
CLANG_ARGS = ("-fdeclspec",)


def bindings_command(header: Path, output: Path, tool: str = DEFAULT_BINDGEN) -> list[str]:
    """Build the bindgen command line for header -> output."""
    return [tool, str(header), "-o", str(output), "--", *CLANG_ARGS]


def resolve_header(config: BuildConfig, sdk_root: Optional[Path] = None) -> Path:
    """Return the NDI header path inside the SDK.

    Args:
        config: Build configuration
        sdk_root: Already resolved SDK root (looked up when None)

    Raises:
        SdkNotFoundError: If no SDK root can be found
        BindingsError: If the SDK root does not contain the header
    """
    if sdk_root is None:
        sdk_root = find_sdk(config)
    if sdk_root is None:
        raise SdkNotFoundError(
            "Could not find the SDK to generate bindings. "
            f"Please set the {SDK_DIR_VAR} env variable to the root of the SDK install."
        )

    header = sdk_root / HEADER_PATH
    if not header.is_file():
        raise BindingsError(f"NDI header not found: {header} (is {SDK_DIR_VAR} the root of the SDK install?)")
    return header


def generate_bindings(config: BuildConfig) -> Path:
    """Regenerate src/sdk.rs from the SDK header.

    Args:
        config: Build configuration

    Returns:
        Path to the written bindings file

    Raises:
        SdkNotFoundError: If no SDK root can be found
        BindingsError: If the header is missing or bindgen fails
    """
    header = resolve_header(config)
    output = config.manifest_dir / OUTPUT_PATH
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise BindingsError(f"Cannot create bindings directory {output.parent}: {e}") from e

    tool = config.environ.get(BINDGEN_VAR) or DEFAULT_BINDGEN
    cmd = bindings_command(header, output, tool)
    logger.debug("Running %s", " ".join(cmd))

    try:
        result = safe_run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise BindingsError(f"Unable to generate bindings: {tool} not found (install bindgen-cli or set {BINDGEN_VAR})") from e
    except OSError as e:
        raise BindingsError(f"Unable to generate bindings: cannot run {tool}: {e}") from e

    if result.returncode != 0:
        detail = (result.stderr or result.stdout or "").strip()
        raise BindingsError(f"Unable to generate bindings from {header} (exit {result.returncode}): {detail}")

    return output
