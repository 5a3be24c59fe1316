"""Link Directive Emitter.

After staging (or a deliberate skip) the build script tells the build system
which library to link. In dynamic-link mode nothing is emitted and the binary
resolves the NDI runtime at load time from the staged artifacts or the system
library path.
"""

import logging
import sys
from typing import Optional, TextIO

from .config import LinkMode

logger = logging.getLogger(__name__)

LINK_LIB_PREFIX = "cargo:rustc-link-lib="


def link_directive(library: str) -> str:
    """Format the linker directive for a library base name."""
    return f"{LINK_LIB_PREFIX}{library}"


def emit_link_directive(library: str, link_mode: LinkMode, stream: Optional[TextIO] = None) -> Optional[str]:
    """Write the link directive for library unless link_mode is DYNAMIC.

    Args:
        library: Library base name (e.g., "ndi", "Processing.NDI.Lib.x64")
        link_mode: Link mode of the current build
        stream: Stream read by the build system (defaults to sys.stdout)

    Returns:
        The emitted directive, or None in dynamic-link mode
    """
    if link_mode is LinkMode.DYNAMIC:
        logger.debug("Dynamic link mode, no directive for %s", library)
        return None

    directive = link_directive(library)
    out = stream if stream is not None else sys.stdout
    out.write(directive + "\n")
    out.flush()
    return directive
