"""Subprocess helpers for running external build tools.

Build scripts run inside the parent build's console. Child tools must not
open a console window on Windows or read from the parent's stdin.
"""

import subprocess
import sys
from typing import Any


def get_subprocess_creation_flags() -> int:
    """Return CREATE_NO_WINDOW on Windows and 0 elsewhere."""
    if sys.platform == "win32":
        return subprocess.CREATE_NO_WINDOW
    return 0


def safe_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
    """Run a command with console-safe defaults.

    Applies CREATE_NO_WINDOW on Windows (OR'd with any creationflags the
    caller passes) and redirects stdin to DEVNULL unless the caller sets it.

    Args:
        cmd: Command and arguments
        **kwargs: Passed through to subprocess.run

    Returns:
        CompletedProcess from subprocess.run
    """
    default_flags = get_subprocess_creation_flags()

    if "creationflags" in kwargs:
        kwargs["creationflags"] = kwargs["creationflags"] | default_flags
    elif default_flags:
        kwargs["creationflags"] = default_flags

    if "stdin" not in kwargs:
        kwargs["stdin"] = subprocess.DEVNULL

    return subprocess.run(cmd, **kwargs)
