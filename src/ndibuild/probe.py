"""Environment Probe.

Read-only helpers that turn environment variables and fixed install paths into
optional filesystem paths. Absence is the normal outcome for most candidates,
so nothing here raises.
"""

from pathlib import Path
from typing import Mapping, Optional, Union


def env_path(name: str, environ: Mapping[str, str]) -> Optional[Path]:
    """Return the path named by an environment variable if it exists.

    Args:
        name: Environment variable name (e.g., "NDI_SDK_DIR")
        environ: Environment mapping to read from

    Returns:
        Path from the variable, or None if unset, empty or missing on disk
    """
    value = environ.get(name)
    if not value:
        return None
    return existing_path(value)


def existing_path(path: Union[str, Path]) -> Optional[Path]:
    """Return path as a Path if it exists on the filesystem, else None."""
    candidate = Path(path)
    if candidate.exists():
        return candidate
    return None
