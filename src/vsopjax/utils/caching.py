"""Filesystem cache directory management and file utilities.

Provides helpers for locating the vsopjax cache directory and checking
whether a cached file needs to be fetched again.  These are pure-Python
utilities with no JAX dependency.

The cache root is determined by the ``VSOPJAX_CACHE`` environment variable.
If unset, it defaults to ``~/.cache/vsopjax``.
"""

from __future__ import annotations

import os
import time
from pathlib import Path

_ENV_VAR = "VSOPJAX_CACHE"
_DEFAULT_SUBDIR = ".cache/vsopjax"


def get_cache_dir(subdirectory: str | None = None) -> Path:
    """Return the vsopjax cache directory, creating it if needed.

    The root is ``$VSOPJAX_CACHE`` if set, otherwise ``~/.cache/vsopjax``.
    An optional *subdirectory* is appended and also created.

    Args:
        subdirectory: Optional subdirectory to append (e.g. ``"vsop87"``).

    Returns:
        Resolved :class:`~pathlib.Path` to the cache directory.
    """
    env = os.environ.get(_ENV_VAR)
    if env is not None:
        root = Path(env)
    else:
        root = Path.home() / _DEFAULT_SUBDIR

    if subdirectory is not None:
        root = root / subdirectory

    root.mkdir(parents=True, exist_ok=True)
    return root


def get_vsop87_cache_dir() -> Path:
    """Return the VSOP87 data cache directory (``<cache>/vsop87``).

    Returns:
        Path to the VSOP87 cache directory.
    """
    return get_cache_dir("vsop87")


def file_age_seconds(filepath: str | Path) -> float:
    """Return the age of *filepath* in seconds since last modification.

    Args:
        filepath: Path to the file.

    Returns:
        Seconds elapsed since the file was last modified.

    Raises:
        FileNotFoundError: If *filepath* does not exist.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"No such file: '{filepath}'")
    return max(0.0, time.time() - filepath.stat().st_mtime)


def is_file_stale(filepath: str | Path, max_age_seconds: float | None = None) -> bool:
    """Check whether *filepath* is missing or older than *max_age_seconds*.

    Args:
        filepath: Path to the file.
        max_age_seconds: Maximum acceptable age in seconds.  ``None`` means
            an existing file never expires.

    Returns:
        ``True`` if the file is missing or stale.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        return True
    if max_age_seconds is None:
        return False
    return file_age_seconds(filepath) > max_age_seconds
