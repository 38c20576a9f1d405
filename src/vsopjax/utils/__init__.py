"""Shared utility functions for vsopjax.

Provides filesystem cache management.
"""

from vsopjax.utils.caching import (
    file_age_seconds,
    get_cache_dir,
    get_vsop87_cache_dir,
    is_file_stale,
)

__all__ = [
    "file_age_seconds",
    "get_cache_dir",
    "get_vsop87_cache_dir",
    "is_file_stale",
]
