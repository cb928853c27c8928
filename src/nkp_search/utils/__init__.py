"""Utility modules for NKP search."""

from nkp_search.utils.performance import (
    Timer,
    timed,
    get_cache_stats,
)

__all__ = [
    "Timer",
    "timed",
    "get_cache_stats",
]
