"""Performance utilities: phase timing and cached wrappers."""

import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional

logger = logging.getLogger(__name__)


# =============================================================================
# Phase Timing
# =============================================================================

class Timer:
    """Elapsed-time holder yielded by :func:`timed`."""

    def __init__(self) -> None:
        self.started = time.perf_counter()
        self.elapsed_ms: float = 0.0

    def stop(self) -> float:
        self.elapsed_ms = (time.perf_counter() - self.started) * 1000.0
        return self.elapsed_ms


@contextmanager
def timed(label: str, log: Optional[logging.Logger] = None, level: int = logging.DEBUG) -> Iterator[Timer]:
    """
    Log how long the wrapped block took.

    Args:
        label: Phase name used in the log line
        log: Logger to write to (defaults to this module's logger)
        level: Logging level for the timing line

    Yields:
        Timer whose ``elapsed_ms`` is filled in when the block exits
    """
    timer = Timer()
    try:
        yield timer
    finally:
        timer.stop()
        (log or logger).log(level, f"{label} took {timer.elapsed_ms:.1f} ms")


# =============================================================================
# Cache Introspection
# =============================================================================

def get_cache_stats(cached_fn: Callable[..., Any]) -> Dict[str, Any]:
    """Get cache statistics from a cached function."""
    try:
        info = cached_fn.cache_info()  # type: ignore[attr-defined]
        return {
            "hits": info.hits,
            "misses": info.misses,
            "maxsize": info.maxsize or 0,
            "currsize": info.currsize
        }
    except AttributeError:
        return {"error": "Function is not cached"}
