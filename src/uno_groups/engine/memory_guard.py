"""Best-effort memory pressure relief for long indexing passes.

Samples the resident set size every N ticks and, above a limit, forces a
full garbage collection followed by a short pause. It gives no guarantee
against running out of memory and never changes grouping results.
"""

from __future__ import annotations

import gc
import logging
import time

import psutil

logger = logging.getLogger(__name__)

_BYTES_PER_MB = 1024 * 1024


class MemoryGuard:
    """Periodic RSS sampler with forced collection.

    Call :meth:`tick` once per processed record.
    """

    def __init__(
        self,
        limit_mb: int = 900,
        check_every: int = 10_000,
        pause_seconds: float = 0.1,
        enabled: bool = True,
    ) -> None:
        self._limit_mb = limit_mb
        self._check_every = check_every
        self._pause_seconds = pause_seconds
        self._enabled = enabled
        self._ticks = 0
        self._collections = 0
        self._process = psutil.Process() if enabled else None

    @property
    def collections(self) -> int:
        """Number of forced collections so far."""
        return self._collections

    def tick(self) -> None:
        if not self._enabled:
            return
        self._ticks += 1
        if self._ticks % self._check_every == 0:
            self.check()

    def used_mb(self) -> float:
        if self._process is None:
            return 0.0
        return self._process.memory_info().rss / _BYTES_PER_MB

    def check(self) -> bool:
        """Collect if RSS is above the limit.

        Returns:
            True if a collection was forced.
        """
        if not self._enabled:
            return False

        used = self.used_mb()
        if used <= self._limit_mb:
            return False

        logger.debug(
            "Memory at %.1f MB exceeds %d MB limit, forcing collection", used, self._limit_mb
        )
        gc.collect()
        time.sleep(self._pause_seconds)
        self._collections += 1
        return True
