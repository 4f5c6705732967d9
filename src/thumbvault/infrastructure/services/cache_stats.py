"""Hit/miss statistics for the decoding cache.

Misses are broken down by cause so diagnostics can tell a cold cache
apart from corrupt or unreadable entries, even though the public API
reports all three the same way.  Thread-safe.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from ...domain.outcome import Status


@dataclass(frozen=True)
class CacheStats:
    """Immutable snapshot of cache statistics."""

    hits: int = 0
    missing: int = 0
    io_errors: int = 0
    decode_errors: int = 0

    @property
    def misses(self) -> int:
        return self.missing + self.io_errors + self.decode_errors

    @property
    def total(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Hit rate as a float in [0.0, 1.0]; 0.0 when no requests."""
        if self.total == 0:
            return 0.0
        return self.hits / self.total


_MISS_FIELDS = {
    Status.MISSING: "missing",
    Status.IO_ERROR: "io_errors",
    Status.DECODE_ERROR: "decode_errors",
}


class CacheStatsCollector:
    """Thread-safe counters fed by :class:`DecodingCache`.

    Usage::

        stats = CacheStatsCollector()
        cache = DecodingCache(store, stats=stats)
        cache.get("avatar:42", 128, 128)
        print(stats.snapshot().hit_rate)
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts = {"hits": 0, "missing": 0, "io_errors": 0, "decode_errors": 0}

    def record_hit(self) -> None:
        with self._lock:
            self._counts["hits"] += 1

    def record_miss(self, status: Status) -> None:
        """Record a miss caused by *status* (``MISSING``, ``IO_ERROR`` or ``DECODE_ERROR``)."""
        try:
            field = _MISS_FIELDS[status]
        except KeyError:
            raise ValueError(f"{status} is not a miss reason") from None
        with self._lock:
            self._counts[field] += 1

    def snapshot(self) -> CacheStats:
        with self._lock:
            return CacheStats(**self._counts)

    def reset(self) -> None:
        with self._lock:
            for name in self._counts:
                self._counts[name] = 0
