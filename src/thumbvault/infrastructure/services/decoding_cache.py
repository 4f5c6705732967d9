"""Disk cache that encodes values on write and decodes them on read."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from ...application.interfaces import IImageDecoder, IImageEncoder
from ...domain.models import EncodingConfig, PurgeReport
from ...domain.outcome import Status
from ...errors import DecodeError, EncodeError
from ...utils.hashutils import KeyHasher
from .blob_store import BlobStore
from .cache_stats import CacheStatsCollector
from .pillow_codecs import PillowDecoder, PillowEncoder
from .reaper import Reaper

LOGGER = logging.getLogger(__name__)

_BYTES_TYPES = (bytes, bytearray, memoryview)


class DecodingCache:
    """Single-tier disk cache for decoded images.

    This is the error boundary of the package: encode, I/O and decode
    failures are logged here and surface to callers only as ``False`` from
    the ``put`` family or ``None`` from the ``get`` family.  A key that was
    never stored and an entry that exists but cannot be read or decoded are
    both reported as a miss.
    """

    def __init__(
        self,
        store: BlobStore,
        encoder: IImageEncoder | None = None,
        decoder: IImageDecoder | None = None,
        hasher: KeyHasher | None = None,
        stats: CacheStatsCollector | None = None,
    ):
        self._store = store
        self._encoder = encoder or PillowEncoder()
        self._decoder = decoder or PillowDecoder()
        self._hasher = hasher or KeyHasher()
        self._stats = stats

    @property
    def store(self) -> BlobStore:
        return self._store

    @property
    def hasher(self) -> KeyHasher:
        return self._hasher

    @property
    def stats(self) -> CacheStatsCollector | None:
        return self._stats

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def put(self, key: str, value: Any, config: EncodingConfig | None = None) -> bool:
        """Encode *value* with *config* and store it under *key*.

        Bytes-like values without a *config* are stored verbatim, exactly
        as :meth:`put_bytes` would.
        """

        if config is None:
            if isinstance(value, _BYTES_TYPES):
                return self.put_bytes(key, value)
            config = EncodingConfig()
        try:
            data = self._encoder.encode(value, config)
        except EncodeError as exc:
            LOGGER.warning("Failed to encode value for '%s': %s", key, exc)
            return False
        except Exception:
            LOGGER.warning("Unexpected error while encoding value for '%s'", key, exc_info=True)
            return False
        return self.put_bytes(key, data)

    def put_bytes(self, key: str, data: bytes | bytearray | memoryview) -> bool:
        """Store *data* under *key* without transformation."""

        outcome = self._store.write(self._hasher.hash(key), bytes(data))
        if not outcome:
            LOGGER.warning("Failed to write cache entry for '%s': %s", key, outcome.reason)
        return outcome.ok

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, key: str, max_width: int, max_height: int) -> Any | None:
        """Return the value cached under *key*, scaled to fit the bounds.

        The entry's mtime is refreshed only after a successful decode.
        """

        name = self._hasher.hash(key)
        read = self._store.read(name)
        if not read:
            if read.status is Status.IO_ERROR:
                LOGGER.warning("Failed to read cache entry for '%s': %s", key, read.reason)
            return self._miss(key, read.status)

        try:
            value = self._decoder.decode(read.value, max_width, max_height)
        except DecodeError as exc:
            LOGGER.warning("Failed to decode cache entry for '%s': %s", key, exc)
            return self._miss(key, Status.DECODE_ERROR)
        except Exception:
            LOGGER.warning(
                "Unexpected error while decoding cache entry for '%s'", key, exc_info=True
            )
            return self._miss(key, Status.DECODE_ERROR)
        if value is None:
            LOGGER.warning("Decoder produced no value for cache entry '%s'", key)
            return self._miss(key, Status.DECODE_ERROR)

        self._refresh(name)
        if self._stats is not None:
            self._stats.record_hit()
        return value

    def get_bytes(self, key: str) -> bytes | None:
        """Return the raw stored bytes for *key* and refresh its mtime."""

        name = self._hasher.hash(key)
        read = self._store.read(name)
        if not read:
            if read.status is Status.IO_ERROR:
                LOGGER.warning("Failed to read cache entry for '%s': %s", key, read.reason)
            return self._miss(key, read.status)
        self._refresh(name)
        if self._stats is not None:
            self._stats.record_hit()
        return read.value

    def contains(self, key: str) -> bool:
        """Return ``True`` if an entry file exists for *key*; never touches it."""

        return self._store.exists(self._hasher.hash(key))

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------
    def purge_accessed_before(self, cutoff: float | datetime) -> PurgeReport:
        """Delete entries not read or written since *cutoff*."""

        return Reaper(self._store).purge_older_than(cutoff)

    def _refresh(self, name: str) -> None:
        touched = self._store.touch(name)
        if not touched:
            LOGGER.debug("Could not refresh access time of %s: %s", name, touched.reason)

    def _miss(self, key: str, status: Status) -> None:
        LOGGER.info("Cache miss for '%s'.", key)
        if self._stats is not None:
            self._stats.record_miss(status)
        return None

    def __repr__(self) -> str:
        return f"DecodingCache({self._store!r}, hasher={self._hasher!r})"
