"""Age-based sweep of the cache directory."""

from __future__ import annotations

import logging
from datetime import datetime

from ...domain.models import PurgeReport
from .blob_store import BlobStore

LOGGER = logging.getLogger(__name__)


def cutoff_to_epoch(cutoff: float | datetime) -> float:
    """Normalise *cutoff* to POSIX seconds; naive datetimes are local time."""

    if isinstance(cutoff, datetime):
        return cutoff.timestamp()
    return float(cutoff)


class Reaper:
    """Delete entries whose last access is older than a cutoff.

    The sweep takes no lock: entries written while it runs may or may not
    be visited, and an interrupted sweep is finished by running it again.
    """

    def __init__(self, store: BlobStore):
        self._store = store

    def purge_older_than(self, cutoff: float | datetime) -> PurgeReport:
        """Remove every entry with ``mtime < cutoff``; equal timestamps survive."""

        threshold = cutoff_to_epoch(cutoff)
        listing = self._store.list_entries()
        if not listing:
            LOGGER.warning(
                "Skipping purge of %s, directory could not be listed (%s)",
                self._store.directory,
                listing.reason,
            )
            return PurgeReport()

        entries = listing.value or []
        deleted = failed = 0
        for entry in entries:
            if entry.mtime >= threshold:
                continue
            outcome = self._store.delete(entry.name)
            if outcome:
                deleted += 1
            else:
                failed += 1
                LOGGER.debug("Failed to purge %s: %s", entry.path, outcome.reason)

        if deleted or failed:
            LOGGER.debug(
                "Purged %d of %d entries in %s (%d failures)",
                deleted,
                len(entries),
                self._store.directory,
                failed,
            )
        return PurgeReport(scanned=len(entries), deleted=deleted, failed=failed)
