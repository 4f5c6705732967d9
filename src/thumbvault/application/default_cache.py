"""Process-wide default cache bound to the platform cache directory."""

from __future__ import annotations

import logging
import os
import sys
import threading
from pathlib import Path
from typing import Callable, Optional

from ..config import APP_DIR_NAME, CACHE_DIR_ENV, DEFAULT_DIR_NAME
from ..infrastructure.services.blob_store import BlobStore
from ..infrastructure.services.decoding_cache import DecodingCache

LOGGER = logging.getLogger(__name__)

DirectoryProvider = Callable[[], Optional[Path]]

_DEFAULT_CACHE: DecodingCache | None = None
_LOCK = threading.Lock()


def default_cache_root() -> Path | None:
    """Return the base cache directory for the current platform.

    ``$THUMBVAULT_CACHE_DIR`` wins when set.  ``None`` is returned when no
    home directory can be determined.
    """

    override = os.environ.get(CACHE_DIR_ENV)
    if override:
        return Path(override)
    try:
        if os.name == "nt":
            base = os.environ.get("LOCALAPPDATA")
            if base:
                return Path(base) / APP_DIR_NAME / "Cache"
            return Path.home() / "AppData" / "Local" / APP_DIR_NAME / "Cache"
        if sys.platform == "darwin":
            return Path.home() / "Library" / "Caches" / APP_DIR_NAME
        base = os.environ.get("XDG_CACHE_HOME")
        if base:
            return Path(base) / APP_DIR_NAME
        return Path.home() / ".cache" / APP_DIR_NAME
    except RuntimeError:
        # ``Path.home`` raises when neither $HOME nor the passwd entry exist.
        return None


def get_default_cache(provider: DirectoryProvider = default_cache_root) -> DecodingCache | None:
    """Return the shared cache, creating it on first use.

    Returns ``None`` and logs a warning when the provider has no directory
    to offer or the directory cannot be written.  Failures are not
    remembered, so a later call tries again.
    """

    global _DEFAULT_CACHE
    cache = _DEFAULT_CACHE
    if cache is not None:
        return cache
    with _LOCK:
        if _DEFAULT_CACHE is None:
            base = provider()
            if base is None:
                LOGGER.warning("No cache directory available; the default cache is disabled.")
                return None
            store = BlobStore(base / DEFAULT_DIR_NAME)
            if not store.is_writable():
                LOGGER.warning(
                    "Cache directory %s is not writable; the default cache is disabled.",
                    store.directory,
                )
                return None
            _DEFAULT_CACHE = DecodingCache(store)
        return _DEFAULT_CACHE


def reset_default_cache() -> None:
    """Forget the shared instance so the next access builds a fresh one."""

    global _DEFAULT_CACHE
    with _LOCK:
        _DEFAULT_CACHE = None
