"""Disk-backed, content-keyed cache for encoded images.

Typical use::

    from thumbvault import BlobStore, DecodingCache, EncodingConfig

    cache = DecodingCache(BlobStore(cache_dir))
    cache.put("https://example.com/a.jpg", image, EncodingConfig())
    thumb = cache.get("https://example.com/a.jpg", 256, 256)

For a shared instance in the platform cache directory use
:func:`get_default_cache`, which returns ``None`` when no usable directory
exists.
"""

from .application.default_cache import default_cache_root, get_default_cache, reset_default_cache
from .domain.models import BoundingSize, EncodingConfig, ImageFormat, PurgeReport, StoredEntry
from .domain.outcome import Outcome, Status
from .infrastructure.services.blob_store import BlobStore
from .infrastructure.services.cache_stats import CacheStats, CacheStatsCollector
from .infrastructure.services.decoding_cache import DecodingCache
from .infrastructure.services.pillow_codecs import PillowDecoder, PillowEncoder
from .infrastructure.services.reaper import Reaper
from .utils.hashutils import KeyHasher, key_digest

__all__ = [
    "BlobStore",
    "BoundingSize",
    "CacheStats",
    "CacheStatsCollector",
    "DecodingCache",
    "EncodingConfig",
    "ImageFormat",
    "KeyHasher",
    "Outcome",
    "PillowDecoder",
    "PillowEncoder",
    "PurgeReport",
    "Reaper",
    "Status",
    "StoredEntry",
    "default_cache_root",
    "get_default_cache",
    "key_digest",
    "reset_default_cache",
]
