"""Default configuration values for thumbvault."""

from __future__ import annotations

from typing import Final

# Folders created under the platform cache root for the process-wide default
# cache.
APP_DIR_NAME: Final[str] = "thumbvault"
DEFAULT_DIR_NAME: Final[str] = "img"

# Environment override for the cache root used by the default instance.
CACHE_DIR_ENV: Final[str] = "THUMBVAULT_CACHE_DIR"

# Encoding applied by ``DecodingCache.put`` when the caller does not pass one.
DEFAULT_FORMAT_NAME: Final[str] = "JPEG"
DEFAULT_QUALITY: Final[int] = 90

# ``md5`` keeps on-disk names compatible with caches written by older builds.
DEFAULT_HASH_ALGORITHM: Final[str] = "md5"

# Suffix of the transient files written before the atomic rename.
TEMP_SUFFIX: Final[str] = ".tmp"

SECONDS_PER_DAY: Final[int] = 24 * 60 * 60
