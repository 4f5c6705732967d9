"""Hashing utilities for deriving cache filenames from logical keys."""

from __future__ import annotations

import hashlib
from typing import Callable

import xxhash

from ..config import DEFAULT_HASH_ALGORITHM


def _md5_hex(data: bytes) -> str:
    # MD5 is used for uniform, stable filenames only, NOT for security.
    return hashlib.md5(data).hexdigest()  # noqa: S324


def _xxh3_hex(data: bytes) -> str:
    return xxhash.xxh3_128(data).hexdigest()


_ALGORITHMS: dict[str, Callable[[bytes], str]] = {
    "md5": _md5_hex,
    "xxh3_128": _xxh3_hex,
}


class KeyHasher:
    """Map arbitrary string keys to fixed-length, filesystem-safe names.

    Both supported algorithms produce 128-bit digests rendered as 32
    lowercase hex characters, which are valid filenames on every platform
    we target.  The mapping is deterministic across processes and
    machines; there is no collision handling.
    """

    def __init__(self, algorithm: str = DEFAULT_HASH_ALGORITHM) -> None:
        try:
            self._digest = _ALGORITHMS[algorithm]
        except KeyError:
            supported = ", ".join(sorted(_ALGORITHMS))
            raise ValueError(
                f"Unsupported hash algorithm {algorithm!r} (expected one of: {supported})"
            ) from None
        self._algorithm = algorithm

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def hash(self, key: str) -> str:
        """Return the hex digest naming the cache file for *key*."""

        return self._digest(key.encode("utf-8", "surrogatepass"))

    def __repr__(self) -> str:
        return f"KeyHasher(algorithm={self._algorithm!r})"


_DEFAULT_HASHER = KeyHasher()


def key_digest(key: str) -> str:
    """Return the default-algorithm digest of *key*."""

    return _DEFAULT_HASHER.hash(key)
