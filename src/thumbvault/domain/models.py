"""Value objects describing cache inputs and on-disk entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..config import DEFAULT_FORMAT_NAME, DEFAULT_QUALITY, TEMP_SUFFIX


class ImageFormat(Enum):
    """Encodings supported by the default Pillow encoder."""

    JPEG = "JPEG"
    PNG = "PNG"
    WEBP = "WEBP"

    @property
    def lossless(self) -> bool:
        return self is ImageFormat.PNG

    @classmethod
    def parse(cls, name: str) -> "ImageFormat":
        normalized = name.strip().upper()
        if normalized == "JPG":
            normalized = "JPEG"
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unsupported image format: {name!r}") from None


@dataclass(frozen=True)
class EncodingConfig:
    """Format and quality used to serialise a value before it is stored.

    ``quality`` follows Pillow's 0-100 scale and is ignored by lossless
    formats.
    """

    format: ImageFormat = ImageFormat(DEFAULT_FORMAT_NAME)
    quality: int = DEFAULT_QUALITY

    def __post_init__(self) -> None:
        if not 0 <= self.quality <= 100:
            raise ValueError(f"quality must be within 0..100, got {self.quality}")


@dataclass(frozen=True)
class BoundingSize:
    """Largest ``(width, height)`` a decoded value may have.

    A non-positive component leaves that axis unbounded.
    """

    width: int
    height: int

    @property
    def bounded(self) -> bool:
        return self.width > 0 or self.height > 0

    def as_box(self, original: tuple[int, int]) -> tuple[int, int]:
        """Return a concrete box for ``Image.thumbnail`` given the *original* size."""

        width = self.width if self.width > 0 else original[0]
        height = self.height if self.height > 0 else original[1]
        return width, height


@dataclass(frozen=True)
class StoredEntry:
    """Snapshot of one file in the cache directory."""

    name: str
    path: Path
    mtime: float
    size: int

    @property
    def is_partial(self) -> bool:
        """``True`` for leftovers of an interrupted write."""

        return self.name.endswith(TEMP_SUFFIX)


@dataclass(frozen=True)
class PurgeReport:
    """Counters collected during one purge sweep."""

    scanned: int = 0
    deleted: int = 0
    failed: int = 0
