from io import BytesIO
from typing import Any

from PIL import Image, ImageOps

from ...application.interfaces import IImageDecoder, IImageEncoder
from ...domain.models import BoundingSize, EncodingConfig, ImageFormat
from ...errors import DecodeError, EncodeError

# Modes each format can store without conversion.
_NATIVE_MODES: dict[ImageFormat, frozenset[str]] = {
    ImageFormat.JPEG: frozenset({"RGB", "L", "CMYK"}),
    ImageFormat.PNG: frozenset({"RGB", "RGBA", "L", "LA", "P", "1", "I", "I;16"}),
    ImageFormat.WEBP: frozenset({"RGB", "RGBA"}),
}


def _fallback_mode(image: Image.Image, fmt: ImageFormat) -> str:
    if fmt is ImageFormat.JPEG:
        return "RGB"
    has_alpha = "A" in image.getbands() or "transparency" in image.info
    return "RGBA" if has_alpha else "RGB"


class PillowEncoder(IImageEncoder):
    """
    Encodes Pillow images into JPEG, PNG or WebP bytes.
    """

    def encode(self, value: Any, config: EncodingConfig) -> bytes:
        if not isinstance(value, Image.Image):
            raise EncodeError(f"Cannot encode {type(value).__name__}; expected a PIL image")
        params: dict[str, Any] = {}
        if not config.format.lossless:
            params["quality"] = config.quality

        buffer = BytesIO()
        try:
            image = value
            if image.mode not in _NATIVE_MODES[config.format]:
                image = image.convert(_fallback_mode(image, config.format))
            image.save(buffer, format=config.format.value, **params)
        except (OSError, ValueError, KeyError, AssertionError) as exc:
            raise EncodeError(f"Pillow failed to encode {config.format.value}: {exc}") from exc
        return buffer.getvalue()


class PillowDecoder(IImageDecoder):
    """
    Decodes cached bytes with Pillow, downscaling to a bounding box.

    The aspect ratio is preserved and images are never enlarged.  JPEG data
    uses the draft mode fast path so large photos are reduced during decode
    rather than after it.
    """

    def decode(self, data: bytes, max_width: int, max_height: int) -> Image.Image:
        bounds = BoundingSize(max_width, max_height)
        try:
            with Image.open(BytesIO(data)) as source:
                if bounds.bounded and source.format == "JPEG":
                    source.draft(source.mode, bounds.as_box(source.size))
                # ``exif_transpose`` returns a detached copy, so the result
                # stays valid once the source is closed.
                image = ImageOps.exif_transpose(source)
            if bounds.bounded:
                image.thumbnail(bounds.as_box(image.size), Image.Resampling.LANCZOS)
        except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"Pillow failed to decode cached bytes: {exc}") from exc
        return image
