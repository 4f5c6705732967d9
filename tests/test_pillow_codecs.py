"""Tests for the Pillow encoder/decoder and codec value objects."""

from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image

from thumbvault.domain.models import BoundingSize, EncodingConfig, ImageFormat
from thumbvault.errors import DecodeError, EncodeError
from thumbvault.infrastructure.services.pillow_codecs import PillowDecoder, PillowEncoder


@pytest.fixture()
def encoder() -> PillowEncoder:
    return PillowEncoder()


@pytest.fixture()
def decoder() -> PillowDecoder:
    return PillowDecoder()


class TestPillowEncoder:
    @pytest.mark.parametrize("fmt", list(ImageFormat))
    def test_formats(self, encoder: PillowEncoder, gradient_image: Image.Image, fmt: ImageFormat):
        data = encoder.encode(gradient_image, EncodingConfig(fmt, 80))
        with Image.open(BytesIO(data)) as image:
            assert image.format == fmt.value
            assert image.size == gradient_image.size

    def test_jpeg_drops_alpha(self, encoder: PillowEncoder):
        rgba = Image.new("RGBA", (8, 8), (255, 0, 0, 128))
        data = encoder.encode(rgba, EncodingConfig(ImageFormat.JPEG))
        with Image.open(BytesIO(data)) as image:
            assert image.mode == "RGB"

    def test_png_keeps_alpha(self, encoder: PillowEncoder):
        rgba = Image.new("RGBA", (8, 8), (255, 0, 0, 128))
        data = encoder.encode(rgba, EncodingConfig(ImageFormat.PNG))
        with Image.open(BytesIO(data)) as image:
            assert image.mode == "RGBA"

    def test_quality_changes_size(self, encoder: PillowEncoder, make_gradient):
        image = make_gradient(256, 256)
        low = encoder.encode(image, EncodingConfig(ImageFormat.JPEG, 10))
        high = encoder.encode(image, EncodingConfig(ImageFormat.JPEG, 95))
        assert len(low) < len(high)

    def test_rejects_non_images(self, encoder: PillowEncoder):
        with pytest.raises(EncodeError):
            encoder.encode(b"bytes", EncodingConfig())

    def test_unconvertible_mode_raises_encode_error(self, encoder: PillowEncoder):
        with pytest.raises(EncodeError):
            encoder.encode(Image.new("La", (4, 4)), EncodingConfig(ImageFormat.JPEG, 80))


class TestPillowDecoder:
    def test_garbage(self, decoder: PillowDecoder):
        with pytest.raises(DecodeError):
            decoder.decode(b"not an image at all", 10, 10)

    def test_truncated(self, decoder: PillowDecoder, encoder: PillowEncoder, make_gradient):
        data = encoder.encode(make_gradient(128, 128), EncodingConfig(ImageFormat.PNG))
        with pytest.raises(DecodeError):
            decoder.decode(data[: len(data) // 2], 0, 0)

    def test_applies_exif_orientation(self, decoder: PillowDecoder):
        exif = Image.Exif()
        exif[0x0112] = 6  # rotate 90 degrees clockwise on display
        buffer = BytesIO()
        Image.new("RGB", (40, 20), "white").save(buffer, "JPEG", exif=exif.tobytes())
        assert decoder.decode(buffer.getvalue(), 0, 0).size == (20, 40)

    def test_result_outlives_source(self, decoder: PillowDecoder, encoder: PillowEncoder, gradient_image):
        data = encoder.encode(gradient_image, EncodingConfig(ImageFormat.PNG))
        image = decoder.decode(data, 32, 32)
        assert image.getpixel((0, 0)) is not None
        assert image.size == (32, 24)


class TestValueObjects:
    def test_quality_range(self):
        with pytest.raises(ValueError):
            EncodingConfig(quality=101)
        with pytest.raises(ValueError):
            EncodingConfig(quality=-1)
        assert EncodingConfig(ImageFormat.PNG, 0).quality == 0

    def test_default_config(self):
        config = EncodingConfig()
        assert config.format is ImageFormat.JPEG
        assert config.quality == 90

    @pytest.mark.parametrize(
        "name, expected",
        [("jpg", ImageFormat.JPEG), ("JPEG", ImageFormat.JPEG), (" png ", ImageFormat.PNG), ("webp", ImageFormat.WEBP)],
    )
    def test_parse_format(self, name: str, expected: ImageFormat):
        assert ImageFormat.parse(name) is expected

    def test_parse_unknown_format(self):
        with pytest.raises(ValueError, match="gif"):
            ImageFormat.parse("gif")

    def test_bounding_size(self):
        box = BoundingSize(100, 0)
        assert box.bounded
        assert not BoundingSize(0, 0).bounded
        assert box.as_box((300, 200)) == (100, 200)
