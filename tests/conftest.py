import sys
from pathlib import Path

import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Allow running the suite from a checkout without installing the package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from thumbvault.application.default_cache import reset_default_cache  # noqa: E402
from thumbvault.config import CACHE_DIR_ENV  # noqa: E402
from thumbvault.infrastructure.services.blob_store import BlobStore  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_default_cache(monkeypatch):
    monkeypatch.delenv(CACHE_DIR_ENV, raising=False)
    reset_default_cache()
    yield
    reset_default_cache()


@pytest.fixture()
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "img"


@pytest.fixture()
def store(cache_dir: Path) -> BlobStore:
    return BlobStore(cache_dir)


def _gradient(width: int, height: int) -> Image.Image:
    image = Image.new("RGB", (width, height))
    image.putdata(
        [
            ((x * 255) // max(width - 1, 1), (y * 255) // max(height - 1, 1), (x + y) % 256)
            for y in range(height)
            for x in range(width)
        ]
    )
    return image


@pytest.fixture()
def make_gradient():
    return _gradient


@pytest.fixture()
def gradient_image() -> Image.Image:
    return _gradient(64, 48)
