"""Tests for the thumbvault command line."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from PIL import Image
from typer.testing import CliRunner

from thumbvault.cli import app
from thumbvault.config import CACHE_DIR_ENV, DEFAULT_DIR_NAME
from thumbvault.utils.hashutils import KeyHasher

runner = CliRunner()
OLD = 1_000_000_000


@pytest.fixture()
def photo(tmp_path: Path, make_gradient) -> Path:
    path = tmp_path / "photo.png"
    make_gradient(200, 100).save(path)
    return path


def _invoke(*args: str):
    return runner.invoke(app, [str(arg) for arg in args])


class TestCli:
    def test_raw_round_trip(self, photo: Path, cache_dir: Path, tmp_path: Path):
        result = _invoke("put", "poster", photo, "--cache-dir", cache_dir)
        assert result.exit_code == 0, result.output
        assert (cache_dir / KeyHasher().hash("poster")).read_bytes() == photo.read_bytes()

        dest = tmp_path / "copy.bin"
        result = _invoke("get", "poster", dest, "--raw", "--cache-dir", cache_dir)
        assert result.exit_code == 0, result.output
        assert dest.read_bytes() == photo.read_bytes()

    def test_encoded_put_and_bounded_get(self, photo: Path, cache_dir: Path, tmp_path: Path):
        result = _invoke(
            "put", "poster", photo, "--encode", "--format", "webp", "--quality", "70",
            "--cache-dir", cache_dir,
        )
        assert result.exit_code == 0, result.output
        assert (cache_dir / KeyHasher().hash("poster")).read_bytes()[8:12] == b"WEBP"

        dest = tmp_path / "thumb.png"
        result = _invoke(
            "get", "poster", dest, "--max-width", "50", "--max-height", "50",
            "--cache-dir", cache_dir,
        )
        assert result.exit_code == 0, result.output
        with Image.open(dest) as image:
            assert image.size == (50, 25)

    def test_bad_format(self, photo: Path, cache_dir: Path):
        result = _invoke("put", "poster", photo, "--encode", "--format", "gif", "--cache-dir", cache_dir)
        assert result.exit_code == 2

    def test_miss(self, cache_dir: Path, tmp_path: Path):
        result = _invoke("get", "unknown", tmp_path / "out.png", "--cache-dir", cache_dir)
        assert result.exit_code == 1
        assert "cache miss for 'unknown'" in result.output
        assert not (tmp_path / "out.png").exists()

    def test_purge_days(self, photo: Path, cache_dir: Path):
        _invoke("put", "old", photo, "--cache-dir", cache_dir)
        _invoke("put", "fresh", photo, "--cache-dir", cache_dir)
        os.utime(cache_dir / KeyHasher().hash("old"), (OLD, OLD))

        result = _invoke("purge", "--days", "1", "--cache-dir", cache_dir)
        assert result.exit_code == 0, result.output
        assert "Purged 1 of 2 entries" in result.output
        assert os.listdir(cache_dir) == [KeyHasher().hash("fresh")]

    def test_purge_before(self, photo: Path, cache_dir: Path):
        _invoke("put", "old", photo, "--cache-dir", cache_dir)
        os.utime(cache_dir / KeyHasher().hash("old"), (OLD, OLD))
        result = _invoke("purge", "--before", "2020-01-01", "--cache-dir", cache_dir)
        assert result.exit_code == 0, result.output
        assert os.listdir(cache_dir) == []

    @pytest.mark.parametrize("args", [[], ["--days", "1", "--before", "2020-01-01"]])
    def test_purge_requires_one_cutoff(self, cache_dir: Path, args: list[str]):
        result = _invoke("purge", *args, "--cache-dir", cache_dir)
        assert result.exit_code == 2

    def test_ls(self, photo: Path, cache_dir: Path):
        _invoke("put", "a", photo, "--cache-dir", cache_dir)
        _invoke("put", "b", photo, "--cache-dir", cache_dir)
        result = _invoke("ls", "--cache-dir", cache_dir)
        assert result.exit_code == 0, result.output
        assert "2 entries" in result.output

    def test_default_cache_from_environment(
        self, photo: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        root = tmp_path / "env-root"
        monkeypatch.setenv(CACHE_DIR_ENV, str(root))
        result = _invoke("put", "poster", photo)
        assert result.exit_code == 0, result.output
        assert (root / DEFAULT_DIR_NAME / KeyHasher().hash("poster")).exists()

    def test_unusable_cache_dir(self, photo: Path, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"")
        result = _invoke("put", "poster", photo, "--cache-dir", blocker / "img")
        assert result.exit_code == 1
        assert "not writable" in result.output
