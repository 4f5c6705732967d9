"""Flat, file-per-entry blob storage addressed by hashed key."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from ...config import TEMP_SUFFIX
from ...domain.models import StoredEntry
from ...domain.outcome import Outcome, Status
from ...utils.pathutils import is_writable_dir, safe_unlink


class BlobStore:
    """Raw byte storage in a single directory.

    Every entry is one regular file named by its hashed key; the directory
    listing plus per-file mtime is the whole catalogue.  Methods report
    problems through :class:`Outcome` values instead of raising, and they
    never log: callers decide which failures deserve a diagnostic.

    Writes go to a uniquely named temp file in the same directory and are
    then renamed over the target, so concurrent readers of a key observe
    either the previous payload or the new one, never a partial file.
    """

    def __init__(self, directory: Path):
        self._directory = Path(directory)
        self.ensure_dir()

    @property
    def directory(self) -> Path:
        return self._directory

    def ensure_dir(self) -> Outcome[None]:
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return Outcome.failure(Status.IO_ERROR, exc)
        return Outcome.success()

    def is_writable(self) -> bool:
        return is_writable_dir(self._directory)

    def path_for(self, name: str) -> Path:
        return self._directory / name

    def write(self, name: str, data: bytes) -> Outcome[None]:
        target = self.path_for(name)
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{name}.", suffix=TEMP_SUFFIX, dir=self._directory
            )
        except OSError as exc:
            return Outcome.failure(Status.IO_ERROR, exc)
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            tmp_path.replace(target)
        except OSError as exc:
            safe_unlink(tmp_path)
            return Outcome.failure(Status.IO_ERROR, exc)
        return Outcome.success()

    def read(self, name: str) -> Outcome[bytes]:
        path = self.path_for(name)
        try:
            with path.open("rb") as handle:
                data = handle.read()
        except FileNotFoundError:
            return Outcome.missing()
        except OSError as exc:
            return Outcome.failure(Status.IO_ERROR, exc)
        return Outcome.success(data)

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def touch(self, name: str) -> Outcome[None]:
        """Set the entry's mtime to now without changing its content."""

        try:
            os.utime(self.path_for(name), None)
        except FileNotFoundError:
            return Outcome.missing()
        except OSError as exc:
            return Outcome.failure(Status.IO_ERROR, exc)
        return Outcome.success()

    def list_entries(self) -> Outcome[list[StoredEntry]]:
        """Return every regular file directly inside the directory."""

        entries: list[StoredEntry] = []
        try:
            with os.scandir(self._directory) as iterator:
                for item in iterator:
                    try:
                        if not item.is_file(follow_symlinks=False):
                            continue
                        stat = item.stat(follow_symlinks=False)
                    except FileNotFoundError:
                        # Removed between listing and stat.
                        continue
                    entries.append(
                        StoredEntry(
                            name=item.name,
                            path=Path(item.path),
                            mtime=stat.st_mtime,
                            size=stat.st_size,
                        )
                    )
        except FileNotFoundError:
            return Outcome.success([])
        except OSError as exc:
            return Outcome.failure(Status.IO_ERROR, exc)
        return Outcome.success(entries)

    def delete(self, name: str) -> Outcome[None]:
        try:
            self.path_for(name).unlink(missing_ok=True)
        except OSError as exc:
            return Outcome.failure(Status.IO_ERROR, exc)
        return Outcome.success()

    def __repr__(self) -> str:
        return f"BlobStore({str(self._directory)!r})"
