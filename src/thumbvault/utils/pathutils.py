"""Filesystem helpers used by the blob store."""

from __future__ import annotations

import os
from pathlib import Path


def safe_unlink(path: Path) -> bool:
    """Delete *path* if possible; return ``True`` when it is gone afterwards."""

    try:
        path.unlink(missing_ok=True)
    except OSError:
        return not path.exists()
    return True


def is_writable_dir(path: Path) -> bool:
    """Return ``True`` when *path* is an existing directory we may write into."""

    try:
        return path.is_dir() and os.access(path, os.W_OK | os.X_OK)
    except OSError:
        return False
