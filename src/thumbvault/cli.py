"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import NoReturn, Optional

import typer
from PIL import Image
from rich import print
from rich.console import Console
from rich.table import Table

from .application.default_cache import get_default_cache
from .config import DEFAULT_FORMAT_NAME, DEFAULT_QUALITY, SECONDS_PER_DAY
from .domain.models import EncodingConfig, ImageFormat
from .errors import CacheUnavailableError, ThumbVaultError
from .infrastructure.services.blob_store import BlobStore
from .infrastructure.services.decoding_cache import DecodingCache
from .utils.logging import ensure_console_logger, get_logger

app = typer.Typer(help="Disk-backed image cache keyed by hashed names")

_CACHE_DIR_OPTION = typer.Option(
    None,
    "--cache-dir",
    help="Cache directory to use instead of the platform default.",
    file_okay=False,
)


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CacheUnavailableError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except ThumbVaultError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _open_cache(cache_dir: Path | None) -> DecodingCache:
    if cache_dir is not None:
        store = BlobStore(cache_dir)
        if not store.is_writable():
            raise CacheUnavailableError(f"Cache directory {cache_dir} is not writable")
        return DecodingCache(store)
    cache = get_default_cache()
    if cache is None:
        raise CacheUnavailableError("No usable default cache directory; pass --cache-dir")
    return cache


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log cache diagnostics to stdout."),
) -> None:
    if verbose:
        ensure_console_logger(get_logger(), "thumbvault-cli", level=logging.DEBUG)


@app.command()
@_handle_errors
def put(
    key: str,
    source: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    encode: bool = typer.Option(False, "--encode/--raw", help="Re-encode the image before storing."),
    image_format: str = typer.Option(DEFAULT_FORMAT_NAME, "--format", help="JPEG, PNG or WEBP."),
    quality: int = typer.Option(DEFAULT_QUALITY, "--quality", min=0, max=100),
    cache_dir: Optional[Path] = _CACHE_DIR_OPTION,
) -> None:
    """Store SOURCE under KEY, verbatim or re-encoded."""

    cache = _open_cache(cache_dir)
    if encode:
        try:
            config = EncodingConfig(ImageFormat.parse(image_format), quality)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc
        try:
            with Image.open(source) as image:
                image.load()
                stored = cache.put(key, image, config)
        except OSError as exc:
            _fail(f"cannot read image {source}: {exc}")
    else:
        stored = cache.put_bytes(key, source.read_bytes())

    if not stored:
        _fail(f"failed to cache {source} under '{key}'")
    print(f"[green]Cached '{key}' as {cache.hasher.hash(key)}")


@app.command()
@_handle_errors
def get(
    key: str,
    dest: Path = typer.Argument(..., dir_okay=False),
    max_width: int = typer.Option(0, "--max-width", help="Bounding width, 0 for unbounded."),
    max_height: int = typer.Option(0, "--max-height", help="Bounding height, 0 for unbounded."),
    raw: bool = typer.Option(False, "--raw", help="Copy the stored bytes without decoding."),
    cache_dir: Optional[Path] = _CACHE_DIR_OPTION,
) -> None:
    """Write the entry cached under KEY to DEST."""

    cache = _open_cache(cache_dir)
    if raw:
        data = cache.get_bytes(key)
        if data is None:
            _fail(f"cache miss for '{key}'")
        dest.write_bytes(data)
        print(f"[green]Wrote {len(data)} bytes to {dest}")
        return

    image = cache.get(key, max_width, max_height)
    if image is None:
        _fail(f"cache miss for '{key}'")
    try:
        image.save(dest)
    except (OSError, ValueError) as exc:
        _fail(f"cannot write {dest}: {exc}")
    print(f"[green]Wrote {image.width}x{image.height} image to {dest}")


@app.command()
@_handle_errors
def purge(
    days: Optional[float] = typer.Option(None, "--days", min=0, help="Remove entries idle for N days."),
    before: Optional[datetime] = typer.Option(
        None,
        "--before",
        formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"],
        help="Remove entries last used before this local time.",
    ),
    cache_dir: Optional[Path] = _CACHE_DIR_OPTION,
) -> None:
    """Delete entries whose last access is older than the cutoff."""

    if (days is None) == (before is None):
        raise typer.BadParameter("pass exactly one of --days or --before")
    cutoff: float | datetime = before if before is not None else time.time() - days * SECONDS_PER_DAY

    cache = _open_cache(cache_dir)
    report = cache.purge_accessed_before(cutoff)
    print(f"[green]Purged {report.deleted} of {report.scanned} entries")
    if report.failed:
        print(f"[yellow]{report.failed} entries could not be removed")


@app.command("ls")
@_handle_errors
def list_entries(cache_dir: Optional[Path] = _CACHE_DIR_OPTION) -> None:
    """List cached entries, most recently used first."""

    cache = _open_cache(cache_dir)
    listing = cache.store.list_entries()
    if not listing:
        _fail(f"cannot list {cache.store.directory}: {listing.reason}")
    entries = sorted(listing.value or [], key=lambda entry: entry.mtime, reverse=True)

    table = Table(title=str(cache.store.directory))
    table.add_column("Entry")
    table.add_column("Bytes", justify="right")
    table.add_column("Last used")
    for entry in entries:
        name = f"{entry.name} (partial)" if entry.is_partial else entry.name
        last_used = datetime.fromtimestamp(entry.mtime).isoformat(sep=" ", timespec="seconds")
        table.add_row(name, str(entry.size), last_used)
    Console().print(table)
    print(f"{len(entries)} entries, {sum(entry.size for entry in entries)} bytes")


if __name__ == "__main__":  # pragma: no cover
    app()
