# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Download a remote version catalog into a local cache file."""

from __future__ import annotations

import http.client
import logging
import os
import tempfile
import urllib.error
import urllib.request
from pathlib import Path
from typing import BinaryIO, Final
from urllib.parse import urlparse

from ..errors import FilesystemError, NetworkError
from ..logging import info

LOGGER = logging.getLogger(__name__)

_SUPPORTED_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})
_USER_AGENT: Final[str] = "ley-vault-catalog/1.0"
_TEMP_SUFFIX: Final[str] = ".part"
_CHUNK_SIZE: Final[int] = 64 * 1024


def fetch_and_cache(
    remote_url: str,
    local_path: Path | str,
    *,
    timeout: float | None = None,
    use_emoji: bool = True,
) -> Path:
    """Copy the resource at ``remote_url`` into ``local_path``.

    The bytes are streamed into a temporary sibling of ``local_path`` and
    moved over the destination once the download completed, so the cache
    file only ever holds the result of a successful fetch.

    Args:
        remote_url: HTTP(S) location of the catalog document.
        local_path: Destination cache file.
        timeout: Optional socket timeout in seconds. ``None`` blocks until
            the transport gives up.
        use_emoji: Whether the loading notice may include emoji glyphs.

    Returns:
        Path: ``local_path`` holding a byte-for-byte copy of the remote resource.

    Raises:
        NetworkError: If the resource cannot be retrieved.
        FilesystemError: If the cache file cannot be prepared or written.
    """

    destination = Path(local_path)
    info(f"Loading global {_document_name(remote_url)} ...", use_emoji=use_emoji)
    _ensure_supported(remote_url, destination)
    _ensure_parent(remote_url, destination)

    temp_path = _open_temp_sibling(remote_url, destination)
    try:
        _download_into(remote_url, temp_path, destination, timeout=timeout)
        _apply_default_mode(remote_url, temp_path, destination)
        _replace(remote_url, temp_path, destination)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
    LOGGER.debug("cached %s at %s", remote_url, destination)
    return destination


def _ensure_supported(url: str, destination: Path) -> None:
    scheme = urlparse(url).scheme.lower()
    if scheme not in _SUPPORTED_SCHEMES:
        raise NetworkError(
            f"Unsupported catalog URL scheme '{scheme}' in {url}",
            url=url,
            path=destination,
        )


def _ensure_parent(url: str, destination: Path) -> None:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(
            f"Cannot create cache directory {destination.parent}: {exc}",
            url=url,
            path=destination,
        ) from exc


def _open_temp_sibling(url: str, destination: Path) -> Path:
    try:
        handle, name = tempfile.mkstemp(
            prefix=f".{destination.name}.",
            suffix=_TEMP_SUFFIX,
            dir=destination.parent,
        )
    except OSError as exc:
        raise FilesystemError(
            f"Cannot create temporary file next to {destination}: {exc}",
            url=url,
            path=destination,
        ) from exc
    os.close(handle)
    return Path(name)


def _download_into(url: str, target: Path, destination: Path, *, timeout: float | None) -> None:
    request = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
    try:
        response = urllib.request.urlopen(request, timeout=timeout)
    except urllib.error.HTTPError as exc:
        exc.close()
        raise NetworkError(
            f"Catalog request to {url} failed with HTTP {exc.code}",
            url=url,
            path=destination,
        ) from exc
    except (urllib.error.URLError, OSError) as exc:
        raise NetworkError(f"Cannot reach {url}: {exc}", url=url, path=destination) from exc

    with response:
        try:
            handle = target.open("wb")
        except OSError as exc:
            raise FilesystemError(f"Cannot write {target}: {exc}", url=url, path=destination) from exc
        with handle:
            _copy_stream(url, response, handle, destination)


def _copy_stream(url: str, response: BinaryIO, handle: BinaryIO, destination: Path) -> None:
    copied = 0
    while True:
        try:
            chunk = response.read(_CHUNK_SIZE)
        except (OSError, http.client.HTTPException) as exc:
            raise NetworkError(f"Download of {url} was interrupted: {exc}", url=url, path=destination) from exc
        if not chunk:
            break
        try:
            handle.write(chunk)
        except OSError as exc:
            raise FilesystemError(f"Cannot write {destination}: {exc}", url=url, path=destination) from exc
        copied += len(chunk)

    expected = _content_length(response)
    if expected is not None and copied != expected:
        raise NetworkError(
            f"Download of {url} was interrupted after {copied} of {expected} bytes",
            url=url,
            path=destination,
        )


def _content_length(response: BinaryIO) -> int | None:
    headers = getattr(response, "headers", None)
    raw = headers.get("Content-Length") if headers is not None else None
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None


def _apply_default_mode(url: str, temp_path: Path, destination: Path) -> None:
    # mkstemp creates 0600 files; a cache file gets the mode a plain write would.
    mask = os.umask(0)
    os.umask(mask)
    try:
        os.chmod(temp_path, 0o666 & ~mask)
    except OSError as exc:
        raise FilesystemError(f"Cannot set permissions on {temp_path}: {exc}", url=url, path=destination) from exc


def _replace(url: str, source: Path, destination: Path) -> None:
    try:
        os.replace(source, destination)
    except OSError as exc:
        raise FilesystemError(
            f"Cannot replace cache file {destination}: {exc}",
            url=url,
            path=destination,
        ) from exc


def _document_name(url: str) -> str:
    return Path(urlparse(url).path).name or url


__all__ = ["fetch_and_cache"]
