"""Resolve document locators into local, readable byte sources.

Four addressing schemes are understood:

* ``content://`` and ``file://`` references (``Scheme.CONTENT_REF``)
* absolute filesystem paths (``Scheme.ABSOLUTE_PATH``)
* ``http://`` and ``https://`` URLs (``Scheme.REMOTE_URL``)
* ``data:`` URIs carrying a base64 payload (``Scheme.INLINE_BASE64``)

Remote and inline documents are materialized into a temporary file which the
returned :class:`ByteSource` owns and deletes on :meth:`ByteSource.release`.
"""

from __future__ import annotations

import base64
import binascii
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Callable, Optional
from urllib.parse import urlsplit
from urllib.request import url2pathname

import httpx

from .config import RenderConfig
from .exceptions import DecodeError, FilesystemError, LocatorUnresolved, NetworkError, NotFound
from .utils import get_logger

LOGGER = get_logger("pdfpageimage.locator")

ContentResolver = Callable[[str], "str | Path"]


class Scheme(str, Enum):
    CONTENT_REF = "content_ref"
    ABSOLUTE_PATH = "absolute_path"
    REMOTE_URL = "remote_url"
    INLINE_BASE64 = "inline_base64"


@dataclass(frozen=True)
class Locator:
    """A parsed document locator."""

    raw: str
    scheme: Scheme

    @classmethod
    def parse(cls, raw: str) -> "Locator":
        if not isinstance(raw, str) or not raw:
            raise LocatorUnresolved(f"Invalid locator: {raw!r}")
        if raw.startswith("data:"):
            return cls(raw, Scheme.INLINE_BASE64)

        try:
            scheme = urlsplit(raw).scheme.lower()
        except ValueError as exc:
            raise LocatorUnresolved(f"Malformed locator: {raw}: {exc}") from exc
        if scheme in ("http", "https"):
            return cls(raw, Scheme.REMOTE_URL)
        if scheme in ("file", "content"):
            return cls(raw, Scheme.CONTENT_REF)
        if raw.startswith("/") or os.path.isabs(raw):
            return cls(raw, Scheme.ABSOLUTE_PATH)
        raise LocatorUnresolved(f"Unsupported locator: {raw}")

    def __str__(self) -> str:
        return self.raw


class ByteSource:
    """Readable handle to document bytes on local disk.

    When ``owned_temp_file`` is set the backing file was created by the
    resolver and is deleted by :meth:`release`, exactly once.
    """

    def __init__(self, path: Path, *, owned_temp_file: bool = False) -> None:
        self.path = Path(path)
        self.owned_temp_file = owned_temp_file
        self._released = False

    @property
    def size(self) -> int:
        return self.path.stat().st_size

    @property
    def released(self) -> bool:
        return self._released

    def open(self) -> BinaryIO:
        return self.path.open("rb")

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def release(self) -> bool:
        """Delete the owned temp file. Returns True when a file was removed."""

        if self._released:
            return False
        self._released = True
        if not self.owned_temp_file:
            return False
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        LOGGER.debug("Removed temporary document %s", self.path)
        return True

    def __repr__(self) -> str:
        return f"ByteSource(path={str(self.path)!r}, owned_temp_file={self.owned_temp_file})"


class LocatorResolver:
    """Turn locator strings into :class:`ByteSource` objects."""

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        *,
        client: Optional[httpx.Client] = None,
        content_resolver: Optional[ContentResolver] = None,
    ) -> None:
        self.config = config or RenderConfig()
        self._client = client
        self._content_resolver = content_resolver

    def resolve(self, locator: str | Locator) -> ByteSource:
        parsed = locator if isinstance(locator, Locator) else Locator.parse(locator)
        LOGGER.debug("Resolving %s locator", parsed.scheme.value)
        if parsed.scheme is Scheme.INLINE_BASE64:
            return self._resolve_inline(parsed.raw)
        if parsed.scheme is Scheme.REMOTE_URL:
            return self._resolve_remote(parsed.raw)
        if parsed.scheme is Scheme.CONTENT_REF:
            return self._resolve_content(parsed.raw)
        return self._open_local(Path(parsed.raw), parsed.raw)

    # ------------------------------------------------------------------
    # Scheme handlers
    # ------------------------------------------------------------------
    def _resolve_content(self, raw: str) -> ByteSource:
        try:
            parts = urlsplit(raw)
        except ValueError as exc:
            raise LocatorUnresolved(f"Malformed locator: {raw}: {exc}") from exc
        if parts.scheme.lower() == "file":
            return self._open_local(Path(url2pathname(parts.path)), raw)
        if self._content_resolver is None:
            raise LocatorUnresolved(f"No content resolver available for {raw}")
        try:
            resolved = self._content_resolver(raw)
        except OSError as exc:
            raise NotFound(f"Uri {raw} not found: {exc}") from exc
        return self._open_local(Path(resolved), raw)

    def _open_local(self, path: Path, raw: str) -> ByteSource:
        if not path.is_file():
            raise NotFound(f"File Not Found: {raw}")
        try:
            with path.open("rb") as handle:
                handle.read(0)
        except OSError as exc:
            raise NotFound(f"Unable to read file data at {raw}: {exc}") from exc
        return ByteSource(path)

    def _resolve_remote(self, url: str) -> ByteSource:
        client = self._client or httpx.Client(timeout=self.config.http_timeout, follow_redirects=True)
        try:
            path = self._create_temp_file()
        except FilesystemError:
            if self._client is None:
                client.close()
            raise
        try:
            with client.stream("GET", url) as response:
                response.raise_for_status()
                with path.open("wb") as handle:
                    for chunk in response.iter_bytes():
                        handle.write(chunk)
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
            path.unlink(missing_ok=True)
            raise NetworkError(f"Failed to download {url}: {exc}") from exc
        except OSError as exc:
            path.unlink(missing_ok=True)
            raise FilesystemError(f"Unable to store download of {url}: {exc}") from exc
        finally:
            if self._client is None:
                client.close()
        LOGGER.debug("Downloaded %s to %s", url, path)
        return ByteSource(path, owned_temp_file=True)

    def _resolve_inline(self, raw: str) -> ByteSource:
        header, comma, payload = raw.partition(",")
        if not comma:
            raise DecodeError("Header not found in base64 string")
        try:
            data = base64.b64decode("".join(payload.split()), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(f"Failed to decode base64 string: {exc}") from exc

        path = self._create_temp_file()
        try:
            path.write_bytes(data)
        except OSError as exc:
            path.unlink(missing_ok=True)
            raise FilesystemError(f"Unable to store decoded document: {exc}") from exc
        return ByteSource(path, owned_temp_file=True)

    def _create_temp_file(self) -> Path:
        try:
            directory = self.config.ensure_scratch_dir()
            fd, name = tempfile.mkstemp(suffix=".pdf", dir=directory)
        except OSError as exc:
            raise FilesystemError(f"Unable to create temporary file: {exc}") from exc
        os.close(fd)
        return Path(name)


__all__ = ["Scheme", "Locator", "ByteSource", "LocatorResolver"]
