"""Per-document resource manager.

A :class:`DocumentSession` owns the resolved byte source, the backend document
handle and the :class:`~pdfpageimage.cache.RenderCache` for one opened PDF.
Every image it produces is tracked and deleted again by :meth:`close`.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from .backends import BackendDocument, PdfiumBackend, RenderBackend
from .cache import RenderCache
from .config import RenderConfig
from .exceptions import InvalidScale, PageImageError, PageOutOfRange, RenderFailed, SessionClosed
from .geometry import scaled_size, thumbnail_box
from .locator import ByteSource, LocatorResolver
from .naming import ArtifactNamer
from .types import CacheKey, CloseReport, DocumentInfo, PageArtifact
from .utils import file_uri, get_logger

LOGGER = get_logger("pdfpageimage.session")


class DocumentSession:
    """Live state for one open document."""

    def __init__(
        self,
        locator: str,
        byte_source: ByteSource,
        document: BackendDocument,
        *,
        backend: RenderBackend,
        config: Optional[RenderConfig] = None,
        namer: Optional[ArtifactNamer] = None,
    ) -> None:
        self.locator = locator
        self.config = config or RenderConfig()
        self.byte_source = byte_source
        self.backend = backend
        self._document = document
        self._namer = namer or ArtifactNamer(self.config)
        self._cache = RenderCache()

        self._state = threading.Condition()
        self._in_flight = 0
        self._closing = False
        self._closed = False

    @classmethod
    def open(
        cls,
        locator: str,
        *,
        backend: Optional[RenderBackend] = None,
        config: Optional[RenderConfig] = None,
        resolver: Optional[LocatorResolver] = None,
    ) -> "DocumentSession":
        config = config or RenderConfig()
        backend = backend or PdfiumBackend()
        resolver = resolver or LocatorResolver(config)

        byte_source = resolver.resolve(locator)
        try:
            document = backend.load(str(byte_source.path))
        except BaseException:
            byte_source.release()
            raise
        LOGGER.info("Opened %s (%d pages)", _describe(locator), document.num_pages)
        return cls(locator, byte_source, document, backend=backend, config=config)

    # ------------------------------------------------------------------
    # Lifecycle guards
    # ------------------------------------------------------------------
    @property
    def closed(self) -> bool:
        with self._state:
            return self._closed or self._closing

    @contextmanager
    def _operation(self) -> Iterator[None]:
        with self._state:
            if self._closed or self._closing:
                raise SessionClosed(f"Session for {_describe(self.locator)} is closed")
            self._in_flight += 1
        try:
            yield
        finally:
            with self._state:
                self._in_flight -= 1
                self._state.notify_all()

    def __enter__(self) -> "DocumentSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Public contract
    # ------------------------------------------------------------------
    def page_count(self) -> int:
        with self._operation():
            return self._document.num_pages

    def info(self) -> DocumentInfo:
        with self._operation():
            return DocumentInfo(locator=self.locator, page_count=self._document.num_pages)

    @property
    def cache(self) -> RenderCache:
        return self._cache

    def get_page(self, index: int, scale: Optional[float] = None, output_group: Optional[str] = None) -> PageArtifact:
        """Return the image for page ``index``, rendering it on first request.

        Requesting page 0 with a named ``output_group`` also produces the
        group's ``thumbnail`` image, which is cached under its own key.
        """

        with self._operation():
            return self._get_page(index, scale, output_group)

    def get_thumbnail(self, output_group: str) -> PageArtifact:
        if not output_group:
            raise ValueError("Folder name is required for thumbnail generation")
        with self._operation():
            return self._ensure_thumbnail(output_group)

    def generate_all_pages(self, scale: Optional[float] = None, output_group: Optional[str] = None) -> List[PageArtifact]:
        """Render every page in order, stopping at the first failure."""

        with self._operation():
            return [
                self._get_page(index, scale, output_group)
                for index in range(self._document.num_pages)
            ]

    def close(self, keep_artifacts: bool = False) -> CloseReport:
        """Delete produced images and temp files and release the document.

        Waits for in-flight renders. Closing an already closed session is a
        no-op returning an empty report. With ``keep_artifacts`` the rendered
        images are left on disk and only the document and temp file go.
        """

        with self._state:
            if self._closed or self._closing:
                return CloseReport()
            self._closing = True
            while self._in_flight:
                self._state.wait()

        report = CloseReport()
        try:
            seen = set()
            drained = self._cache.drain()
            if keep_artifacts:
                drained = []
            for artifact in drained:
                if artifact.path in seen:
                    continue
                seen.add(artifact.path)
                try:
                    artifact.path.unlink()
                    report.removed += 1
                except OSError as exc:
                    report.failures += 1
                    report.failed_paths.append(str(artifact.path))
                    LOGGER.warning("Error removing %s: %s", artifact.path, exc)
            self._document.close()
        finally:
            report.temp_file_removed = self.byte_source.release()
            with self._state:
                self._closed = True
                self._closing = False

        LOGGER.info("Closed %s: %s", _describe(self.locator), report)
        return report

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def _check_index(self, index: int) -> None:
        count = self._document.num_pages
        if not isinstance(index, int) or isinstance(index, bool) or index < 0 or index >= count:
            raise PageOutOfRange(index, count)

    @staticmethod
    def _check_scale(scale: float) -> None:
        if isinstance(scale, bool) or not isinstance(scale, (int, float)) or scale <= 0:
            raise InvalidScale(f"Scale must be a positive number, got {scale!r}")

    def _get_page(self, index: int, scale: Optional[float], output_group: Optional[str]) -> PageArtifact:
        # Callers hold an ``_operation`` slot.
        scale = self.config.default_scale if scale is None else scale
        self._check_index(index)
        self._check_scale(scale)
        key = CacheKey(index, scale, output_group, False)
        artifact = self._cache.get_or_render(key, lambda: self._render(key))
        if index == 0 and key.output_group:
            self._ensure_thumbnail(key.output_group)
        return artifact

    def _ensure_thumbnail(self, output_group: str) -> PageArtifact:
        key = CacheKey(0, self.config.thumbnail_scale, output_group, True)
        return self._cache.get_or_render(key, lambda: self._render(key))

    def _target_size(self, key: CacheKey) -> tuple[int, int]:
        width, height = self._document.page_size(key.page_index)
        if key.is_thumbnail:
            return thumbnail_box(width, height, self.config.thumbnail_max_side)
        return scaled_size(width, height, key.scale)

    def _render(self, key: CacheKey) -> PageArtifact:
        width, height = self._target_size(key)
        destination = self._namer.name_for(key.page_index, key.output_group, key.is_thumbnail)
        try:
            image = self._document.render(key.page_index, width, height)
            self.backend.save(image, destination)
        except PageImageError:
            self._discard(key, destination)
            raise
        except Exception as exc:
            self._discard(key, destination)
            raise RenderFailed(f"Failed to render page {key.page_index}: {exc}") from exc
        return PageArtifact(uri=file_uri(destination), path=destination, width=width, height=height)

    def _discard(self, key: CacheKey, destination: Path) -> None:
        # A grouped path may already belong to a cached render at another scale.
        if key.output_group is not None and any(
            artifact.path == destination for artifact in self._cache.artifacts()
        ):
            return
        try:
            destination.unlink(missing_ok=True)
        except OSError as exc:
            LOGGER.warning("Error removing partial image %s: %s", destination, exc)

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"DocumentSession(locator={_describe(self.locator)!r}, state={state})"


def _describe(locator: str) -> str:
    if locator.startswith("data:"):
        return locator.split(",", 1)[0] + ",..."
    return locator


__all__ = ["DocumentSession"]
