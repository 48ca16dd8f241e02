"""Boundary facade returning plain dictionaries.

These functions mirror the operations exposed to a host application:
``open``, ``generate``, ``generate_all_pages`` and ``close``. Sessions are kept
in a :class:`~pdfpageimage.registry.SessionRegistry` so repeat calls for the
same locator reuse the already opened document and its rendered pages.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .backends import RenderBackend
from .config import RenderConfig
from .locator import LocatorResolver
from .registry import SessionRegistry
from .session import DocumentSession


class PageImageService:
    """Session-reusing entry point for host applications."""

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        *,
        backend: Optional[RenderBackend] = None,
        resolver: Optional[LocatorResolver] = None,
    ) -> None:
        self.config = config or RenderConfig()
        self.backend = backend
        self.resolver = resolver or LocatorResolver(self.config)
        self.registry = SessionRegistry(self._open_session)

    def _open_session(self, locator: str) -> DocumentSession:
        return DocumentSession.open(locator, backend=self.backend, config=self.config, resolver=self.resolver)

    def open(self, locator: str) -> Dict[str, Any]:
        return self.registry.open(locator).info().to_dict()

    def generate(self, locator: str, page_index: int, scale: Optional[float] = None) -> Dict[str, Any]:
        session = self.registry.open(locator)
        return session.get_page(page_index, scale).to_dict()

    def generate_all_pages(
        self,
        locator: str,
        scale: Optional[float] = None,
        output_group: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        session = self.registry.open(locator)
        return [artifact.to_dict() for artifact in session.generate_all_pages(scale, output_group)]

    def close(self, locator: str) -> None:
        self.registry.close(locator)

    def close_all(self) -> None:
        self.registry.close_all()


_default_service: Optional[PageImageService] = None


def default_service() -> PageImageService:
    global _default_service
    if _default_service is None:
        _default_service = PageImageService()
    return _default_service


def open(locator: str) -> Dict[str, Any]:  # noqa: A001 - mirrors the host API name
    return default_service().open(locator)


def generate(locator: str, page_index: int, scale: Optional[float] = None) -> Dict[str, Any]:
    return default_service().generate(locator, page_index, scale)


def generate_all_pages(
    locator: str,
    scale: Optional[float] = None,
    output_group: Optional[str] = None,
) -> List[Dict[str, Any]]:
    return default_service().generate_all_pages(locator, scale, output_group)


def close(locator: str) -> None:
    default_service().close(locator)


__all__ = ["PageImageService", "default_service", "open", "generate", "generate_all_pages", "close"]
