"""Backend protocol for page rendering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from ..geometry import oriented_size


@dataclass
class BackendDocument:
    """Represents a loaded PDF document with backend-specific helpers."""

    num_pages: int
    file_size: int

    def page_box(self, index: int) -> tuple[float, float, int]:
        """Return ``(width, height, rotation)`` of the unrotated visible (crop) box."""
        raise NotImplementedError

    def page_size(self, index: int) -> tuple[float, float]:
        """Return the page size in points as it appears once rotation is applied."""

        width, height, rotation = self.page_box(index)
        return oriented_size(width, height, rotation)

    def render(self, index: int, width: int, height: int) -> Any:
        """Rasterize page ``index`` into an image of exactly ``width`` x ``height``."""
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class RenderBackend(Protocol):
    """Protocol defining the rendering capability consumed by sessions."""

    def load(self, pdf_path: str) -> BackendDocument:
        """Load a PDF file and return a backend document wrapper."""

    def save(self, image: Any, destination: Path) -> None:
        """Encode ``image`` and write it to ``destination``."""
