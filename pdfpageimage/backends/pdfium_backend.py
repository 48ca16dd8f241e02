"""pypdfium2 backend implementation for pdfpageimage.

pypdf validates the document and counts pages; pypdfium2 reports the visible
(crop) box, rasterizes pages and Pillow encodes the result.
"""

from __future__ import annotations

import io
import threading
from dataclasses import dataclass, field
from pathlib import Path

import pypdfium2 as pdfium
from PIL import Image
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ..exceptions import FilesystemError, OpenFailed, RenderFailed
from .base import BackendDocument, RenderBackend

WHITE = (255, 255, 255, 255)


@dataclass
class PdfiumDocument(BackendDocument):
    pdf: pdfium.PdfDocument
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def page_box(self, index: int) -> tuple[float, float, int]:
        with self._lock:
            try:
                page = self.pdf[index]
                try:
                    left, bottom, right, top = page.get_cropbox()
                    rotation = page.get_rotation()
                finally:
                    page.close()
            except pdfium.PdfiumError as exc:
                raise RenderFailed(f"Failed to read geometry of page {index}: {exc}") from exc
        return abs(right - left), abs(top - bottom), int(rotation or 0)

    def render(self, index: int, width: int, height: int) -> Image.Image:
        page_width, page_height = self.page_size(index)
        scale = max(width / page_width, height / page_height)
        # pdfium handles are not safe for concurrent use.
        with self._lock:
            try:
                page = self.pdf[index]
                try:
                    image = page.render(scale=scale, fill_color=WHITE).to_pil()
                finally:
                    page.close()
            except pdfium.PdfiumError as exc:
                raise RenderFailed(f"Failed to render page {index}: {exc}") from exc
        if image.size != (width, height):
            image = image.resize((width, height), Image.LANCZOS)
        return image

    def close(self) -> None:
        with self._lock:
            self.pdf.close()


class PdfiumBackend(RenderBackend):
    """Backend implementation that uses ``pypdfium2`` under the hood."""

    def load(self, pdf_path: str) -> PdfiumDocument:
        path = Path(pdf_path)
        try:
            raw_bytes = path.read_bytes()
        except OSError as exc:
            raise OpenFailed(f"Unable to read PDF file: {pdf_path}. Error: {exc}") from exc

        try:
            reader = PdfReader(io.BytesIO(raw_bytes))
            if reader.is_encrypted and reader.decrypt("") == 0:
                raise OpenFailed(f"PDF is encrypted: {pdf_path}")
            num_pages = len(reader.pages)
        except PdfReadError as exc:
            raise OpenFailed(f"Corrupted or invalid PDF file: {pdf_path}. Error: {exc}") from exc
        except OpenFailed:
            raise
        except Exception as exc:
            raise OpenFailed(f"Unexpected error reading PDF: {pdf_path}. Error: {exc}") from exc

        if num_pages == 0:
            raise OpenFailed(f"PDF has no pages: {pdf_path}")

        try:
            pdf = pdfium.PdfDocument(raw_bytes)
        except pdfium.PdfiumError as exc:
            raise OpenFailed(f"Data is not a valid PDF: {pdf_path}. Error: {exc}") from exc

        return PdfiumDocument(num_pages=num_pages, file_size=len(raw_bytes), pdf=pdf)

    def save(self, image: Image.Image, destination: Path) -> None:
        path = Path(destination)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            image.save(path, format="PNG")
        except OSError as exc:
            raise FilesystemError(f"Unable to write image {path}: {exc}") from exc
