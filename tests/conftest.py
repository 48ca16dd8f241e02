from __future__ import annotations

import base64
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from PIL import Image
from pypdf import PdfWriter
from pypdf.generic import RectangleObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfpageimage.backends.base import BackendDocument  # noqa: E402
from pdfpageimage.config import RenderConfig  # noqa: E402
from pdfpageimage.exceptions import OpenFailed, RenderFailed  # noqa: E402

PageSpec = tuple[float, float, int]


def write_pdf(path: Path, pages: Sequence[PageSpec]) -> Path:
    writer = PdfWriter()
    for width, height, rotation in pages:
        page = writer.add_blank_page(width=width, height=height)
        if rotation:
            page.rotate(rotation)
    with path.open("wb") as stream:
        writer.write(stream)
    return path


@pytest.fixture()
def render_config(tmp_path: Path) -> RenderConfig:
    return RenderConfig(persistent_dir=tmp_path / "persistent", scratch_dir=tmp_path / "scratch")


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, pages: Sequence[PageSpec]) -> Path:
        return write_pdf(tmp_path / filename, pages)

    return _create


@pytest.fixture()
def sample_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("sample.pdf", [(200, 100, 0), (100, 200, 0), (150, 150, 0)])


@pytest.fixture()
def rotated_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("rotated.pdf", [(200, 100, 0), (200, 100, 90), (200, 100, 270), (200, 100, 180)])


@pytest.fixture()
def cropped_pdf(tmp_path: Path) -> Path:
    """Two 200x200 pages cropped to 100x200, the second turned a quarter."""

    writer = PdfWriter()
    for rotation in (0, 90):
        page = writer.add_blank_page(width=200, height=200)
        page.cropbox = RectangleObject([0, 0, 100, 200])
        if rotation:
            page.rotate(rotation)
    path = tmp_path / "cropped.pdf"
    with path.open("wb") as stream:
        writer.write(stream)
    return path


@pytest.fixture()
def data_uri(sample_pdf: Path) -> str:
    payload = base64.b64encode(sample_pdf.read_bytes()).decode("ascii")
    return f"data:application/pdf;base64,{payload}"


def list_files(directory: Path) -> list[Path]:
    if not directory.exists():
        return []
    return sorted(path for path in directory.rglob("*") if path.is_file())


# ----------------------------------------------------------------------
# Counting backend used where real rasterization is not the point
# ----------------------------------------------------------------------
@dataclass
class FakeDocument(BackendDocument):
    pages: list[PageSpec] = field(default_factory=list)
    backend: "FakeBackend | None" = None
    closed: bool = False

    def page_box(self, index: int) -> tuple[float, float, int]:
        return self.pages[index]

    def render(self, index: int, width: int, height: int) -> Image.Image:
        assert self.backend is not None
        return self.backend.render(index, width, height)

    def close(self) -> None:
        self.closed = True
        if self.backend is not None:
            self.backend.closed_documents += 1


class FakeBackend:
    def __init__(
        self,
        pages: Sequence[PageSpec] = ((200, 100, 0), (100, 200, 0), (150, 150, 0)),
        *,
        delay: float = 0.0,
        fail_on: Sequence[int] = (),
        invalid: bool = False,
    ) -> None:
        self.pages = list(pages)
        self.delay = delay
        self.fail_on = set(fail_on)
        self.invalid = invalid
        self.render_calls: list[tuple[int, int, int]] = []
        self.loaded_paths: list[str] = []
        self.closed_documents = 0
        self.documents: list[FakeDocument] = []
        self._lock = threading.Lock()

    def load(self, pdf_path: str) -> FakeDocument:
        self.loaded_paths.append(pdf_path)
        if self.invalid:
            raise OpenFailed(f"Data is not a valid PDF: {pdf_path}")
        document = FakeDocument(
            num_pages=len(self.pages),
            file_size=Path(pdf_path).stat().st_size,
            pages=self.pages,
            backend=self,
        )
        self.documents.append(document)
        return document

    def render(self, index: int, width: int, height: int) -> Image.Image:
        with self._lock:
            self.render_calls.append((index, width, height))
        if self.delay:
            time.sleep(self.delay)
        if index in self.fail_on:
            raise RenderFailed(f"Failed to render page {index}")
        return Image.new("RGB", (width, height), "white")

    def save(self, image: Image.Image, destination: Path) -> None:
        image.save(destination, format="PNG")


@pytest.fixture()
def fake_backend() -> FakeBackend:
    return FakeBackend()
