"""Backend abstractions for pdfpageimage."""

from .base import BackendDocument, RenderBackend
from .pdfium_backend import PdfiumBackend, PdfiumDocument

__all__ = [
    "BackendDocument",
    "RenderBackend",
    "PdfiumBackend",
    "PdfiumDocument",
]
