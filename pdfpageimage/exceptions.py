"""
Custom exceptions for pdfpageimage.

Every error carries a machine-readable ``code`` so the calling layer can
report ``{"code": ..., "message": ...}`` instead of a stack trace.
"""

from __future__ import annotations

from typing import Dict


class PageImageError(Exception):
    """Base exception for all pdfpageimage errors."""

    code = "PAGE_IMAGE_ERROR"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown page image error occurred."

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "message": self.message}


class LocatorUnresolved(PageImageError):
    """Raised when a locator matches no supported scheme or cannot be resolved."""

    code = "LOCATOR_UNRESOLVED"

    @property
    def default_message(self) -> str:
        return "Document locator could not be resolved."


class NotFound(LocatorUnresolved):
    """Raised when a local file or content reference does not exist or is unreadable."""

    code = "NOT_FOUND"

    @property
    def default_message(self) -> str:
        return "Document not found."


class NetworkError(LocatorUnresolved):
    """Raised when downloading a remote document fails."""

    code = "NETWORK_ERROR"

    @property
    def default_message(self) -> str:
        return "Failed to download the document."


class DecodeError(LocatorUnresolved):
    """Raised when an inline ``data:`` payload is not valid base64."""

    code = "DECODE_ERROR"

    @property
    def default_message(self) -> str:
        return "Failed to decode base64 string."


class OpenFailed(PageImageError):
    """Raised when the resolved bytes are not a valid PDF document."""

    code = "OPEN_FAILED"

    @property
    def default_message(self) -> str:
        return "Data is not a valid PDF."


class PageOutOfRange(PageImageError):
    """Raised when a page index falls outside ``[0, page_count)``."""

    code = "PAGE_OUT_OF_RANGE"

    def __init__(self, index: int, page_count: int) -> None:
        self.index = index
        self.page_count = page_count
        super().__init__(f"Page number {index} is invalid, file has {page_count} pages")


class FilesystemError(PageImageError):
    """Raised when an output directory or file cannot be created."""

    code = "FILESYSTEM_ERROR"

    @property
    def default_message(self) -> str:
        return "Unable to write output file."


class RenderFailed(PageImageError):
    """Raised when the rendering backend fails to rasterize a page."""

    code = "RENDER_FAILED"

    @property
    def default_message(self) -> str:
        return "Failed to render page."


class SessionClosed(PageImageError):
    """Raised when an operation is attempted on a closed session."""

    code = "SESSION_CLOSED"

    @property
    def default_message(self) -> str:
        return "Document session is closed."


class InvalidScale(PageImageError, ValueError):
    """Raised when a render scale is not a positive number."""

    code = "INVALID_SCALE"

    @property
    def default_message(self) -> str:
        return "Scale must be a positive number."


__all__ = [
    "PageImageError",
    "LocatorUnresolved",
    "NotFound",
    "NetworkError",
    "DecodeError",
    "OpenFailed",
    "PageOutOfRange",
    "FilesystemError",
    "RenderFailed",
    "SessionClosed",
    "InvalidScale",
]
