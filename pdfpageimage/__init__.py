"""
PDF Page Image - render PDF pages to PNG images on demand.

A document is opened from a locator (absolute path, ``file://`` or
``content://`` reference, ``http(s)`` URL or base64 ``data:`` URI). Each
page/scale/output-group combination is rendered at most once per session,
and closing the session deletes every image and temporary file it created.

Quick Start:
    >>> from pdfpageimage import DocumentSession
    >>> with DocumentSession.open('/path/to/input.pdf') as session:
    ...     page = session.get_page(0, scale=1.0)
    ...     print(page.uri, page.width, page.height)

Main Classes:
    - DocumentSession: One open document with its render cache
    - SessionRegistry: One live session per locator
    - PageImageService: Dictionary-returning facade for host applications

Data Classes:
    - PageArtifact: Rendered image location and pixel size
    - DocumentInfo: Locator and page count
    - CloseReport: Outcome of session teardown

For CLI usage, use the 'pdf-page-image' command after installation.
"""

from pdfpageimage.api import PageImageService
from pdfpageimage.backends import BackendDocument, PdfiumBackend, RenderBackend
from pdfpageimage.cache import RenderCache
from pdfpageimage.config import RenderConfig
from pdfpageimage.exceptions import (
    DecodeError,
    FilesystemError,
    InvalidScale,
    LocatorUnresolved,
    NetworkError,
    NotFound,
    OpenFailed,
    PageImageError,
    PageOutOfRange,
    RenderFailed,
    SessionClosed,
)
from pdfpageimage.locator import ByteSource, Locator, LocatorResolver, Scheme
from pdfpageimage.naming import ArtifactNamer
from pdfpageimage.registry import SessionRegistry
from pdfpageimage.session import DocumentSession
from pdfpageimage.types import CacheKey, CloseReport, DocumentInfo, PageArtifact

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Main classes
    "DocumentSession",
    "SessionRegistry",
    "PageImageService",
    "RenderCache",
    "ArtifactNamer",
    "LocatorResolver",
    "Locator",
    "Scheme",
    "ByteSource",
    "RenderConfig",
    # Backends
    "BackendDocument",
    "RenderBackend",
    "PdfiumBackend",
    # Data types
    "CacheKey",
    "PageArtifact",
    "DocumentInfo",
    "CloseReport",
    # Exceptions
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
    # Version info
    "__version__",
]
