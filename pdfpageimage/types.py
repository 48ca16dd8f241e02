"""
Type definitions and dataclasses for pdfpageimage.

This module defines the value types that flow between the cache, the
session and the boundary facade.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CacheKey:
    """
    Identity of a rendered artifact within one session.

    Attributes:
        page_index: Zero-based page index
        scale: Render scale relative to PDF points
        output_group: Named output folder, or None for scratch output
        is_thumbnail: Whether the key addresses the bounded page-0 thumbnail
    """
    page_index: int
    scale: float
    output_group: Optional[str] = None
    is_thumbnail: bool = False

    def __post_init__(self) -> None:
        # An empty group and no group address the same scratch output.
        if not self.output_group:
            object.__setattr__(self, "output_group", None)
        object.__setattr__(self, "scale", float(self.scale))


@dataclass(frozen=True)
class PageArtifact:
    """
    A rendered page image and its location on disk.

    Attributes:
        uri: ``file://`` URI of the image
        path: Filesystem path of the image
        width: Pixel width
        height: Pixel height
    """
    uri: str
    path: Path
    width: int
    height: int

    def to_dict(self) -> Dict[str, Any]:
        return {"uri": self.uri, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class DocumentInfo:
    """Read-only projection of an open document."""

    locator: str
    page_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"uri": self.locator, "pageCount": self.page_count}


@dataclass
class CloseReport:
    """
    Outcome of tearing down a session.

    Attributes:
        removed: Number of artifact files deleted
        failures: Number of artifact files that could not be deleted
        failed_paths: Paths that could not be deleted
        temp_file_removed: Whether an owned downloaded/decoded file was deleted
    """
    removed: int = 0
    failures: int = 0
    failed_paths: List[str] = field(default_factory=list)
    temp_file_removed: bool = False

    def __str__(self) -> str:
        return f"CloseReport(removed={self.removed}, failures={self.failures})"


__all__ = ["CacheKey", "PageArtifact", "DocumentInfo", "CloseReport"]
