"""Configuration object shared by sessions, resolvers and namers."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from .utils import resolve_directory

DEFAULT_SCALE = 2.0
THUMBNAIL_SCALE = 0.3
THUMBNAIL_MAX_SIDE = 300


def _default_persistent_dir() -> Path:
    return Path.home() / ".pdfpageimage"


def _default_scratch_dir() -> Path:
    return Path(tempfile.gettempdir()) / "pdfpageimage"


@dataclass
class RenderConfig:
    """Holds filesystem locations and rendering defaults for a session.

    ``persistent_dir`` receives named output groups, ``scratch_dir`` receives
    downloaded documents and ungrouped page images.
    """

    persistent_dir: Path = field(default_factory=_default_persistent_dir)
    scratch_dir: Path = field(default_factory=_default_scratch_dir)
    default_scale: float = DEFAULT_SCALE
    thumbnail_scale: float = THUMBNAIL_SCALE
    thumbnail_max_side: int = THUMBNAIL_MAX_SIDE
    http_timeout: float = 30.0
    image_format: str = "png"

    def __post_init__(self) -> None:
        self.persistent_dir = resolve_directory(self.persistent_dir, "persistent_dir")
        self.scratch_dir = resolve_directory(self.scratch_dir, "scratch_dir")
        if self.thumbnail_max_side <= 0:
            raise ValueError("thumbnail_max_side must be positive")

    def ensure_scratch_dir(self) -> Path:
        self.scratch_dir.mkdir(parents=True, exist_ok=True)
        return self.scratch_dir

    def with_updates(self, **updates: Any) -> "RenderConfig":
        return replace(self, **{k: v for k, v in updates.items() if v is not None})


__all__ = ["RenderConfig", "DEFAULT_SCALE", "THUMBNAIL_SCALE", "THUMBNAIL_MAX_SIDE"]
