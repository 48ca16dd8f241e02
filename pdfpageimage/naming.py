"""Output path derivation for rendered page images."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path, PurePath
from typing import Optional

from .config import RenderConfig
from .exceptions import FilesystemError

THUMBNAIL_STEM = "thumbnail"


class ArtifactNamer:
    """Compute output locations for page and thumbnail images.

    Grouped output is deterministic: ``<persistent_dir>/<group>/<page>.png``
    and ``<persistent_dir>/<group>/thumbnail.png``. Ungrouped output gets a
    fresh unique file in the scratch directory on every call.
    """

    def __init__(self, config: Optional[RenderConfig] = None) -> None:
        self.config = config or RenderConfig()

    @property
    def extension(self) -> str:
        return self.config.image_format.lower().lstrip(".")

    def filename_for(self, page_index: int, is_thumbnail: bool = False) -> str:
        stem = THUMBNAIL_STEM if is_thumbnail else str(page_index)
        return f"{stem}.{self.extension}"

    def group_dir(self, output_group: str) -> Path:
        relative = PurePath(output_group)
        if relative.is_absolute() or ".." in relative.parts:
            raise FilesystemError(f"Output group must stay inside the output directory: {output_group}")
        folder = self.config.persistent_dir / relative
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"Unable to create output directory {folder}: {exc}") from exc
        return folder

    def name_for(self, page_index: int, output_group: Optional[str] = None, is_thumbnail: bool = False) -> Path:
        if output_group:
            return self.group_dir(output_group) / self.filename_for(page_index, is_thumbnail)

        prefix = f"{THUMBNAIL_STEM if is_thumbnail else page_index}-"
        try:
            directory = self.config.ensure_scratch_dir()
            fd, name = tempfile.mkstemp(prefix=prefix, suffix=f".{self.extension}", dir=directory)
        except OSError as exc:
            raise FilesystemError(f"Unable to create temporary output file: {exc}") from exc
        os.close(fd)
        return Path(name)


__all__ = ["ArtifactNamer", "THUMBNAIL_STEM"]
