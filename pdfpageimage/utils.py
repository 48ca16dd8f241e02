"""Logging and path helpers shared by pdfpageimage modules."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, os.PathLike]

ROOT_LOGGER = "pdfpageimage"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.WARNING)
        root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the ``pdfpageimage`` root.

    Short names such as ``"session"`` are prefixed. The root carries the only
    handler, so module loggers never print a record twice.
    """

    root = _root_logger()
    if name == ROOT_LOGGER:
        return root
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Set the package-wide log level, e.g. from a ``--verbose`` flag."""

    root = _root_logger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    return root


def resolve_directory(path: Optional[PathLike], field_name: str = "path") -> Path:
    """Normalize a configured directory to an absolute :class:`Path`."""

    if path is None or str(path).strip() == "":
        raise ValueError(f"{field_name} must be a non-empty path")
    return Path(path).expanduser().resolve()


def file_uri(path: PathLike) -> str:
    """Return the ``file://`` URI for ``path``."""

    return Path(path).resolve().as_uri()
