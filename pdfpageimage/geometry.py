"""Page geometry helpers: rotation handling and output sizing."""

from __future__ import annotations


def normalize_rotation(rotation: int | None) -> int:
    """Return ``rotation`` reduced to one of 0, 90, 180 or 270."""

    if not rotation:
        return 0
    return int(rotation) % 360


def oriented_size(width: float, height: float, rotation: int | None) -> tuple[float, float]:
    """Return the visual page size, swapping sides for quarter-turn rotations."""

    if normalize_rotation(rotation) in (90, 270):
        return height, width
    return width, height


def _pixels(value: float) -> int:
    return max(1, int(value))


def scaled_size(width: float, height: float, scale: float) -> tuple[int, int]:
    return _pixels(width * scale), _pixels(height * scale)


def thumbnail_box(width: float, height: float, max_side: int) -> tuple[int, int]:
    """Fit ``width`` x ``height`` into a square of ``max_side`` keeping aspect ratio."""

    if width <= 0 or height <= 0:
        raise ValueError("Page dimensions must be positive")
    aspect_ratio = width / height
    if width >= height:
        return _pixels(max_side), _pixels(max_side / aspect_ratio)
    return _pixels(max_side * aspect_ratio), _pixels(max_side)


__all__ = ["normalize_rotation", "oriented_size", "scaled_size", "thumbnail_box"]
