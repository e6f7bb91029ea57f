# cut a sticker sheet into an even grid

from __future__ import annotations

import logging
from dataclasses import dataclass

from PIL import Image

from .errors import DecodeError, InvalidConfig
from .geometry import STICKER_SIZE, Size
from .io import ensure_rgba
from .ops_resize import Quality, fit_image

logger = logging.getLogger(__name__)

Box = tuple[int, int, int, int]  # left, top, right, bottom


@dataclass(frozen=True)
class SliceGrid:
    cols: int = 3
    rows: int = 3

    def validate(self) -> None:
        for name, value in (("cols", self.cols), ("rows", self.rows)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfig(f"{name} must be an integer, got {value!r}")
            if value < 1:
                raise InvalidConfig(f"{name} must be >= 1, got {value}")

    @property
    def count(self) -> int:
        return self.cols * self.rows


def slice_regions(width: int, height: int, grid: SliceGrid) -> list[Box]:
    """
    Row-major crop boxes for a cols x rows grid.

    Each cell is floor(W / cols) x floor(H / rows); leftover pixels on the
    right and bottom edges are dropped.
    """
    grid.validate()
    slice_w = width // grid.cols
    slice_h = height // grid.rows
    if slice_w < 1 or slice_h < 1:
        raise InvalidConfig(
            f"Grid {grid.cols}x{grid.rows} is finer than the {width}x{height} image"
        )

    rem_w = width - slice_w * grid.cols
    rem_h = height - slice_h * grid.rows
    if rem_w or rem_h:
        logger.debug("Discarding %dpx right / %dpx bottom remainder", rem_w, rem_h)

    boxes: list[Box] = []
    for r in range(grid.rows):
        for c in range(grid.cols):
            left = c * slice_w
            top = r * slice_h
            boxes.append((left, top, left + slice_w, top + slice_h))
    return boxes


def slice_grid(img: Image.Image, grid: SliceGrid) -> list[Image.Image]:
    """Raw grid cells as independent RGBA images, row-major."""
    grid.validate()
    if img.width <= 0 or img.height <= 0:
        raise DecodeError(f"Image has no pixels: {img.size}")
    rgba = ensure_rgba(img)
    return [rgba.crop(box) for box in slice_regions(rgba.width, rgba.height, grid)]


def slice_sheet(
    img: Image.Image,
    grid: SliceGrid,
    *,
    box: Size = STICKER_SIZE,
    quality: Quality = "high",
) -> list[Image.Image]:
    """Slice a sheet and fit every cell into the sticker box."""
    cells = slice_grid(img, grid)
    out = [fit_image(cell, box.width, box.height, quality=quality) for cell in cells]
    logger.info("Sliced %dx%d sheet into %d stickers", img.width, img.height, len(out))
    return out
