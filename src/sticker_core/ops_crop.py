# free crop + rotation for re-editing a single sticker

from __future__ import annotations

import logging
from dataclasses import dataclass

from PIL import Image

from .errors import InvalidConfig
from .io import ensure_rgba

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropArea:
    x: int
    y: int
    width: int
    height: int

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfig(f"Crop size must be positive, got {self.width}x{self.height}")

    @property
    def box(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


def rotate_image(img: Image.Image, rotation: float) -> Image.Image:
    """Rotate clockwise by `rotation` degrees, growing the canvas; new corners are transparent."""
    rgba = ensure_rgba(img)
    if rotation % 360 == 0:
        return rgba.copy()
    # PIL rotates counter-clockwise
    return rgba.rotate(
        -rotation,
        resample=Image.Resampling.BICUBIC,
        expand=True,
        fillcolor=(0, 0, 0, 0),
    )


def crop_image(img: Image.Image, area: CropArea, rotation: float = 0.0) -> Image.Image:
    """
    Rotate, then cut `area` out of the rotated frame.

    Parts of the area that fall outside the image come out transparent.
    """
    area.validate()
    rotated = rotate_image(img, rotation)

    left, top, right, bottom = area.box
    if right <= 0 or bottom <= 0 or left >= rotated.width or top >= rotated.height:
        raise InvalidConfig(
            f"Crop {area.box} does not intersect the {rotated.width}x{rotated.height} image"
        )

    out = rotated.crop(area.box)
    logger.debug("Cropped %s at %.1f deg -> %dx%d", area.box, rotation, out.width, out.height)
    return out
