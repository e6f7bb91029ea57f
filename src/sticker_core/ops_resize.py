# quality resampling into new RGBA images

from __future__ import annotations

import logging
from typing import Literal

from PIL import Image

from .errors import DecodeError, InvalidConfig
from .geometry import Size, fit_within
from .io import ensure_rgba

logger = logging.getLogger(__name__)

Quality = Literal["high", "bilinear", "box", "nearest"]


def _quality_to_pil(quality: Quality) -> int:
    if quality == "high":
        return Image.Resampling.LANCZOS
    if quality == "bilinear":
        return Image.Resampling.BILINEAR
    if quality == "box":
        return Image.Resampling.BOX
    if quality == "nearest":
        return Image.Resampling.NEAREST
    raise InvalidConfig(f"Unknown resample quality: {quality}")


def resample(img: Image.Image, size: tuple[int, int], *, quality: Quality = "high") -> Image.Image:
    """Render img into a new RGBA image of the given size. The source is left alone."""
    width, height = size
    if width <= 0 or height <= 0:
        raise InvalidConfig(f"Target size must be positive, got {width}x{height}")
    filt = _quality_to_pil(quality)

    try:
        rgba = ensure_rgba(img)
        if rgba.width <= 0 or rgba.height <= 0:
            raise DecodeError(f"Image has no pixels: {rgba.size}")
        if rgba.size == (width, height):
            return rgba.copy()
        # Pillow premultiplies alpha for RGBA resizes, so edges don't pick up
        # colour from fully transparent neighbours.
        out = rgba.resize((width, height), resample=filt)
    except DecodeError:
        raise
    except Exception as e:
        raise DecodeError(f"Image cannot be rasterized ({e})") from e

    logger.debug("Resampled %dx%d -> %dx%d (%s)", img.width, img.height, width, height, quality)
    return out


def fit_image(
    img: Image.Image,
    max_width: int,
    max_height: int,
    *,
    quality: Quality = "high",
) -> Image.Image:
    try:
        rgba = ensure_rgba(img)
        width, height = rgba.size
    except Exception as e:
        raise DecodeError(f"Image cannot be rasterized ({e})") from e
    if width <= 0 or height <= 0:
        raise DecodeError(f"Image has no pixels: {rgba.size}")
    target: Size = fit_within(width, height, max_width, max_height)
    return resample(rgba, target, quality=quality)
