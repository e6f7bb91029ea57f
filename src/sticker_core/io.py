# decode/encode helpers
# src/sticker_core/io.py

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Iterable

import numpy as np
from PIL import Image, ImageOps

from .errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_EXTS = {".png", ".tga", ".tif", ".tiff", ".bmp", ".webp", ".jpg", ".jpeg", ".gif"}


def is_image_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in SUPPORTED_IMAGE_EXTS


def ensure_rgba(img: Image.Image) -> Image.Image:
    if img.mode == "RGBA":
        return img
    return img.convert("RGBA")


def decode_image(data: bytes) -> Image.Image:
    """Decode an uploaded payload into an RGBA image."""
    if not data:
        raise DecodeError("Empty image payload.")
    try:
        img = Image.open(BytesIO(data))
        img.load()
        fmt = img.format
        # upright per the EXIF Orientation tag
        img = ImageOps.exif_transpose(img)
    except Exception as e:
        raise DecodeError(f"Failed to decode image ({e})") from e
    if img.width <= 0 or img.height <= 0:
        raise DecodeError(f"Image has no pixels: {img.size}")
    logger.debug("Decoded %s image %dx%d", fmt, img.width, img.height)
    return ensure_rgba(img)


def read_payload(path: Path) -> bytes:
    """Raw bytes of an image file, ready for decode_image."""
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise DecodeError(f"Failed to read image: {path} ({e})") from e


def encode_png(img: Image.Image) -> bytes:
    """Lossless PNG encode; keeps the full RGBA including partial alpha."""
    buf = BytesIO()
    try:
        ensure_rgba(img).save(buf, format="PNG")
    except Exception as e:
        raise EncodeError(f"Failed to encode PNG ({e})") from e
    return buf.getvalue()


def to_array(img: Image.Image) -> np.ndarray:
    """Copy of the RGBA pixels as a (height, width, 4) uint8 array."""
    try:
        return np.array(ensure_rgba(img), dtype=np.uint8)
    except Exception as e:
        raise DecodeError(f"Image cannot be rasterized ({e})") from e


def from_array(arr: np.ndarray) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(arr, dtype=np.uint8))


def expand_inputs(paths: Iterable[Path]) -> list[Path]:
    """Expand directories into contained images; return sorted unique list."""
    out: list[Path] = []
    for p in paths:
        p = Path(p)
        if p.is_dir():
            for child in sorted(p.rglob("*")):
                if is_image_file(child):
                    out.append(child)
        elif is_image_file(p):
            out.append(p)
    # unique (stable)
    seen = set()
    uniq: list[Path] = []
    for p in out:
        key = str(p.resolve())
        if key not in seen:
            seen.add(key)
            uniq.append(p)
    return uniq
