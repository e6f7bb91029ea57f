# chroma-key background removal with feathered edges and despill

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from numbers import Real

import numpy as np
from PIL import Image

from .errors import InvalidConfig
from .io import from_array, to_array

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]

MAX_DISTANCE = math.sqrt(3 * 255**2)  # ~441.67
MAX_FEATHER = 20

RED, GREEN, BLUE = 0, 1, 2

_HEX_RE = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)


def parse_hex_color(value: str) -> RGB:
    m = _HEX_RE.match(value.strip()) if isinstance(value, str) else None
    if m is None:
        raise InvalidConfig(f"Not a #rrggbb color: {value!r}")
    r, g, b = (int(part, 16) for part in m.groups())
    return (r, g, b)


def to_hex(color: RGB) -> str:
    r, g, b = color
    return f"#{r:02x}{g:02x}{b:02x}"


def _check_color(color: object) -> RGB:
    if not isinstance(color, (tuple, list)) or len(color) != 3:
        raise InvalidConfig(f"Target color must be an (r, g, b) triple, got {color!r}")
    out = []
    for ch in color:
        if isinstance(ch, bool) or not isinstance(ch, (int, np.integer)) or not (0 <= ch <= 255):
            raise InvalidConfig(f"Color channels must be integers in 0..255, got {color!r}")
        out.append(int(ch))
    return (out[0], out[1], out[2])


@dataclass(frozen=True)
class ChromaKeyParams:
    target: RGB = (0, 255, 0)
    tolerance: float = 15  # percent of MAX_DISTANCE
    feather: float = 4  # blur radius in pixels
    despill: bool = True

    @classmethod
    def from_hex(
        cls,
        color: str,
        tolerance: float = 15,
        feather: float = 4,
        despill: bool = True,
    ) -> "ChromaKeyParams":
        return cls(parse_hex_color(color), tolerance, feather, despill)

    def validate(self) -> None:
        _check_color(self.target)
        if isinstance(self.tolerance, bool) or not isinstance(self.tolerance, Real):
            raise InvalidConfig(f"tolerance must be a number, got {self.tolerance!r}")
        if not (0 <= self.tolerance <= 100):
            raise InvalidConfig(f"tolerance must be between 0 and 100, got {self.tolerance}")
        if isinstance(self.feather, bool) or not isinstance(self.feather, Real):
            raise InvalidConfig(f"feather must be a number, got {self.feather!r}")
        if not (0 <= self.feather <= MAX_FEATHER):
            raise InvalidConfig(f"feather must be between 0 and {MAX_FEATHER}, got {self.feather}")

    @property
    def radius(self) -> int:
        return int(math.floor(self.feather))

    @property
    def threshold(self) -> float:
        return (self.tolerance / 100.0) * MAX_DISTANCE


def dominant_channel(color: RGB) -> int:
    """Channel the key color leans on. Red/blue must strictly win; any tie goes to green."""
    r, g, b = color
    if r > g and r > b:
        return RED
    if b > g and b > r:
        return BLUE
    return GREEN


def build_key_mask(rgb: np.ndarray, target: RGB, tolerance: float) -> np.ndarray:
    """Hard mask: 0.0 where a pixel is within tolerance of target, else 255.0."""
    key = np.asarray(target, dtype=np.float64).reshape((1, 1, 3))
    diff = rgb[..., :3].astype(np.float64) - key
    dist = np.sqrt((diff * diff).sum(axis=2))
    threshold = (tolerance / 100.0) * MAX_DISTANCE
    return np.where(dist <= threshold, 0.0, 255.0)


def _blur_axis(mask: np.ndarray, radius: int, axis: int) -> np.ndarray:
    n = mask.shape[axis]
    idx = np.arange(n)
    acc = np.zeros(mask.shape, dtype=np.float64)
    for k in range(-radius, radius + 1):
        # out-of-range samples repeat the edge pixel
        acc += np.take(mask, np.clip(idx + k, 0, n - 1), axis=axis)
    return acc / (2 * radius + 1)


def box_blur(mask: np.ndarray, radius: int) -> np.ndarray:
    """Separable box blur: horizontal pass, then vertical pass over its result."""
    if radius <= 0:
        return mask.astype(np.float64, copy=True)
    horizontal = _blur_axis(mask.astype(np.float64), radius, axis=1)
    return _blur_axis(horizontal, radius, axis=0)


def despill(rgb: np.ndarray, edge: np.ndarray, channel: int) -> np.ndarray:
    """
    Pull `channel` down to the mean of the other two, only where `edge` is set.

    Returns a new float array; pixels outside `edge` are copied unchanged.
    """
    out = rgb[..., :3].astype(np.float64)
    others = [c for c in (RED, GREEN, BLUE) if c != channel]
    limit = (out[..., others[0]] + out[..., others[1]]) / 2.0
    spill = edge & (out[..., channel] > limit)
    out[..., channel] = np.where(spill, limit, out[..., channel])
    return out


def chroma_key(img: Image.Image, params: ChromaKeyParams) -> Image.Image:
    """Remove params.target from img and return a new RGBA image."""
    params.validate()
    src = to_array(img)

    mask = build_key_mask(src, params.target, params.tolerance)
    keyed = np.clip(np.rint(box_blur(mask, params.radius)), 0, 255).astype(np.uint8)

    out = src.copy()
    if params.despill:
        # pixels the source already hides keep their color
        edge = (keyed > 0) & (keyed < 255) & (src[..., 3] > 0)
        if edge.any():
            fixed = despill(src, edge, dominant_channel(params.target))
            out[..., :3] = np.clip(np.rint(fixed), 0, 255).astype(np.uint8)

    # keying only ever removes opacity
    out[..., 3] = np.minimum(src[..., 3], keyed)

    logger.debug(
        "Chroma key %s tol=%s feather=%s despill=%s: %d/%d pixels transparent",
        to_hex(params.target),
        params.tolerance,
        params.feather,
        params.despill,
        int((out[..., 3] == 0).sum()),
        out.shape[0] * out.shape[1],
    )
    return from_array(out)


def pick_color(img: Image.Image, x: int, y: int) -> RGB:
    """Eyedropper: the RGB value under (x, y)."""
    if not (0 <= x < img.width and 0 <= y < img.height):
        raise InvalidConfig(f"Point ({x}, {y}) is outside the {img.width}x{img.height} image")
    r, g, b, _ = img.convert("RGBA").getpixel((int(x), int(y)))
    return (r, g, b)
