# fit-within-box sizing and the platform's fixed asset boxes

from __future__ import annotations

import math
from typing import NamedTuple

from .errors import InvalidConfig


class Size(NamedTuple):
    width: int
    height: int


# required by the sticker platform; not configurable
MAIN_SIZE = Size(240, 240)
TAB_SIZE = Size(96, 74)
STICKER_SIZE = Size(370, 320)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def fit_within(width: int, height: int, max_width: int, max_height: int) -> Size:
    """
    Scale (width, height) down so it fits the box, keeping the aspect ratio.

    Images that already fit are returned unchanged; nothing is ever scaled up.
    """
    if width <= 0 or height <= 0:
        raise InvalidConfig(f"Source size must be positive, got {width}x{height}")
    if max_width <= 0 or max_height <= 0:
        raise InvalidConfig(f"Target box must be positive, got {max_width}x{max_height}")

    if width <= max_width and height <= max_height:
        return Size(width, height)

    ratio = min(max_width / width, max_height / height)
    out_w = min(max_width, max(1, _round_half_up(width * ratio)))
    out_h = min(max_height, max(1, _round_half_up(height * ratio)))
    return Size(out_w, out_h)
