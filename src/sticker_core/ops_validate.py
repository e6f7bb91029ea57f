# alpha statistics and platform checks for export assets

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Optional

import numpy as np
from PIL import Image

from .geometry import Size
from .io import ensure_rgba
from .models import ProcessedImage

Status = Literal["PASS", "WARN", "FAIL"]


@dataclass(frozen=True)
class AlphaStats:
    width: int
    height: int
    min: int
    max: int
    mean: float
    std: float
    pct_zero: float
    pct_255: float
    pct_mid: float  # 1..254


@dataclass(frozen=True)
class AssetReport:
    name: str
    status: Status
    messages: list[str]
    stats: Optional[AlphaStats]


def alpha_array(img: Image.Image) -> np.ndarray:
    return np.asarray(ensure_rgba(img).getchannel("A"), dtype=np.uint8)


def compute_alpha_stats(alpha_arr: np.ndarray) -> AlphaStats:
    h, w = alpha_arr.shape[:2]
    total = alpha_arr.size
    return AlphaStats(
        width=w,
        height=h,
        min=int(alpha_arr.min()),
        max=int(alpha_arr.max()),
        mean=float(alpha_arr.mean()),
        std=float(alpha_arr.std()),
        pct_zero=float((alpha_arr == 0).sum() * 100.0 / total),
        pct_255=float((alpha_arr == 255).sum() * 100.0 / total),
        pct_mid=float(((alpha_arr > 0) & (alpha_arr < 255)).sum() * 100.0 / total),
    )


def validate_asset(name: str, img: Image.Image, box: Size) -> AssetReport:
    messages: list[str] = []
    status: Status = "PASS"

    if img.width > box.width or img.height > box.height:
        return AssetReport(
            name=name,
            status="FAIL",
            messages=[f"{img.width}x{img.height} exceeds the {box.width}x{box.height} box."],
            stats=None,
        )

    stats = compute_alpha_stats(alpha_array(img))
    if stats.pct_255 >= 100.0:
        messages.append("No transparent pixels; background was not removed.")
        status = "WARN"
    if stats.pct_zero >= 100.0:
        messages.append("Image is fully transparent.")
        status = "WARN"

    return AssetReport(name=name, status=status, messages=messages, stats=stats)


def validate_set(items: Iterable[ProcessedImage]) -> list[AssetReport]:
    """One report per export file, in export order."""
    return [
        validate_asset(item.file_name or item.id, item.image, item.box) for item in items
    ]
