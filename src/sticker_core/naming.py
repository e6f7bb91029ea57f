# export names and positional renumbering

from __future__ import annotations

from typing import Sequence, TypeVar

from .errors import InvalidConfig
from .models import ProcessedImage

T = TypeVar("T")

MAIN_NAME = "main.png"
TAB_NAME = "tab.png"


def sticker_name(index: int) -> str:
    """Name for the sticker at 0-based `index`: 01.png, 02.png, ..."""
    if index < 0:
        raise InvalidConfig(f"Sticker index must be >= 0, got {index}")
    return f"{index + 1:02d}.png"


def renumber(stickers: Sequence[ProcessedImage]) -> tuple[ProcessedImage, ...]:
    """Reassign every name from position alone. Previous names are ignored."""
    return tuple(img.with_name(sticker_name(i)) for i, img in enumerate(stickers))


def move_item(items: Sequence[T], old_index: int, new_index: int) -> list[T]:
    n = len(items)
    if not (0 <= old_index < n):
        raise InvalidConfig(f"Source index {old_index} out of range for {n} items")
    if not (0 <= new_index < n):
        raise InvalidConfig(f"Target index {new_index} out of range for {n} items")
    out = list(items)
    out.insert(new_index, out.pop(old_index))
    return out


def remove_id(stickers: Sequence[ProcessedImage], image_id: str) -> list[ProcessedImage]:
    out = [img for img in stickers if img.id != image_id]
    if len(out) == len(stickers):
        raise KeyError(image_id)
    return out


def index_of(stickers: Sequence[ProcessedImage], image_id: str) -> int:
    for i, img in enumerate(stickers):
        if img.id == image_id:
            return i
    raise KeyError(image_id)


def reorder_by_ids(stickers: Sequence[ProcessedImage], ids: Sequence[str]) -> list[ProcessedImage]:
    """Arrange stickers in the order of `ids`, which must be a permutation of their ids."""
    by_id = {img.id: img for img in stickers}
    if len(ids) != len(by_id) or set(ids) != set(by_id):
        raise InvalidConfig("New order must list every sticker id exactly once")
    return [by_id[i] for i in ids]
