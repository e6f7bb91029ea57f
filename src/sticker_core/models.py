# image records and identity generators

from __future__ import annotations

import itertools
import uuid
from dataclasses import dataclass, replace
from typing import Optional, Protocol

from PIL import Image

from .geometry import Size


class IdGenerator(Protocol):
    def __call__(self) -> str: ...


class SequentialIds:
    """Deterministic ids: img-1, img-2, ..."""

    def __init__(self, prefix: str = "img", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"


class UuidIds:
    def __call__(self) -> str:
        return uuid.uuid4().hex


@dataclass(frozen=True)
class ProcessedImage:
    id: str
    original: Image.Image  # decoded upload, kept for reset/re-edit
    image: Image.Image  # current RGBA pixels
    box: Size  # the box this asset must fit
    file_name: Optional[str] = None

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def with_image(self, image: Image.Image) -> "ProcessedImage":
        return replace(self, image=image)

    def with_name(self, file_name: Optional[str]) -> "ProcessedImage":
        return replace(self, file_name=file_name)
