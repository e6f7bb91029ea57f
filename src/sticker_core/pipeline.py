# the working sticker set: uploads in, named PNGs out
# src/sticker_core/pipeline.py

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Optional, Sequence, Union

from PIL import Image

from .archive import write_archive
from .geometry import MAIN_SIZE, STICKER_SIZE, TAB_SIZE, Size
from .io import decode_image, encode_png
from .models import IdGenerator, ProcessedImage, SequentialIds
from .naming import (
    MAIN_NAME,
    TAB_NAME,
    index_of,
    move_item,
    remove_id,
    renumber,
    reorder_by_ids,
)
from .ops_chroma import ChromaKeyParams, chroma_key
from .ops_crop import CropArea, crop_image
from .ops_resize import Quality, fit_image
from .ops_slice import SliceGrid, slice_grid
from .ops_validate import AssetReport, validate_set

logger = logging.getLogger(__name__)

ProgressCb = Callable[[int, int, str, str], None]


class StickerSet:
    """
    Main image, tab image and the ordered sticker sequence.

    Uploads are decoded and encoded off the event loop; pixel work runs inline.
    Every structural edit swaps in a whole new, renumbered sticker tuple, so a
    failed operation never leaves a half-applied change behind.
    """

    def __init__(self, *, id_factory: Optional[IdGenerator] = None, quality: Quality = "high") -> None:
        self._ids: IdGenerator = id_factory or SequentialIds()
        self.quality: Quality = quality
        self.main: Optional[ProcessedImage] = None
        self.tab: Optional[ProcessedImage] = None
        self._stickers: tuple[ProcessedImage, ...] = ()

    @property
    def stickers(self) -> tuple[ProcessedImage, ...]:
        return self._stickers

    @property
    def is_empty(self) -> bool:
        return self.main is None and self.tab is None and not self._stickers

    def items(self) -> list[ProcessedImage]:
        """Everything that will be exported, in export order."""
        out = [img for img in (self.main, self.tab) if img is not None]
        out.extend(self._stickers)
        return out

    def get(self, image_id: str) -> ProcessedImage:
        for img in self.items():
            if img.id == image_id:
                return img
        raise KeyError(image_id)

    # -- helpers ---------------------------------------------------------

    def _commit(self, stickers: Iterable[ProcessedImage]) -> None:
        self._stickers = renumber(list(stickers))

    def _make(self, original: Image.Image, box: Size, file_name: Optional[str] = None) -> ProcessedImage:
        image = fit_image(original, box.width, box.height, quality=self.quality)
        return ProcessedImage(
            id=self._ids(),
            original=original,
            image=image,
            box=box,
            file_name=file_name,
        )

    def _replace(self, item: ProcessedImage) -> None:
        if self.main is not None and self.main.id == item.id:
            self.main = item
        elif self.tab is not None and self.tab.id == item.id:
            self.tab = item
        else:
            idx = index_of(self._stickers, item.id)
            stickers = list(self._stickers)
            stickers[idx] = item
            self._commit(stickers)

    async def _decode(self, data: bytes) -> Image.Image:
        return await asyncio.to_thread(decode_image, data)

    # -- uploads ---------------------------------------------------------

    async def set_main(self, data: bytes) -> ProcessedImage:
        original = await self._decode(data)
        self.main = self._make(original, MAIN_SIZE, MAIN_NAME)
        logger.info("Main image set (%dx%d)", self.main.width, self.main.height)
        return self.main

    async def set_tab(self, data: bytes) -> ProcessedImage:
        original = await self._decode(data)
        self.tab = self._make(original, TAB_SIZE, TAB_NAME)
        logger.info("Tab image set (%dx%d)", self.tab.width, self.tab.height)
        return self.tab

    async def add_sheet(self, data: bytes, grid: SliceGrid = SliceGrid()) -> list[ProcessedImage]:
        """Slice a sheet and append its cells, row-major, to the sequence."""
        grid.validate()
        sheet = await self._decode(data)
        added = [self._make(cell, STICKER_SIZE) for cell in slice_grid(sheet, grid)]
        self._commit(self._stickers + tuple(added))
        logger.info("Added %d stickers from a %dx%d grid", len(added), grid.cols, grid.rows)
        return [self.get(img.id) for img in added]

    async def add_stickers(self, payloads: Sequence[bytes]) -> list[ProcessedImage]:
        """Decode every upload concurrently; append all of them or none."""
        originals = await asyncio.gather(*(self._decode(data) for data in payloads))
        added = [self._make(original, STICKER_SIZE) for original in originals]
        self._commit(self._stickers + tuple(added))
        logger.info("Added %d stickers (%d total)", len(added), len(self._stickers))
        return [self.get(img.id) for img in added]

    # -- structural edits --------------------------------------------------

    def remove(self, image_id: str) -> None:
        self._commit(remove_id(self._stickers, image_id))
        logger.debug("Removed %s, %d stickers left", image_id, len(self._stickers))

    def move(self, old_index: int, new_index: int) -> None:
        self._commit(move_item(self._stickers, old_index, new_index))

    def move_id(self, image_id: str, new_index: int) -> None:
        self.move(index_of(self._stickers, image_id), new_index)

    def reorder(self, ids: Sequence[str]) -> None:
        self._commit(reorder_by_ids(self._stickers, ids))

    def clear_stickers(self) -> None:
        self._stickers = ()

    def clear_main(self) -> None:
        self.main = None

    def clear_tab(self) -> None:
        self.tab = None

    # -- re-editing one image ----------------------------------------------

    def apply_chroma_key(self, image_id: str, params: ChromaKeyParams) -> ProcessedImage:
        """Key the image's current pixels; the id and position stay the same."""
        item = self.get(image_id)
        updated = item.with_image(chroma_key(item.image, params))
        self._replace(updated)
        return self.get(image_id)

    def key_stickers(
        self,
        params: ChromaKeyParams,
        *,
        progress_cb: Optional[ProgressCb] = None,
    ) -> None:
        """Key every sticker with the same params; commits only if all succeed."""
        params.validate()
        total = len(self._stickers)
        keyed: list[ProcessedImage] = []
        for i, item in enumerate(self._stickers, start=1):
            if progress_cb:
                progress_cb(i - 1, total, item.file_name or item.id, "Keying")
            keyed.append(item.with_image(chroma_key(item.image, params)))
            if progress_cb:
                progress_cb(i, total, item.file_name or item.id, "Done")
        self._commit(keyed)

    def reset_image(self, image_id: str) -> ProcessedImage:
        """Throw away edits and re-fit from the decoded upload."""
        item = self.get(image_id)
        image = fit_image(item.original, item.box.width, item.box.height, quality=self.quality)
        self._replace(item.with_image(image))
        return self.get(image_id)

    def crop(self, image_id: str, area: CropArea, rotation: float = 0.0) -> ProcessedImage:
        item = self.get(image_id)
        cropped = crop_image(item.image, area, rotation)
        image = fit_image(cropped, item.box.width, item.box.height, quality=self.quality)
        self._replace(item.with_image(image))
        return self.get(image_id)

    # -- export --------------------------------------------------------------

    def validate(self) -> list[AssetReport]:
        return validate_set(self.items())

    async def export_files(self) -> dict[str, bytes]:
        items = self.items()
        encoded = await asyncio.gather(*(asyncio.to_thread(encode_png, img.image) for img in items))
        files: dict[str, bytes] = {}
        for item, data in zip(items, encoded):
            files[item.file_name or f"{item.id}.png"] = data
        return files

    async def export_archive(self, dest: Union[Path, str, BinaryIO]) -> dict[str, bytes]:
        files = await self.export_files()
        await asyncio.to_thread(write_archive, files, dest)
        return files
