# src/sticker_core/__init__.py
"""
sticker_core: headless core library for building sticker sets (fit/slice/chroma-key/export).

This package is designed to be called from a GUI and/or the bundled CLI.
"""

from .errors import StickerError, DecodeError, EncodeError, InvalidConfig
from .geometry import Size, MAIN_SIZE, TAB_SIZE, STICKER_SIZE, fit_within
from .io import decode_image, encode_png, read_payload
from .models import ProcessedImage, IdGenerator, SequentialIds, UuidIds
from .naming import MAIN_NAME, TAB_NAME, sticker_name, renumber, move_item
from .ops_resize import resample, fit_image
from .ops_slice import SliceGrid, slice_regions, slice_grid, slice_sheet
from .ops_crop import CropArea, crop_image, rotate_image
from .ops_chroma import (
    ChromaKeyParams,
    chroma_key,
    build_key_mask,
    box_blur,
    dominant_channel,
    parse_hex_color,
    to_hex,
    pick_color,
)
from .ops_validate import AlphaStats, AssetReport, compute_alpha_stats, validate_asset, validate_set
from .archive import DEFAULT_ARCHIVE_NAME, write_archive
from .pipeline import StickerSet

__all__ = [
    # errors
    "StickerError",
    "DecodeError",
    "EncodeError",
    "InvalidConfig",
    # geometry
    "Size",
    "MAIN_SIZE",
    "TAB_SIZE",
    "STICKER_SIZE",
    "fit_within",
    # io
    "decode_image",
    "encode_png",
    "read_payload",
    # models
    "ProcessedImage",
    "IdGenerator",
    "SequentialIds",
    "UuidIds",
    # naming
    "MAIN_NAME",
    "TAB_NAME",
    "sticker_name",
    "renumber",
    "move_item",
    # resize
    "resample",
    "fit_image",
    # slice
    "SliceGrid",
    "slice_regions",
    "slice_grid",
    "slice_sheet",
    # crop
    "CropArea",
    "crop_image",
    "rotate_image",
    # chroma key
    "ChromaKeyParams",
    "chroma_key",
    "build_key_mask",
    "box_blur",
    "dominant_channel",
    "parse_hex_color",
    "to_hex",
    "pick_color",
    # validate
    "AlphaStats",
    "AssetReport",
    "compute_alpha_stats",
    "validate_asset",
    "validate_set",
    # export
    "DEFAULT_ARCHIVE_NAME",
    "write_archive",
    "StickerSet",
]

__version__ = "0.1.0"
