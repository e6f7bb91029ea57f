# error kinds shared by every sticker_core operation

from __future__ import annotations


class StickerError(RuntimeError):
    pass


class DecodeError(StickerError):
    """Input bytes or image could not be read as a raster."""


class EncodeError(StickerError):
    """A finished image could not be written out."""


class InvalidConfig(StickerError):
    """Rejected parameters (grid, color, sizes) before any pixel work."""
