# command-line front end: build a sticker set and write the zip

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .archive import DEFAULT_ARCHIVE_NAME
from .errors import StickerError
from .io import expand_inputs, read_payload
from .ops_chroma import ChromaKeyParams
from .ops_slice import SliceGrid
from .pipeline import StickerSet

logger = logging.getLogger("sticker_core")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sticker-maker",
        description="Fit, slice and key images into a sticker set archive.",
    )
    p.add_argument("-o", "--output", type=Path, default=Path(DEFAULT_ARCHIVE_NAME))
    p.add_argument("--main", type=Path, help="main image, fit into 240x240")
    p.add_argument("--tab", type=Path, help="tab image, fit into 96x74")
    p.add_argument("--sheet", type=Path, action="append", default=[], help="sticker sheet to slice")
    p.add_argument("--cols", type=int, default=3)
    p.add_argument("--rows", type=int, default=3)
    p.add_argument(
        "--sticker",
        type=Path,
        action="append",
        default=[],
        help="individual sticker file or folder (repeatable)",
    )

    key = p.add_argument_group("chroma key")
    key.add_argument("--key-color", help="#rrggbb background color to remove from stickers")
    key.add_argument("--tolerance", type=float, default=15)
    key.add_argument("--feather", type=float, default=4)
    key.add_argument("--no-despill", action="store_true")

    p.add_argument("-v", "--verbose", action="store_true")
    return p


def _log_progress(done: int, total: int, name: str, message: str) -> None:
    logger.debug("%d/%d %s: %s", done, total, message, name)


async def build_set(args: argparse.Namespace) -> StickerSet:
    stickers = StickerSet()

    if args.main:
        await stickers.set_main(read_payload(args.main))
    if args.tab:
        await stickers.set_tab(read_payload(args.tab))

    grid = SliceGrid(args.cols, args.rows)
    for sheet in args.sheet:
        await stickers.add_sheet(read_payload(sheet), grid)

    files = expand_inputs(args.sticker)
    if files:
        await stickers.add_stickers([read_payload(f) for f in files])

    if args.key_color:
        params = ChromaKeyParams.from_hex(
            args.key_color,
            tolerance=args.tolerance,
            feather=args.feather,
            despill=not args.no_despill,
        )
        stickers.key_stickers(params, progress_cb=_log_progress)

    return stickers


async def run(args: argparse.Namespace) -> int:
    stickers = await build_set(args)
    if stickers.is_empty:
        logger.error("Nothing to export; pass --main, --tab, --sheet or --sticker")
        return 1

    failed = False
    for report in stickers.validate():
        for msg in report.messages:
            level = logging.ERROR if report.status == "FAIL" else logging.WARNING
            logger.log(level, "%s: %s", report.name, msg)
        failed = failed or report.status == "FAIL"
    if failed:
        return 2

    files = await stickers.export_archive(args.output)
    logger.info("Exported %d images to %s", len(files), args.output)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s",
        datefmt="%H:%M:%S",
    )
    try:
        return asyncio.run(run(args))
    except StickerError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
