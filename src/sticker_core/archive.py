# zip export of the finished, named set

from __future__ import annotations

import logging
import os
import zipfile
from pathlib import Path
from typing import BinaryIO, Mapping, Union

from .errors import EncodeError, InvalidConfig

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_NAME = "line_stickers_set.zip"

Dest = Union[Path, str, BinaryIO]


def _write_zip(files: Mapping[str, bytes], names: list[str], dest: Union[Path, BinaryIO]) -> None:
    with zipfile.ZipFile(dest, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name in names:
            zf.writestr(name, files[name])


def write_archive(files: Mapping[str, bytes], dest: Dest) -> None:
    """
    Write name -> bytes into a zip at `dest` (path or writable binary file).

    A path is written through a sibling `.part` file and renamed into place,
    so a failed export never leaves a truncated zip behind.
    """
    names = list(files)
    if not names:
        raise InvalidConfig("Nothing to export")
    for name in names:
        if not name or name.endswith("/"):
            raise InvalidConfig(f"Invalid archive member name: {name!r}")
    folded = {n.lower() for n in names}
    if len(folded) != len(names):
        raise InvalidConfig(f"Duplicate file names in export: {names}")

    if isinstance(dest, (str, Path)):
        path = Path(dest)
        tmp = path.with_name(f".{path.name}.part")
        try:
            _write_zip(files, names, tmp)
            os.replace(tmp, path)
        except OSError as e:
            raise EncodeError(f"Failed to write archive: {path} ({e})") from e
        finally:
            tmp.unlink(missing_ok=True)
    else:
        try:
            _write_zip(files, names, dest)
        except (OSError, ValueError) as e:
            raise EncodeError(f"Failed to write archive: {dest} ({e})") from e

    logger.info("Wrote %d files to %s", len(names), dest)
