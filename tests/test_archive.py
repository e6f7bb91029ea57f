from __future__ import annotations

import tempfile
import unittest
import zipfile
from pathlib import Path

from sticker_core.archive import DEFAULT_ARCHIVE_NAME, write_archive
from sticker_core.errors import EncodeError, InvalidConfig


class _FailingFiles(dict):
    """Mapping whose later members cannot be read."""

    def __getitem__(self, name):
        if name != next(iter(self)):
            raise OSError("disk full")
        return super().__getitem__(name)


class ArchiveTests(unittest.TestCase):
    def test_writes_every_member(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            dest = Path(td) / DEFAULT_ARCHIVE_NAME
            write_archive({"main.png": b"m", "01.png": b"1", "02.png": b"2"}, dest)
            with zipfile.ZipFile(dest) as zf:
                self.assertEqual(zf.namelist(), ["main.png", "01.png", "02.png"])
                self.assertEqual(zf.read("02.png"), b"2")

    def test_rejects_empty_and_bad_names(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            dest = Path(td) / "x.zip"
            for files in [{}, {"": b"x"}, {"dir/": b"x"}, {"01.png": b"a", "01.PNG": b"b"}]:
                with self.assertRaises(InvalidConfig, msg=repr(files)):
                    write_archive(files, dest)
            self.assertFalse(dest.exists())

    def test_failed_write_leaves_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            dest = Path(td) / DEFAULT_ARCHIVE_NAME
            with self.assertRaises(EncodeError):
                write_archive(_FailingFiles({"main.png": b"m", "01.png": b"1"}), dest)
            self.assertEqual(list(Path(td).iterdir()), [])

    def test_failed_write_keeps_previous_archive(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            dest = Path(td) / DEFAULT_ARCHIVE_NAME
            write_archive({"main.png": b"old"}, dest)
            with self.assertRaises(EncodeError):
                write_archive(_FailingFiles({"main.png": b"m", "01.png": b"1"}), dest)
            with zipfile.ZipFile(dest) as zf:
                self.assertEqual(zf.read("main.png"), b"old")
            self.assertEqual([p.name for p in Path(td).iterdir()], [DEFAULT_ARCHIVE_NAME])

    def test_overwrites_existing(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            dest = Path(td) / "x.zip"
            write_archive({"main.png": b"old"}, dest)
            write_archive({"tab.png": b"new"}, dest)
            with zipfile.ZipFile(dest) as zf:
                self.assertEqual(zf.namelist(), ["tab.png"])
            self.assertEqual([p.name for p in Path(td).iterdir()], ["x.zip"])


if __name__ == "__main__":
    unittest.main()
