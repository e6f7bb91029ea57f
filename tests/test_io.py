from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from PIL import Image

from _support import RED, png_bytes, rotated_jpeg, solid
from sticker_core.errors import DecodeError
from sticker_core.io import decode_image, encode_png, expand_inputs, read_payload


class DecodeTests(unittest.TestCase):
    def test_decodes_to_rgba(self) -> None:
        img = decode_image(png_bytes(Image.new("P", (6, 4))))
        self.assertEqual((img.mode, img.size), ("RGBA", (6, 4)))

    def test_garbage_and_empty(self) -> None:
        for data in [b"", b"\x89PNG\r\n\x1a\n broken", b"hello"]:
            with self.assertRaises(DecodeError):
                decode_image(data)

    def test_exif_orientation_applied(self) -> None:
        # stored landscape, tagged "rotate 90 CW" -> displayed portrait
        img = decode_image(rotated_jpeg(400, 200, orientation=6))
        self.assertEqual((img.mode, img.size), ("RGBA", (200, 400)))

    def test_untagged_jpeg_keeps_size(self) -> None:
        img = decode_image(png_bytes(Image.new("RGB", (40, 20), RED), fmt="JPEG"))
        self.assertEqual(img.size, (40, 20))


class ReadPayloadTests(unittest.TestCase):
    def test_reads_bytes(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "01.png"
            path.write_bytes(png_bytes(solid(3, 2)))
            self.assertEqual(decode_image(read_payload(path)).size, (3, 2))

    def test_missing_file(self) -> None:
        with self.assertRaises(DecodeError):
            read_payload(Path("/nonexistent/sticker.png"))


class EncodeTests(unittest.TestCase):
    def test_png_keeps_partial_alpha(self) -> None:
        data = encode_png(solid(3, 3, RED, alpha=33))
        self.assertTrue(data.startswith(b"\x89PNG"))
        self.assertEqual(decode_image(data).getpixel((1, 1)), (*RED, 33))


class ExpandInputsTests(unittest.TestCase):
    def test_dirs_expanded_sorted_unique(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "sub").mkdir()
            for name in ["b.png", "a.jpg", "sub/c.webp", "notes.txt"]:
                (root / name).write_bytes(b"x")
            found = expand_inputs([root, root / "a.jpg"])
            self.assertEqual([p.relative_to(root).as_posix() for p in found], ["a.jpg", "b.png", "sub/c.webp"])


if __name__ == "__main__":
    unittest.main()
