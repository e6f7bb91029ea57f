from __future__ import annotations

import itertools
import unittest

from sticker_core.errors import InvalidConfig
from sticker_core.geometry import MAIN_SIZE, STICKER_SIZE, TAB_SIZE, fit_within


class FitWithinTests(unittest.TestCase):
    def test_output_always_inside_box(self) -> None:
        sizes = [1, 2, 7, 73, 96, 239, 240, 241, 370, 1000, 4001]
        for w, h, mw, mh in itertools.product(sizes, sizes, [1, 74, 96, 240, 370], [1, 74, 240, 320]):
            out = fit_within(w, h, mw, mh)
            self.assertLessEqual(out.width, mw, (w, h, mw, mh))
            self.assertLessEqual(out.height, mh, (w, h, mw, mh))
            self.assertGreaterEqual(out.width, 1)
            self.assertGreaterEqual(out.height, 1)
            if w <= mw and h <= mh:
                self.assertEqual(out, (w, h))

    def test_never_upscales(self) -> None:
        self.assertEqual(fit_within(50, 30, 370, 320), (50, 30))
        self.assertEqual(fit_within(370, 320, 370, 320), (370, 320))

    def test_aspect_ratio_preserved_when_downscaling(self) -> None:
        for w, h in [(1000, 800), (800, 1000), (1920, 1080), (3000, 3000), (741, 640)]:
            out = fit_within(w, h, *STICKER_SIZE)
            # one side hits the box, the other is off by at most a rounding step
            self.assertTrue(out.width == STICKER_SIZE.width or out.height == STICKER_SIZE.height)
            self.assertAlmostEqual(out.width / out.height, w / h, delta=(w / h) * 2.0 / min(out))

    def test_known_values(self) -> None:
        self.assertEqual(fit_within(1000, 400, 370, 320), (370, 148))
        self.assertEqual(fit_within(480, 480, *MAIN_SIZE), (240, 240))
        self.assertEqual(fit_within(960, 740, *TAB_SIZE), (96, 74))

    def test_rounds_half_up(self) -> None:
        # 5 * 0.5 = 2.5 must round to 3, not to the even 2
        self.assertEqual(fit_within(4, 5, 2, 10), (2, 3))

    def test_thin_image_clamped_to_one_pixel(self) -> None:
        self.assertEqual(fit_within(10000, 1, 240, 240), (240, 1))
        self.assertEqual(fit_within(1, 10000, 96, 74), (1, 74))

    def test_rejects_non_positive(self) -> None:
        for args in [(0, 10, 5, 5), (10, -1, 5, 5), (10, 10, 0, 5), (10, 10, 5, -3)]:
            with self.assertRaises(InvalidConfig):
                fit_within(*args)


if __name__ == "__main__":
    unittest.main()
