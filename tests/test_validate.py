from __future__ import annotations

import unittest

import numpy as np

from _support import GREEN, RED, solid, split_vertical
from sticker_core.geometry import Size, STICKER_SIZE
from sticker_core.ops_chroma import ChromaKeyParams, chroma_key
from sticker_core.ops_validate import compute_alpha_stats, validate_asset


class AlphaStatsTests(unittest.TestCase):
    def test_stats(self) -> None:
        alpha = np.array([[0, 0, 255, 128]], dtype=np.uint8)
        s = compute_alpha_stats(alpha)
        self.assertEqual((s.width, s.height, s.min, s.max), (4, 1, 0, 255))
        self.assertAlmostEqual(s.pct_zero, 50.0)
        self.assertAlmostEqual(s.pct_255, 25.0)
        self.assertAlmostEqual(s.pct_mid, 25.0)


class ValidateAssetTests(unittest.TestCase):
    def test_keyed_sticker_passes(self) -> None:
        keyed = chroma_key(split_vertical(40, 20, GREEN, RED), ChromaKeyParams(GREEN, 10, 2, True))
        report = validate_asset("01.png", keyed, STICKER_SIZE)
        self.assertEqual(report.status, "PASS")
        self.assertGreater(report.stats.pct_mid, 0)
        self.assertAlmostEqual(report.stats.pct_mid + report.stats.pct_zero + report.stats.pct_255, 100.0)

    def test_oversized_fails(self) -> None:
        report = validate_asset("main.png", solid(241, 10), Size(240, 240))
        self.assertEqual(report.status, "FAIL")
        self.assertIsNone(report.stats)

    def test_opaque_and_empty_warn(self) -> None:
        self.assertEqual(validate_asset("01.png", solid(4, 4), STICKER_SIZE).status, "WARN")
        self.assertEqual(validate_asset("02.png", solid(4, 4, alpha=0), STICKER_SIZE).status, "WARN")


if __name__ == "__main__":
    unittest.main()
