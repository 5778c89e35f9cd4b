from __future__ import annotations

import unittest

from dot_matrix.preview import preview_levels, render_preview
from models import PixelGrid


class TestPreview(unittest.TestCase):
    def test_one_bit_on_pixels_are_black(self) -> None:
        grid = PixelGrid(2, 1, 1, (1, 0))
        self.assertEqual(preview_levels(grid).tolist(), [[0, 255]])

    def test_multi_level_scales_to_white(self) -> None:
        grid = PixelGrid(4, 1, 2, (0, 1, 2, 3))
        self.assertEqual(preview_levels(grid).tolist(), [[0, 85, 170, 255]])

    def test_render_scales_with_nearest_neighbour(self) -> None:
        grid = PixelGrid(2, 1, 1, (1, 0))
        image = render_preview(grid, scale=3)
        self.assertEqual(image.mode, "L")
        self.assertEqual(image.size, (6, 3))
        self.assertEqual(image.getpixel((2, 2)), 0)
        self.assertEqual(image.getpixel((3, 0)), 255)

    def test_empty_grid(self) -> None:
        image = render_preview(PixelGrid(0, 0, 1, ()), scale=4)
        self.assertEqual(image.size, (0, 0))


if __name__ == "__main__":
    unittest.main()
