from __future__ import annotations

import unittest

from dot_matrix.packing import pack
from dot_matrix.stats import compute_stats
from models import BitOrder, PixelGrid


def grid(values, width=None, height=1, bit_depth=1) -> PixelGrid:
    values = tuple(values)
    return PixelGrid(
        width=width if width is not None else len(values),
        height=height,
        bit_depth=bit_depth,
        values=values,
    )


class TestPackOneBit(unittest.TestCase):
    def test_msb_first(self) -> None:
        self.assertEqual(pack(grid([1, 0, 1, 1, 0, 0, 1, 0]), BitOrder.MSB_FIRST), b"\xb2")

    def test_lsb_first(self) -> None:
        self.assertEqual(pack(grid([1, 0, 1, 1, 0, 0, 1, 0]), BitOrder.LSB_FIRST), b"\x4d")

    def test_partial_byte_padding_msb(self) -> None:
        # 10 pixels -> 2 bytes; pixels 8 and 9 land in the high bits of byte 2
        values = [1] * 8 + [1, 1]
        self.assertEqual(pack(grid(values), BitOrder.MSB_FIRST), b"\xff\xc0")

    def test_partial_byte_padding_lsb(self) -> None:
        values = [1] * 8 + [1, 1]
        self.assertEqual(pack(grid(values), BitOrder.LSB_FIRST), b"\xff\x03")

    def test_all_ones_sixteen_pixels(self) -> None:
        self.assertEqual(pack(grid([1] * 16)), b"\xff\xff")

    def test_empty_grid(self) -> None:
        self.assertEqual(pack(grid([], width=0, height=0)), b"")


class TestPackMultiBit(unittest.TestCase):
    def test_one_byte_per_pixel(self) -> None:
        values = [0, 5, 15, 7]
        for order in BitOrder:
            self.assertEqual(pack(grid(values, bit_depth=4), order), bytes(values))

    def test_eight_bit(self) -> None:
        self.assertEqual(pack(grid([0, 128, 255], bit_depth=8)), b"\x00\x80\xff")


class TestLengthInvariant(unittest.TestCase):
    def test_length_matches_stats_for_many_sizes(self) -> None:
        for depth in (1, 2, 4, 8):
            for width, height in ((1, 1), (7, 3), (8, 8), (13, 5), (128, 64)):
                g = PixelGrid(width, height, depth, (0,) * (width * height))
                data = pack(g, BitOrder.MSB_FIRST)
                expected = -(-width * height // 8) if depth == 1 else width * height
                self.assertEqual(len(data), expected, (depth, width, height))
                self.assertEqual(compute_stats(g).byte_size, len(data))
                self.assertEqual(compute_stats(g).pixel_count, width * height)


if __name__ == "__main__":
    unittest.main()
