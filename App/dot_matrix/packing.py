"""Serialization of a PixelGrid into a byte buffer."""

import numpy as np

from models import BitOrder, PixelGrid


def pack(grid: PixelGrid, bit_order: BitOrder = BitOrder.MSB_FIRST) -> bytes:
    """Pack pixel values into bytes.

    Args:
        grid: Quantized pixel grid
        bit_order: Bit position of the first pixel in each byte (1-bit only)

    Returns:
        1-bit grids: ceil(pixel_count / 8) bytes, eight pixels per byte,
        the last byte zero-padded in its later positions.
        Deeper grids: one byte per pixel value, bit order ignored.

    AIDEV-NOTE: Multi-bit depths are deliberately not densely packed
    (a 4-bit grid is NOT two pixels per byte). Consumers on the display
    side expect one value per byte.
    """
    values = np.asarray(grid.values, dtype=np.uint8)

    if grid.bit_depth == 1:
        numpy_order = "big" if bit_order == BitOrder.MSB_FIRST else "little"
        return np.packbits(values, bitorder=numpy_order).tobytes()

    return values.tobytes()
