"""Greyscale preview rendering for pixel grids."""

import numpy as np
from PIL import Image

from models import PixelGrid


def preview_levels(grid: PixelGrid) -> np.ndarray:
    """Per-pixel grey level (0-255) as a (height, width) uint8 array.

    AIDEV-NOTE: 1-bit "on" pixels are drawn black, matching how they look
    on a typical monochrome LCD. Deeper grids scale linearly so that the
    top level is white.
    """
    values = np.asarray(grid.values, dtype=np.float64).reshape(
        grid.height, grid.width
    )
    if grid.bit_depth == 1:
        grey = np.where(values == 1, 0, 255)
    else:
        grey = np.floor(values / (grid.levels - 1) * 255)
    return grey.astype(np.uint8)


def render_preview(grid: PixelGrid, scale: int = 1) -> Image.Image:
    """Render a grid as an "L" mode image, optionally enlarged.

    Args:
        grid: Quantized pixel grid
        scale: Integer magnification (nearest neighbour)

    Returns:
        PIL Image of size (width*scale, height*scale)
    """
    if grid.pixel_count == 0:
        return Image.new("L", (grid.width * scale, grid.height * scale), 255)

    image = Image.fromarray(preview_levels(grid))
    if scale > 1:
        image = image.resize(
            (grid.width * scale, grid.height * scale), Image.Resampling.NEAREST
        )
    return image
