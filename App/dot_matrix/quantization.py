"""Quantization of RGBA rasters into discrete pixel values.

AIDEV-NOTE: 1-bit output uses a brightness threshold whose direction
depends on the source mode; deeper bit depths map luma linearly onto
2**bit_depth levels and ignore the threshold.
"""

import numpy as np

from models import EncodingConfig, PixelGrid, SourceMode, SUPPORTED_BIT_DEPTHS

from .utils import luma, rgba_to_array


def quantize(
    pixels,
    width: int,
    height: int,
    config: EncodingConfig,
) -> PixelGrid:
    """Convert an RGBA buffer into a PixelGrid.

    Args:
        pixels: RGBA samples, row-major, 4 bytes per pixel
        width: Raster width in pixels
        height: Raster height in pixels
        config: Threshold, invert flag, bit depth and source mode

    Returns:
        Immutable PixelGrid at config.bit_depth

    Raises:
        InvalidSourceError: If len(pixels) != width*height*4
        ValueError: If the bit depth is not 1, 2, 4 or 8
    """
    if config.bit_depth not in SUPPORTED_BIT_DEPTHS:
        raise ValueError(f"Unsupported bit depth: {config.bit_depth}")

    gray = luma(rgba_to_array(pixels, width, height))

    if config.bit_depth == 1:
        values = threshold_values(gray, config.threshold, config.source_mode)
        if config.invert:
            values = 1 - values
    else:
        values = level_values(gray, config.bit_depth)
        if config.invert:
            values = (2**config.bit_depth - 1) - values

    return PixelGrid(
        width=width,
        height=height,
        bit_depth=config.bit_depth,
        values=tuple(int(v) for v in values.tolist()),
    )


def threshold_values(
    gray: np.ndarray, threshold: int, source_mode: SourceMode
) -> np.ndarray:
    """Binary pixel values for 1-bit output.

    Image sources light a pixel when it is at least as bright as the
    threshold; text sources light the dark glyph strokes instead.
    """
    if source_mode == SourceMode.TEXT:
        return (gray < threshold).astype(np.int64)
    return (gray >= threshold).astype(np.int64)


def level_values(gray: np.ndarray, bit_depth: int) -> np.ndarray:
    """Map 0-255 luma onto 0..2**bit_depth-1, rounding down."""
    levels = 2**bit_depth
    return np.floor(gray / 255 * (levels - 1)).astype(np.int64)
