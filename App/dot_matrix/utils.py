"""Shared helpers for the dot-matrix pipeline."""

import numpy as np

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


class InvalidSourceError(ValueError):
    """Raised when a raster source cannot be turned into a pixel grid."""


def ceil_div(numerator: int, denominator: int) -> int:
    """Integer ceiling division for non-negative operands."""
    return -(-numerator // denominator)


def rgba_to_array(pixels, width: int, height: int) -> np.ndarray:
    """View an RGBA buffer as a (width*height, 4) uint8 array.

    Args:
        pixels: bytes-like object or numpy array holding RGBA samples
        width: Declared raster width in pixels
        height: Declared raster height in pixels

    Returns:
        Array of shape (width*height, 4)

    Raises:
        InvalidSourceError: If the buffer length is not width*height*4

    AIDEV-NOTE: The dimensions are never guessed from the buffer length.
    """
    if isinstance(pixels, np.ndarray):
        flat = np.ascontiguousarray(pixels, dtype=np.uint8).reshape(-1)
    else:
        flat = np.frombuffer(bytes(pixels), dtype=np.uint8)

    expected = width * height * 4
    if width < 0 or height < 0 or flat.size != expected:
        raise InvalidSourceError(
            f"Raster buffer holds {flat.size} bytes, "
            f"expected {expected} for {width}x{height} RGBA"
        )
    return flat.reshape(-1, 4)


def luma(rgba: np.ndarray) -> np.ndarray:
    """Rounded perceptual brightness (0-255) per pixel, alpha ignored."""
    channels = rgba.astype(np.float64)
    r_weight, g_weight, b_weight = LUMA_WEIGHTS
    gray = (
        r_weight * channels[:, 0]
        + g_weight * channels[:, 1]
        + b_weight * channels[:, 2]
    )
    # Round half up, not numpy's round-half-to-even
    return np.floor(gray + 0.5).astype(np.int64)
