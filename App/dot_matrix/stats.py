"""Size summaries for a converted pixel grid."""

from models import ConversionStats, PixelGrid

from .utils import ceil_div


def compute_stats(grid: PixelGrid) -> ConversionStats:
    """Byte size and pixel count for display.

    AIDEV-NOTE: Mirrors the packer's length rule instead of measuring the
    packed buffer - keep both in sync.
    """
    pixel_count = grid.width * grid.height
    if grid.bit_depth == 1:
        byte_size = ceil_div(pixel_count, 8)
    else:
        byte_size = pixel_count
    return ConversionStats(byte_size=byte_size, pixel_count=pixel_count)
