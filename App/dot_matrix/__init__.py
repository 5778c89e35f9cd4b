"""Dot-matrix conversion pipeline for embedded LCD displays.

AIDEV-NOTE: This package turns an image or rendered text into display data.
Organized into modular components:
- converter: DotMatrixConverter orchestrator (rasterize -> ... -> stats)
- raster: Pillow-based raster sources (image scaling, text rendering)
- quantization: RGBA to luma to discrete pixel values
- packing: pixel grid to byte buffer
- encoders: byte buffer to hex/binary/C/Python/Arduino text (and back)
- stats: byte-size and pixel-count summaries
- preview: pixel grid back to a greyscale image
- utils: shared errors and arithmetic helpers
"""

from .converter import DotMatrixConverter
from .encoders import parse_document, render_document
from .utils import InvalidSourceError

__all__ = [
    "DotMatrixConverter",
    "InvalidSourceError",
    "parse_document",
    "render_document",
]
