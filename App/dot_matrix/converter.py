"""Main dot-matrix converter orchestrating the complete pipeline.

AIDEV-NOTE: rasterize -> quantize -> pack -> encode -> stats, run end to
end on every call. The converter keeps no conversion results between
calls; each call returns a fresh PipelineState.
"""

from dataclasses import replace
from pathlib import Path

from PIL import Image

from models import (
    EncodingConfig,
    ImageSource,
    PipelineState,
    SourceMode,
    TextSource,
)

from .encoders import render_document
from .packing import pack
from .quantization import quantize
from .raster import image_to_rgba, text_to_rgba
from .stats import compute_stats
from .utils import InvalidSourceError


class DotMatrixConverter:
    """Converts images and text into encoded LCD dot-matrix data."""

    def __init__(
        self,
        resample: Image.Resampling = Image.Resampling.BILINEAR,
        verbose: bool = True,
    ):
        self.resample = resample
        self.verbose = verbose

    def _log(self, message: str):
        if self.verbose:
            print(message)

    def rasterize(
        self, source: "ImageSource | TextSource", config: EncodingConfig
    ) -> bytes:
        """Produce the RGBA buffer for a source at the configured size.

        Raises:
            InvalidSourceError: For empty text, missing images or bad sizes
        """
        if isinstance(source, TextSource):
            return text_to_rgba(source, config.width, config.height)
        if isinstance(source, ImageSource):
            if source.image is None:
                raise InvalidSourceError("No image loaded")
            return image_to_rgba(
                source.image, config.width, config.height, self.resample
            )
        raise InvalidSourceError(f"Unsupported source: {type(source).__name__}")

    def convert_pixels(self, pixels, config: EncodingConfig) -> PipelineState:
        """Run the core pipeline on an already rasterized RGBA buffer.

        Args:
            pixels: RGBA bytes of config.width x config.height
            config: Conversion settings

        Returns:
            PipelineState holding grid, buffer, document and stats
        """
        grid = quantize(pixels, config.width, config.height, config)
        buffer = pack(grid, config.bit_order)
        document = render_document(
            buffer,
            grid.width,
            grid.height,
            grid.bit_depth,
            config.bit_order,
            config.output_format,
        )
        stats = compute_stats(grid)

        self._log(
            f"Packed {stats.pixel_count} pixels into {len(buffer)} bytes "
            f"({grid.bit_depth}-bit, {config.bit_order.label})"
        )
        return PipelineState(
            config=config,
            grid=grid,
            buffer=buffer,
            document=document,
            stats=stats,
        )

    def generate(
        self, source: "ImageSource | TextSource", config: EncodingConfig
    ) -> PipelineState:
        """Execute the complete pipeline for an image or text source.

        The source mode is taken from the source type, overriding
        config.source_mode.
        """
        mode = SourceMode.TEXT if isinstance(source, TextSource) else SourceMode.IMAGE
        config = replace(config, source_mode=mode)

        self._log(
            f"Generating {config.width}x{config.height} dot matrix "
            f"from {mode.value} source..."
        )
        pixels = self.rasterize(source, config)
        return self.convert_pixels(pixels, config)


def export_document(state: PipelineState, path: str | Path) -> Path:
    """Write the rendered document text to a file.

    Raises:
        ValueError: If there is no generated document to export
    """
    if state.document.is_empty:
        raise ValueError("Nothing to export - generate dot matrix data first")
    path = Path(path)
    path.write_text(state.document.text, encoding="utf-8")
    return path


def export_binary(state: PipelineState, path: str | Path) -> Path:
    """Write the raw packed byte buffer to a file."""
    if not state.has_result:
        raise ValueError("Nothing to export - generate dot matrix data first")
    path = Path(path)
    path.write_bytes(state.buffer)
    return path
