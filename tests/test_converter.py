from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from PIL import Image

from dot_matrix import DotMatrixConverter, InvalidSourceError, parse_document
from dot_matrix.converter import export_binary, export_document
from models import (
    BitOrder,
    EncodingConfig,
    ImageSource,
    OutputFormat,
    PipelineState,
    SourceMode,
    TextSource,
)


class TestDotMatrixConverter(unittest.TestCase):
    def setUp(self) -> None:
        self.converter = DotMatrixConverter(verbose=False)

    def test_convert_pixels_fills_every_stage(self) -> None:
        # 8x1: alternating black/white RGBA pixels
        pixels = b"".join(
            bytes([v, v, v, 255]) for v in (0, 255, 0, 255, 0, 255, 0, 255)
        )
        config = EncodingConfig(width=8, height=1, threshold=128)
        state = self.converter.convert_pixels(pixels, config)

        self.assertTrue(state.has_result)
        self.assertEqual(state.grid.values, (0, 1, 0, 1, 0, 1, 0, 1))
        self.assertEqual(state.buffer, b"\x55")
        self.assertEqual(state.stats.byte_size, 1)
        self.assertEqual(state.stats.pixel_count, 8)
        self.assertEqual(parse_document(state.document.text, "hex"), b"\x55")

    def test_convert_pixels_is_deterministic(self) -> None:
        pixels = bytes(range(256)) * 4  # 16x16 RGBA
        config = EncodingConfig(width=16, height=16, bit_depth=2)
        first = self.converter.convert_pixels(pixels, config)
        second = self.converter.convert_pixels(pixels, config)
        self.assertEqual(first, second)

    def test_text_source_sets_glyph_pixels(self) -> None:
        config = EncodingConfig(width=64, height=32, threshold=128)
        source = TextSource(text="HI", font_size=24)
        state = self.converter.generate(source, config)

        self.assertEqual(state.config.source_mode, SourceMode.TEXT)
        self.assertIn(1, state.grid.values)
        self.assertIn(0, state.grid.values)
        self.assertEqual(len(state.buffer), 64 * 32 // 8)

    def test_bold_text_sets_at_least_as_many_pixels(self) -> None:
        config = EncodingConfig(width=64, height=32)
        normal = self.converter.generate(TextSource("A", font_size=24), config)
        bold = self.converter.generate(
            TextSource("A", font_size=24, font_weight="bold"), config
        )
        self.assertGreaterEqual(sum(bold.grid.values), sum(normal.grid.values))

    def test_image_source_is_scaled_to_target(self) -> None:
        image = Image.new("RGBA", (40, 10), (255, 255, 255, 255))
        config = EncodingConfig(width=16, height=4, source_mode=SourceMode.TEXT)
        state = self.converter.generate(ImageSource(image, "white.png"), config)

        # Image mode: bright pixels are "on"
        self.assertEqual(state.config.source_mode, SourceMode.IMAGE)
        self.assertEqual(state.grid.values, (1,) * 64)
        self.assertEqual(state.buffer, b"\xff" * 8)

    def test_lsb_order_and_format_follow_config(self) -> None:
        image = Image.new("RGB", (8, 1), (255, 255, 255))
        image.putpixel((0, 0), (0, 0, 0))
        config = EncodingConfig(
            width=8,
            height=1,
            bit_order=BitOrder.LSB_FIRST,
            output_format=OutputFormat.BINARY,
        )
        state = self.converter.generate(ImageSource(image), config)
        self.assertEqual(state.buffer, b"\xfe")
        self.assertIn("0b11111110", state.document.text)
        self.assertIn("// Byte order: LSB", state.document.text)

    def test_empty_text_raises(self) -> None:
        with self.assertRaises(InvalidSourceError):
            self.converter.generate(TextSource(""), EncodingConfig())

    def test_missing_image_raises(self) -> None:
        with self.assertRaises(InvalidSourceError):
            self.converter.generate(ImageSource(None), EncodingConfig())

    def test_invalid_size_raises(self) -> None:
        with self.assertRaises(InvalidSourceError):
            self.converter.generate(TextSource("x"), EncodingConfig(width=0))


class TestExport(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        pixels = bytes([255, 255, 255, 255]) * 16
        config = EncodingConfig(width=16, height=1, output_format=OutputFormat.C)
        self.state = DotMatrixConverter(verbose=False).convert_pixels(pixels, config)

    def test_export_document_writes_text(self) -> None:
        path = export_document(self.state, Path(self.tmp.name) / "out.c")
        self.assertEqual(path.read_text(encoding="utf-8"), self.state.document.text)

    def test_export_binary_writes_buffer(self) -> None:
        path = export_binary(self.state, Path(self.tmp.name) / "out.bin")
        self.assertEqual(path.read_bytes(), b"\xff\xff")

    def test_export_without_result_raises(self) -> None:
        empty = PipelineState.empty()
        with self.assertRaises(ValueError):
            export_document(empty, Path(self.tmp.name) / "out.hex")
        with self.assertRaises(ValueError):
            export_binary(empty, Path(self.tmp.name) / "out.bin")


if __name__ == "__main__":
    unittest.main()
