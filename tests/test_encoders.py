from __future__ import annotations

import unittest

from dot_matrix.encoders import (
    default_filename,
    file_extension,
    parse_document,
    render_document,
)
from models import BitOrder, OutputFormat


def data_lines(text: str) -> "list[str]":
    """Non-empty lines that are not part of the header comment."""
    lines = []
    in_block = False
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("/*"):
            in_block = True
        if in_block:
            if stripped.endswith("*/"):
                in_block = False
            continue
        if stripped and not stripped.startswith(("//", "#")):
            lines.append(line)
    return lines


class TestHexFormat(unittest.TestCase):
    def test_two_bytes_single_line(self) -> None:
        doc = render_document(b"\xff\xff", 16, 1, 1, "MSB", "hex")
        self.assertEqual(doc.format, OutputFormat.HEX)
        self.assertEqual(data_lines(doc.text), ["0xFF, 0xFF"])

    def test_header(self) -> None:
        doc = render_document(b"\x00", 8, 1, 1, BitOrder.LSB_FIRST, OutputFormat.HEX)
        self.assertTrue(doc.text.startswith("// LCD dot matrix data - 8x1, 1-bit\n"))
        self.assertIn("// Byte order: LSB\n", doc.text)

    def test_sixteen_per_line_with_trailing_comma(self) -> None:
        doc = render_document(bytes(range(20)), 20, 8, 1, "msb", "hex")
        lines = data_lines(doc.text)
        self.assertEqual(len(lines), 2)
        self.assertEqual(len(lines[0].split(", ")), 16)
        self.assertTrue(lines[0].endswith("0x0F,"))
        self.assertEqual(lines[1], "0x10, 0x11, 0x12, 0x13")

    def test_uppercase_zero_padded(self) -> None:
        doc = render_document(b"\x0a\xab", 2, 1, 8, "MSB", "hex")
        self.assertEqual(data_lines(doc.text), ["0x0A, 0xAB"])


class TestBinaryFormat(unittest.TestCase):
    def test_eight_per_line(self) -> None:
        doc = render_document(bytes([0b10110010] * 9), 72, 1, 1, "MSB", "binary")
        lines = data_lines(doc.text)
        self.assertEqual(len(lines), 2)
        self.assertEqual(len(lines[0].split(", ")), 8)
        self.assertTrue(lines[0].endswith("0b10110010,"))
        self.assertEqual(lines[1], "0b10110010")

    def test_zero_padded(self) -> None:
        doc = render_document(b"\x01", 8, 1, 1, "MSB", "binary")
        self.assertEqual(data_lines(doc.text), ["0b00000001"])


class TestSourceFormats(unittest.TestCase):
    def test_c_array(self) -> None:
        doc = render_document(bytes(17), 17, 1, 8, "MSB", "c")
        self.assertIn("#include <stdint.h>", doc.text)
        self.assertIn("const uint8_t lcd_data[17] = {\n", doc.text)
        self.assertIn("\n    0x00, 0x00", doc.text)
        self.assertTrue(doc.text.endswith("};\n"))
        self.assertIn(" * Resolution: 17x1\n", doc.text)
        self.assertIn(" * Bit depth: 8-bit\n", doc.text)

    def test_python_list(self) -> None:
        doc = render_document(b"\x01\x02", 2, 1, 8, "MSB", "python")
        self.assertTrue(doc.text.startswith("# LCD dot matrix data\n"))
        self.assertIn("lcd_data = [\n    0x01, 0x02\n]\n", doc.text)

    def test_arduino_progmem(self) -> None:
        doc = render_document(b"\x01\x02", 16, 1, 1, "MSB", "arduino")
        self.assertIn("const unsigned char PROGMEM lcd_data[] = {\n  0x01, 0x02\n};\n", doc.text)

    def test_python_document_is_valid_python(self) -> None:
        data = bytes(range(40))
        doc = render_document(data, 40, 1, 8, "MSB", OutputFormat.PYTHON)
        namespace: dict = {}
        exec(doc.text, namespace)
        self.assertEqual(bytes(namespace["lcd_data"]), data)


class TestEmptyBuffer(unittest.TestCase):
    def test_c_array_stays_valid(self) -> None:
        doc = render_document(b"", 0, 0, 1, "MSB", "c")
        self.assertIn("const uint8_t lcd_data[] = {\n    0  /* no pixel data */\n};\n", doc.text)
        self.assertNotIn("lcd_data[0]", doc.text)
        self.assertEqual(parse_document(doc.text, "c"), b"")

    def test_arduino_array_stays_valid(self) -> None:
        doc = render_document(b"", 0, 0, 1, "MSB", "arduino")
        self.assertIn("PROGMEM lcd_data[] = {\n  0  /* no pixel data */\n};\n", doc.text)
        self.assertEqual(parse_document(doc.text, "arduino"), b"")

    def test_hex_has_no_data_lines(self) -> None:
        doc = render_document(b"", 0, 0, 1, "MSB", "hex")
        self.assertEqual(data_lines(doc.text), [])


class TestUnknownFormat(unittest.TestCase):
    def test_unknown_format_renders_empty(self) -> None:
        doc = render_document(b"\xff", 8, 1, 1, "MSB", "morse")
        self.assertIsNone(doc.format)
        self.assertEqual(doc.text, "")
        self.assertTrue(doc.is_empty)

    def test_unknown_format_parses_empty(self) -> None:
        self.assertEqual(parse_document("0xFF", "morse"), b"")

    def test_unknown_extension(self) -> None:
        self.assertEqual(file_extension("morse"), ".txt")


class TestRoundTrip(unittest.TestCase):
    def test_every_format_parses_back(self) -> None:
        samples = [b"", b"\x00", bytes(range(256)), bytes([0xB2, 0x4D]) * 13]
        for fmt in OutputFormat:
            for data in samples:
                doc = render_document(data, 128, 64, 1, "MSB", fmt)
                self.assertEqual(parse_document(doc.text, fmt), data, (fmt, len(data)))

    def test_rendering_is_deterministic(self) -> None:
        data = bytes(range(100))
        for fmt in OutputFormat:
            first = render_document(data, 10, 10, 8, "LSB", fmt)
            second = render_document(data, 10, 10, 8, "LSB", fmt)
            self.assertEqual(first, second)


class TestFileNames(unittest.TestCase):
    def test_extensions(self) -> None:
        expected = {
            "hex": ".hex",
            "binary": ".bin",
            "c": ".c",
            "python": ".py",
            "arduino": ".ino",
        }
        for tag, ext in expected.items():
            self.assertEqual(file_extension(tag), ext)

    def test_default_filename(self) -> None:
        self.assertEqual(default_filename(128, 64, 1, "c"), "lcd_128x64_1bit.c")


if __name__ == "__main__":
    unittest.main()
