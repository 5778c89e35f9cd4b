"""Textual encodings for packed dot-matrix data.

AIDEV-NOTE: Every format renders the same byte buffer; none of them looks at
pixel values. Each OutputFormat maps to a DocumentLayout describing the
header comment style, the token style and the surrounding declaration.
Unknown formats render to an empty document rather than raising, so the
UI can treat an empty document as a soft failure.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from models import BitOrder, OutputDocument, OutputFormat

ARRAY_NAME = "lcd_data"

_COMMENT_BLOCK = re.compile(r"/\*.*?\*/", re.DOTALL)
_HEX_TOKEN = re.compile(r"\b0x([0-9A-Fa-f]{2})\b")
_BINARY_TOKEN = re.compile(r"\b0b([01]{8})\b")

# A single zero keeps the declaration valid; it is not a data token
EMPTY_ARRAY_VALUE = "0  /* no pixel data */"


def hex_token(value: int) -> str:
    return f"0x{value:02X}"


def binary_token(value: int) -> str:
    return f"0b{value:08b}"


@dataclass(frozen=True)
class DocumentLayout:
    """How one output format arranges its header and byte listing."""

    tokens_per_line: int
    indent: str
    token: Callable[[int], str]
    header_style: str  # "line" (//), "block" (/* */) or "hash" (#)
    opening: Callable[[int], str]
    closing: str
    # Body for an empty buffer; C rejects empty and zero-length arrays
    empty_body: str = ""


_LAYOUTS = {
    OutputFormat.HEX: DocumentLayout(
        tokens_per_line=16,
        indent="",
        token=hex_token,
        header_style="line",
        opening=lambda count: "",
        closing="",
    ),
    OutputFormat.BINARY: DocumentLayout(
        tokens_per_line=8,
        indent="",
        token=binary_token,
        header_style="line",
        opening=lambda count: "",
        closing="",
    ),
    OutputFormat.C: DocumentLayout(
        tokens_per_line=16,
        indent="    ",
        token=hex_token,
        header_style="block",
        opening=lambda count: (
            f"#include <stdint.h>\n\nconst uint8_t {ARRAY_NAME}[{count or ''}] = {{\n"
        ),
        closing="};\n",
        empty_body=f"    {EMPTY_ARRAY_VALUE}\n",
    ),
    OutputFormat.PYTHON: DocumentLayout(
        tokens_per_line=16,
        indent="    ",
        token=hex_token,
        header_style="hash",
        opening=lambda count: f"{ARRAY_NAME} = [\n",
        closing="]\n",
    ),
    OutputFormat.ARDUINO: DocumentLayout(
        tokens_per_line=16,
        indent="  ",
        token=hex_token,
        header_style="block",
        opening=lambda count: f"const unsigned char PROGMEM {ARRAY_NAME}[] = {{\n",
        closing="};\n",
        empty_body=f"  {EMPTY_ARRAY_VALUE}\n",
    ),
}


def render_header(
    style: str, width: int, height: int, bit_depth: int, bit_order_label: str
) -> str:
    """Comment block describing resolution, bit depth and byte order."""
    if style == "line":
        return (
            f"// LCD dot matrix data - {width}x{height}, {bit_depth}-bit\n"
            f"// Byte order: {bit_order_label}\n\n"
        )

    lines = [
        "LCD dot matrix data",
        f"Resolution: {width}x{height}",
        f"Bit depth: {bit_depth}-bit",
        f"Byte order: {bit_order_label}",
    ]
    if style == "hash":
        return "".join(f"# {line}\n" for line in lines) + "\n"
    return "/*\n" + "".join(f" * {line}\n" for line in lines) + " */\n\n"


def render_rows(data: bytes, layout: DocumentLayout) -> str:
    """Comma-separated tokens, N per line.

    Full lines end with a trailing comma; a final partial line ends
    without one.
    """
    if not data:
        return layout.empty_body

    rows = []
    per_line = layout.tokens_per_line
    for start in range(0, len(data), per_line):
        chunk = data[start : start + per_line]
        row = layout.indent + ", ".join(layout.token(b) for b in chunk)
        if len(chunk) == per_line:
            row += ","
        rows.append(row + "\n")
    return "".join(rows)


def render_document(
    data: bytes,
    width: int,
    height: int,
    bit_depth: int,
    bit_order_label: "str | BitOrder",
    output_format: "str | OutputFormat",
) -> OutputDocument:
    """Render a byte buffer as a textual document.

    Args:
        data: Packed byte buffer
        width: Grid width in pixels (header only)
        height: Grid height in pixels (header only)
        bit_depth: Grid bit depth (header only)
        bit_order_label: BitOrder or its label, e.g. "MSB"
        output_format: OutputFormat or its tag, e.g. "hex"

    Returns:
        OutputDocument; empty text for unknown formats
    """
    fmt = OutputFormat.from_tag(output_format)
    if fmt is None:
        return OutputDocument(format=None, text="")

    if isinstance(bit_order_label, BitOrder):
        bit_order_label = bit_order_label.label

    layout = _LAYOUTS[fmt]
    text = (
        render_header(
            layout.header_style, width, height, bit_depth, bit_order_label.upper()
        )
        + layout.opening(len(data))
        + render_rows(data, layout)
        + layout.closing
    )
    return OutputDocument(format=fmt, text=text)


def parse_document(text: str, output_format: "str | OutputFormat") -> bytes:
    """Read the byte listing back out of a rendered document.

    Comments and declarations are skipped; only data tokens are kept.
    Unknown formats yield an empty buffer.
    """
    fmt = OutputFormat.from_tag(output_format)
    if fmt is None:
        return b""

    body = _COMMENT_BLOCK.sub("", text)
    body = "\n".join(
        line
        for line in body.splitlines()
        if not line.lstrip().startswith(("//", "#"))
    )

    if fmt == OutputFormat.BINARY:
        return bytes(int(bits, 2) for bits in _BINARY_TOKEN.findall(body))
    return bytes(int(digits, 16) for digits in _HEX_TOKEN.findall(body))


def file_extension(output_format: "str | OutputFormat") -> str:
    """Suggested export extension, ".txt" for unknown formats."""
    fmt = OutputFormat.from_tag(output_format)
    if fmt is None:
        return ".txt"
    return fmt.extension


def default_filename(
    width: int,
    height: int,
    bit_depth: int,
    output_format: "str | OutputFormat",
) -> str:
    """Default export name, e.g. lcd_128x64_1bit.hex."""
    return f"lcd_{width}x{height}_{bit_depth}bit{file_extension(output_format)}"


def describe(output_format: Optional[OutputFormat]) -> str:
    """Human readable format name for status messages."""
    names = {
        OutputFormat.HEX: "Hex",
        OutputFormat.BINARY: "Binary",
        OutputFormat.C: "C array",
        OutputFormat.PYTHON: "Python list",
        OutputFormat.ARDUINO: "Arduino PROGMEM array",
    }
    if output_format is None:
        return "Unknown"
    return names[output_format]
