"""Data models and constants for the EmbeddedTools application."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

# Configuration file path
CONFIG_FILE = Path.home() / ".embedded_tools_config.json"

APP_VERSION = "0.1.0"

# AIDEV-NOTE: Supported dot-matrix bit depths - the packer and encoder
# assume every pixel value fits in a single byte
SUPPORTED_BIT_DEPTHS = (1, 2, 4, 8)

DEFAULT_WIDTH = 128  # pixels
DEFAULT_HEIGHT = 64  # pixels
DEFAULT_THRESHOLD = 128  # 0-255


class ConnectionState(Enum):
    """Serial connection states."""

    DISCONNECTED = "Disconnected"
    CONNECTING = "Connecting..."
    CONNECTED = "Connected"
    ERROR = "Error"


class SourceMode(Enum):
    """Where the raster came from.

    AIDEV-NOTE: Only affects the 1-bit threshold polarity. Text is rendered
    dark-on-light, so glyph strokes must come out as "on" pixels.
    """

    IMAGE = "image"
    TEXT = "text"


class BitOrder(Enum):
    """Position of the first pixel inside a packed byte."""

    MSB_FIRST = "msb"
    LSB_FIRST = "lsb"

    @property
    def label(self) -> str:
        """Short upper-case label used in document headers."""
        return self.value.upper()


class OutputFormat(Enum):
    """Textual encodings for a packed byte buffer."""

    HEX = "hex"
    BINARY = "binary"
    C = "c"
    PYTHON = "python"
    ARDUINO = "arduino"

    @classmethod
    def from_tag(cls, tag: "str | OutputFormat") -> Optional["OutputFormat"]:
        """Look up a format by its tag, returning None for unknown tags."""
        if isinstance(tag, OutputFormat):
            return tag
        try:
            return cls(str(tag).lower())
        except ValueError:
            return None

    @property
    def extension(self) -> str:
        """Suggested file extension for exported documents."""
        extensions = {
            OutputFormat.HEX: ".hex",
            OutputFormat.BINARY: ".bin",
            OutputFormat.C: ".c",
            OutputFormat.PYTHON: ".py",
            OutputFormat.ARDUINO: ".ino",
        }
        return extensions[self]


class Parity(Enum):
    """Serial parity settings."""

    NONE = "none"
    ODD = "odd"
    EVEN = "even"


# --- Dot Matrix Models ---


@dataclass
class EncodingConfig:
    """Caller-supplied settings for a single dot-matrix conversion."""

    # Target raster size
    width: int = DEFAULT_WIDTH  # pixels
    height: int = DEFAULT_HEIGHT  # pixels

    # Quantization
    threshold: int = DEFAULT_THRESHOLD  # 0-255, only used for 1-bit output
    invert: bool = False
    bit_depth: int = 1  # 1, 2, 4 or 8
    source_mode: SourceMode = SourceMode.IMAGE

    # Packing and rendering
    bit_order: BitOrder = BitOrder.MSB_FIRST
    output_format: OutputFormat = OutputFormat.HEX


@dataclass(frozen=True)
class PixelGrid:
    """Quantized pixel values in row-major order.

    AIDEV-NOTE: values is a tuple so the grid cannot be mutated after the
    quantizer produces it. Every value is in [0, 2**bit_depth - 1].
    """

    width: int
    height: int
    bit_depth: int
    values: "tuple[int, ...]"

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def levels(self) -> int:
        return 2**self.bit_depth


@dataclass(frozen=True)
class OutputDocument:
    """A rendered textual artifact (header comment + data literal)."""

    format: Optional[OutputFormat]
    text: str

    @property
    def is_empty(self) -> bool:
        return not self.text


@dataclass(frozen=True)
class ConversionStats:
    """Size summary shown next to the preview."""

    byte_size: int = 0
    pixel_count: int = 0


@dataclass(frozen=True)
class PipelineState:
    """Everything derived by one "generate" invocation.

    AIDEV-NOTE: Returned anew by every conversion and replaced wholesale by
    the caller; there is no module-level "current conversion".
    """

    config: EncodingConfig = field(default_factory=EncodingConfig)
    grid: Optional[PixelGrid] = None
    buffer: bytes = b""
    document: OutputDocument = OutputDocument(None, "")
    stats: ConversionStats = ConversionStats()

    @classmethod
    def empty(cls, config: Optional[EncodingConfig] = None) -> "PipelineState":
        """Cleared state, as shown before the first generate."""
        return cls(config=config or EncodingConfig())

    @property
    def has_result(self) -> bool:
        return self.grid is not None


# --- Raster Sources ---


@dataclass
class TextSource:
    """A string rendered with a font onto a light canvas."""

    text: str
    font_family: str = "DejaVuSans"
    font_size: int = 16  # pixels
    font_weight: str = "normal"  # "normal" or "bold"


@dataclass
class ImageSource:
    """A decoded image; scaled to the target size before quantizing."""

    image: object  # PIL.Image.Image
    name: str = ""


# --- Serial Models ---


@dataclass
class SerialConfig:
    """Serial port framing settings."""

    port: str = ""
    baud_rate: int = 115200
    data_bits: int = 8  # 5-8
    stop_bits: int = 1  # 1 or 2
    parity: Parity = Parity.NONE


# --- Application Settings ---


@dataclass
class AppSettings:
    """Settings persisted between sessions."""

    # LCD tool defaults
    lcd_width: int = DEFAULT_WIDTH
    lcd_height: int = DEFAULT_HEIGHT
    threshold: int = DEFAULT_THRESHOLD
    bit_depth: int = 1
    bit_order: str = BitOrder.MSB_FIRST.value
    output_format: str = OutputFormat.HEX.value
    font_family: str = "DejaVuSans"
    font_size: int = 16

    # Serial tool defaults
    baud_rate: int = 115200
    data_bits: int = 8
    stop_bits: int = 1
    parity: str = Parity.NONE.value
    auto_send_interval_ms: int = 1000

    # Window
    always_on_top: bool = False


@dataclass(frozen=True)
class ErrorLogEntry:
    """A single error log record."""

    time: datetime
    message: str
    source: str = "System"
