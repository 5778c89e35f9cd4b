"""Helpers for the serial terminal: port listing, hex parsing and display.

AIDEV-NOTE: Kept free of Qt so it can be used (and tested) without a
running QApplication. The QThread transport lives in serial_handler.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import serial
import serial.tools.list_ports

from models import Parity, SerialConfig

BAUD_RATES = [1200, 2400, 4800, 9600, 19200, 38400, 57600, 115200, 230400, 460800, 921600]

_WHITESPACE = re.compile(r"\s+")
_HEX_DIGITS = re.compile(r"^[0-9A-Fa-f]+$")

PARITY_MAP = {
    Parity.NONE: serial.PARITY_NONE,
    Parity.ODD: serial.PARITY_ODD,
    Parity.EVEN: serial.PARITY_EVEN,
}

DATA_BITS_MAP = {
    5: serial.FIVEBITS,
    6: serial.SIXBITS,
    7: serial.SEVENBITS,
    8: serial.EIGHTBITS,
}

STOP_BITS_MAP = {
    1: serial.STOPBITS_ONE,
    2: serial.STOPBITS_TWO,
}


def list_ports() -> "list[tuple[str, str]]":
    """Available serial ports as (device, description) pairs."""
    return [
        (port.device, port.description)
        for port in sorted(serial.tools.list_ports.comports(), key=lambda p: p.device)
    ]


def serial_kwargs(config: SerialConfig) -> dict:
    """Keyword arguments for serial.Serial from a SerialConfig.

    AIDEV-NOTE: Unsupported data/stop bit values fall back to 8N1 framing
    rather than failing to open.
    """
    return {
        "port": config.port,
        "baudrate": config.baud_rate,
        "bytesize": DATA_BITS_MAP.get(config.data_bits, serial.EIGHTBITS),
        "stopbits": STOP_BITS_MAP.get(config.stop_bits, serial.STOPBITS_ONE),
        "parity": PARITY_MAP.get(config.parity, serial.PARITY_NONE),
        "timeout": 0.1,
    }


def parse_hex_string(text: str) -> bytes:
    """Parse "01 A0 ff" style input into bytes.

    Whitespace is ignored; every two hex digits form one byte.

    Raises:
        ValueError: If the input has non-hex characters or an odd digit count
    """
    digits = _WHITESPACE.sub("", text)
    if not digits:
        return b""
    if not _HEX_DIGITS.match(digits):
        raise ValueError("Invalid hex data")
    if len(digits) % 2:
        raise ValueError("Hex data must have an even number of digits")
    return bytes.fromhex(digits)


def encode_outgoing(text: str, hex_mode: bool) -> bytes:
    """Bytes to transmit for the send box contents."""
    if hex_mode:
        return parse_hex_string(text)
    return text.encode("utf-8")


def format_timestamp(moment: datetime) -> str:
    """HH:MM:SS.mmm"""
    return moment.strftime("%H:%M:%S.") + f"{moment.microsecond // 1000:03d}"


def format_received(
    data: bytes, show_hex: bool, timestamp: Optional[datetime] = None
) -> str:
    """One display line for a received chunk.

    Args:
        data: Raw bytes as read from the port
        show_hex: Show upper-case hex pairs instead of decoded text
        timestamp: Prefix the line with [HH:MM:SS.mmm] when given
    """
    if show_hex:
        body = " ".join(f"{b:02X}" for b in data)
    else:
        body = data.decode("utf-8", errors="replace")

    if timestamp is None:
        return body
    return f"[{format_timestamp(timestamp)}] {body}"


@dataclass
class TrafficCounter:
    """Running RX/TX byte counts."""

    rx: int = 0
    tx: int = 0

    def add_rx(self, count: int):
        self.rx += count

    def add_tx(self, count: int):
        self.tx += count

    def reset(self):
        self.rx = 0
        self.tx = 0

    def __str__(self) -> str:
        return f"RX: {self.rx} | TX: {self.tx}"
