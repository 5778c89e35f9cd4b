"""In-memory error log shared by the LCD and serial tools."""

from datetime import datetime
from typing import Callable, List, Optional

from models import ErrorLogEntry
from serial_utils import format_timestamp


class ErrorLog:
    """Collects user-facing errors with a timestamp and source tool.

    Listeners are called with each new entry, so the console dock and the
    settings dialog can update live.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._entries: List[ErrorLogEntry] = []
        self._listeners: List[Callable[[ErrorLogEntry], None]] = []
        self._clock = clock

    def log(self, message: str, source: str = "System") -> ErrorLogEntry:
        """Record an error and notify listeners."""
        entry = ErrorLogEntry(time=self._clock(), message=message, source=source)
        self._entries.append(entry)
        print(f"[{source}] {message}")
        for listener in self._listeners:
            listener(entry)
        return entry

    def subscribe(self, listener: Callable[[ErrorLogEntry], None]):
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[ErrorLogEntry], None]):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def clear(self):
        self._entries.clear()

    @property
    def entries(self) -> "list[ErrorLogEntry]":
        """Entries, newest first."""
        return list(reversed(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def format_entry(entry: ErrorLogEntry, source_label: Optional[str] = "Source") -> str:
        """[HH:MM:SS.mmm] message (Source: tool)"""
        line = f"[{format_timestamp(entry.time)}] {entry.message}"
        if source_label:
            line += f" ({source_label}: {entry.source})"
        return line
