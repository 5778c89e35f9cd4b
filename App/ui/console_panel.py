"""Console dock shared by the LCD and serial tools."""

from datetime import datetime

from PyQt6.QtWidgets import QGroupBox, QPushButton, QTextEdit, QVBoxLayout

from error_log import ErrorLog
from models import ErrorLogEntry
from serial_utils import format_timestamp
from ui.styles import FONTS, SIZES


class ConsolePanel(QGroupBox):
    """Timestamped status messages plus every error log entry."""

    def __init__(self, error_log: ErrorLog, parent=None):
        super().__init__(None, parent)
        self.error_log = error_log
        self._setup_ui()
        self.error_log.subscribe(self._on_error_logged)

    def _setup_ui(self):
        layout = QVBoxLayout()

        self.console = QTextEdit()
        self.console.setReadOnly(True)
        # AIDEV-NOTE: Minimum height only; the dock widget owns the sizing
        self.console.setMinimumHeight(SIZES.CONSOLE_MIN_HEIGHT)
        self.console.setFont(FONTS.CONSOLE)
        layout.addWidget(self.console)

        clear_btn = QPushButton("Clear Console")
        clear_btn.clicked.connect(self.clear)
        layout.addWidget(clear_btn)

        self.setLayout(layout)

    def _on_error_logged(self, entry: ErrorLogEntry):
        # Error entries already carry their own timestamp
        self._write(f"❌ {ErrorLog.format_entry(entry)}")

    def append(self, message: str):
        """Add a status line prefixed with the current time."""
        self._write(f"[{format_timestamp(datetime.now())}] {message}")

    def _write(self, line: str):
        self.console.append(line)
        scrollbar = self.console.verticalScrollBar()
        if scrollbar:
            scrollbar.setValue(scrollbar.maximum())

    def clear(self):
        self.console.clear()
