"""Settings dialog: window options, version info and the error log."""

from dataclasses import replace

from PyQt6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QGroupBox,
    QLabel,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
)

from error_log import ErrorLog
from models import APP_VERSION, AppSettings
from ui.styles import FONTS


class SettingsDialog(QDialog):
    """Dialog window for application settings and the error log."""

    def __init__(self, settings: AppSettings, error_log: ErrorLog, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(500)
        self.settings = settings
        self.error_log = error_log
        self._setup_ui()
        self._refresh_error_log()

        # AIDEV-NOTE: Live updates while the dialog is open; unsubscribed on
        # close so the log does not keep a dead dialog alive
        self.error_log.subscribe(self._on_error_logged)
        self.finished.connect(lambda _: self.error_log.unsubscribe(self._on_error_logged))

    def _setup_ui(self):
        """Initialize the dialog UI."""
        layout = QVBoxLayout()

        window_group = QGroupBox("Window")
        window_layout = QVBoxLayout()
        self.always_on_top_check = QCheckBox("Keep window always on top")
        self.always_on_top_check.setChecked(self.settings.always_on_top)
        window_layout.addWidget(self.always_on_top_check)
        window_group.setLayout(window_layout)
        layout.addWidget(window_group)

        about_group = QGroupBox("About")
        about_layout = QVBoxLayout()
        about_layout.addWidget(QLabel(f"Current version: {APP_VERSION}"))
        about_group.setLayout(about_layout)
        layout.addWidget(about_group)

        log_group = QGroupBox("Error Log")
        log_layout = QVBoxLayout()
        self.log_view = QTextEdit()
        self.log_view.setReadOnly(True)
        self.log_view.setFont(FONTS.CONSOLE)
        log_layout.addWidget(self.log_view)

        clear_log_btn = QPushButton("Clear Log")
        clear_log_btn.clicked.connect(self._clear_error_log)
        log_layout.addWidget(clear_log_btn)
        log_group.setLayout(log_layout)
        layout.addWidget(log_group)

        # Dialog buttons (OK/Cancel)
        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok
            | QDialogButtonBox.StandardButton.Cancel
        )
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

        self.setLayout(layout)

    def _refresh_error_log(self):
        """Show all entries, newest first."""
        self.log_view.clear()
        if not len(self.error_log):
            self.log_view.setPlaceholderText("No errors logged")
            return
        for entry in self.error_log.entries:
            self.log_view.append(ErrorLog.format_entry(entry))

    def _on_error_logged(self, _entry):
        self._refresh_error_log()

    def _clear_error_log(self):
        self.error_log.clear()
        self._refresh_error_log()

    def get_values(self) -> AppSettings:
        """Settings with the dialog's values applied."""
        return replace(
            self.settings, always_on_top=self.always_on_top_check.isChecked()
        )
