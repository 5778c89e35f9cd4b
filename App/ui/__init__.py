"""UI components for the EmbeddedTools application.

This package contains modular UI panels that can be easily rearranged
in the application layout.
"""

from ui.console_panel import ConsolePanel
from ui.lcd_panel import LcdPanel
from ui.main_window import EmbeddedToolsWindow
from ui.serial_panel import SerialPanel
from ui.settings_dialog import SettingsDialog

__all__ = [
    "EmbeddedToolsWindow",
    "LcdPanel",
    "SerialPanel",
    "ConsolePanel",
    "SettingsDialog",
]
