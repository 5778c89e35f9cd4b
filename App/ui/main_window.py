"""Main application window hosting the LCD and serial tools."""

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QDockWidget,
    QLabel,
    QMainWindow,
    QMessageBox,
    QTabWidget,
    QToolBar,
    QWidget,
)

from config_manager import ConfigManager
from error_log import ErrorLog
from models import APP_VERSION, ConnectionState, PipelineState
from ui.console_panel import ConsolePanel
from ui.lcd_panel import LcdPanel
from ui.serial_panel import SerialPanel
from ui.settings_dialog import SettingsDialog
from ui.styles import FONTS, connection_stylesheet

LCD_TAB = 0
SERIAL_TAB = 1


class EmbeddedToolsWindow(QMainWindow):
    """Main application window."""

    def __init__(self, config_manager: ConfigManager | None = None):
        super().__init__()
        self.setWindowTitle(f"EmbeddedTools v{APP_VERSION}")
        self.setMinimumSize(1000, 700)

        # Application state
        self.config_manager = config_manager or ConfigManager()
        self.settings = self.config_manager.load()
        self.error_log = ErrorLog()

        # UI component references (created in _setup_ui)
        self.lcd_panel: LcdPanel
        self.serial_panel: SerialPanel
        self.console_panel: ConsolePanel
        self.console_dock: QDockWidget

        self._setup_ui()
        self._connect_signals()
        self._apply_always_on_top(self.settings.always_on_top)

    def _setup_ui(self):
        """Initialize the user interface."""
        self._create_menu_bar()
        self._create_toolbar()
        self._create_tools()
        self._create_console_dock()

    def _create_menu_bar(self):
        """Create the menu bar with View menu for panel toggles."""
        menubar = self.menuBar()
        if menubar is None:
            return
        self.view_menu = menubar.addMenu("&View")

    def _create_toolbar(self):
        """Create the main toolbar with tool shortcuts, settings and status."""
        toolbar = QToolBar("Main Toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        lcd_action = QAction("🖼 LCD Tool", self)
        lcd_action.triggered.connect(lambda: self.tools.setCurrentIndex(LCD_TAB))
        toolbar.addAction(lcd_action)

        serial_action = QAction("🔌 Serial Tool", self)
        serial_action.triggered.connect(lambda: self.tools.setCurrentIndex(SERIAL_TAB))
        toolbar.addAction(serial_action)

        toolbar.addSeparator()

        settings_action = QAction("⚙️ Settings", self)
        settings_action.setToolTip("Window options and error log")
        settings_action.triggered.connect(self._open_settings_dialog)
        toolbar.addAction(settings_action)

        toolbar.addSeparator()

        toolbar.addWidget(QLabel("Serial:"))
        self.status_label = QLabel("●")
        self.status_label.setFont(FONTS.STATUS_INDICATOR)
        self.status_label.setStyleSheet(connection_stylesheet(ConnectionState.DISCONNECTED))
        self.status_label.setToolTip("Serial connection status")
        toolbar.addWidget(self.status_label)

    def _create_tools(self):
        """Create the tool tabs as the central widget."""
        self.tools = QTabWidget()
        self.lcd_panel = LcdPanel(self.settings, self.error_log)
        self.serial_panel = SerialPanel(self.settings, self.error_log)
        self.tools.addTab(self.lcd_panel, "LCD Dot Matrix")
        self.tools.addTab(self.serial_panel, "Serial Terminal")
        self.setCentralWidget(self.tools)

    def _create_console_dock(self):
        """Create the console as a dockable widget."""
        self.console_panel = ConsolePanel(self.error_log)
        self.console_dock = self._create_dock_widget(
            "Console", self.console_panel, Qt.DockWidgetArea.BottomDockWidgetArea
        )

        action = self.console_dock.toggleViewAction()
        if action and self.view_menu:
            action.setText("Show Console")
            self.view_menu.addAction(action)

    def _create_dock_widget(
        self, title: str, widget: QWidget, area: Qt.DockWidgetArea
    ) -> QDockWidget:
        """Create a dockable widget with standard settings."""
        dock = QDockWidget(title, self)
        dock.setWidget(widget)
        dock.setAllowedAreas(
            Qt.DockWidgetArea.LeftDockWidgetArea
            | Qt.DockWidgetArea.RightDockWidgetArea
            | Qt.DockWidgetArea.BottomDockWidgetArea
        )
        self.addDockWidget(area, dock)
        return dock

    def _connect_signals(self):
        """Connect panel signals to handlers."""
        self.lcd_panel.generated.connect(self._on_generated)
        self.lcd_panel.cleared.connect(lambda: self.console_panel.append("🧹 LCD tool cleared"))
        self.lcd_panel.status_message.connect(self.console_panel.append)
        self.serial_panel.connection_state_changed.connect(self._on_connection_changed)

    # === Handlers ===

    def _on_generated(self, state: PipelineState):
        grid = state.grid
        self.console_panel.append(
            f"✓ Generated {grid.width}x{grid.height} {grid.bit_depth}-bit dot matrix: "
            f"{state.stats.byte_size} bytes, {state.stats.pixel_count} pixels"
        )

    def _on_connection_changed(self, state: ConnectionState):
        self.status_label.setStyleSheet(connection_stylesheet(state))
        self.status_label.setToolTip(state.value)
        self.console_panel.append(f"Serial: {state.value}")

    # === Settings Dialog ===

    def _open_settings_dialog(self):
        """Open the settings dialog."""
        dialog = SettingsDialog(self.settings, self.error_log, self)
        if dialog.exec():  # User clicked OK
            self.settings = dialog.get_values()
            self._apply_always_on_top(self.settings.always_on_top)
            self._save_settings()

    def _apply_always_on_top(self, enabled: bool):
        self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, enabled)
        # Changing window flags hides the window
        if self.isVisible():
            self.show()

    def _save_settings(self):
        """Persist settings, folding in the panels' current values."""
        self.settings = self.lcd_panel.apply_to_settings(self.settings)
        self.settings = self.serial_panel.apply_to_settings(self.settings)
        self.lcd_panel.update_settings(self.settings)
        self.serial_panel.update_settings(self.settings)

        success, error = self.config_manager.save(self.settings)
        if not success:
            self.error_log.log(f"Error saving config: {error}", "Settings")
            QMessageBox.warning(self, "Save Error", f"Could not save configuration:\n{error}")
        else:
            self.console_panel.append("✓ Configuration saved")

    # === Application Lifecycle ===

    def closeEvent(self, a0):
        """Clean up when window closes."""
        self.serial_panel.close_port()
        self._save_settings()
        if a0:
            a0.accept()
