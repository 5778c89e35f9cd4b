"""Serial terminal panel: connection settings, send box and receive view."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from PyQt6.QtCore import QTimer, pyqtSignal
from PyQt6.QtWidgets import (
    QButtonGroup,
    QCheckBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QRadioButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from error_log import ErrorLog
from models import AppSettings, ConnectionState, Parity, SerialConfig
from serial_handler import SerialThread
from serial_utils import (
    BAUD_RATES,
    TrafficCounter,
    encode_outgoing,
    format_received,
    list_ports,
)
from ui.styles import FONTS, SIZES, connection_stylesheet
from ui.widgets import WidgetFactory

ERROR_SOURCE = "Serial Tool"


class SerialPanel(QGroupBox):
    """Panel for a simple serial terminal."""

    connection_state_changed = pyqtSignal(ConnectionState)

    def __init__(
        self,
        settings: AppSettings,
        error_log: ErrorLog,
        parent: QWidget | None = None,
    ):
        super().__init__("Serial Terminal", parent)
        self.settings = settings
        self.error_log = error_log
        self.serial_thread: SerialThread | None = None
        self.connection_state = ConnectionState.DISCONNECTED
        self.counter = TrafficCounter()

        self.auto_send_timer = QTimer(self)
        self.auto_send_timer.timeout.connect(self.send_data)

        self._setup_ui()
        self._connect_signals()
        self._update_connection_state(ConnectionState.DISCONNECTED)

    def _setup_ui(self):
        """Initialize the UI components."""
        layout = QVBoxLayout()
        self._create_connection_controls(layout)
        self._create_receive_area(layout)
        self._create_send_area(layout)
        self.setLayout(layout)

    def _create_connection_controls(self, parent_layout: QVBoxLayout):
        """Create port selection and framing controls."""
        group = QGroupBox("Connection")
        layout = QVBoxLayout()

        port_layout = QHBoxLayout()
        port_layout.addWidget(QLabel("Port:"))
        self.port_combo = WidgetFactory.create_combo([])
        self.port_combo.setMinimumWidth(SIZES.PORT_COMBO_MIN_WIDTH)
        port_layout.addWidget(self.port_combo)

        self.refresh_btn = QPushButton("🔄 Refresh")
        port_layout.addWidget(self.refresh_btn)

        self.open_btn = QPushButton("Open")
        port_layout.addWidget(self.open_btn)

        self.close_btn = QPushButton("Close")
        port_layout.addWidget(self.close_btn)

        self.status_label = QLabel("●")
        self.status_label.setFont(FONTS.STATUS_INDICATOR)
        port_layout.addWidget(self.status_label)
        port_layout.addStretch()
        layout.addLayout(port_layout)

        framing_layout = QHBoxLayout()
        self.baud_combo = WidgetFactory.create_combo(
            [(str(rate), rate) for rate in BAUD_RATES],
            current_data=self.settings.baud_rate,
        )
        framing_layout.addLayout(WidgetFactory.create_labeled_row("Baud:", self.baud_combo))

        self.data_bits_combo = WidgetFactory.create_combo(
            [(str(bits), bits) for bits in (5, 6, 7, 8)],
            current_data=self.settings.data_bits,
        )
        framing_layout.addLayout(
            WidgetFactory.create_labeled_row("Data Bits:", self.data_bits_combo)
        )

        self.stop_bits_combo = WidgetFactory.create_combo(
            [("1", 1), ("2", 2)], current_data=self.settings.stop_bits
        )
        framing_layout.addLayout(
            WidgetFactory.create_labeled_row("Stop Bits:", self.stop_bits_combo)
        )

        self.parity_combo = WidgetFactory.create_combo(
            [(parity.name.title(), parity.value) for parity in Parity],
            current_data=self.settings.parity,
        )
        framing_layout.addLayout(
            WidgetFactory.create_labeled_row("Parity:", self.parity_combo)
        )
        framing_layout.addStretch()
        layout.addLayout(framing_layout)

        group.setLayout(layout)
        parent_layout.addWidget(group)

        self.refresh_ports()

    def _create_receive_area(self, parent_layout: QVBoxLayout):
        """Create the receive view and its display options."""
        group = QGroupBox("Receive")
        layout = QVBoxLayout()

        self.receive_view = QTextEdit()
        self.receive_view.setReadOnly(True)
        self.receive_view.setFont(FONTS.CONSOLE)
        self.receive_view.setMinimumHeight(SIZES.RECEIVE_MIN_HEIGHT)
        layout.addWidget(self.receive_view)

        options_layout = QHBoxLayout()
        self.show_hex_check = QCheckBox("Show Hex")
        self.show_time_check = QCheckBox("Show Time")
        self.auto_scroll_check = QCheckBox("Auto Scroll")
        self.auto_scroll_check.setChecked(True)
        options_layout.addWidget(self.show_hex_check)
        options_layout.addWidget(self.show_time_check)
        options_layout.addWidget(self.auto_scroll_check)
        options_layout.addStretch()

        self.count_label = QLabel(str(self.counter))
        options_layout.addWidget(self.count_label)

        self.clear_receive_btn = QPushButton("Clear")
        options_layout.addWidget(self.clear_receive_btn)
        layout.addLayout(options_layout)

        group.setLayout(layout)
        parent_layout.addWidget(group, stretch=1)

    def _create_send_area(self, parent_layout: QVBoxLayout):
        """Create the send box, format selection and auto-send controls."""
        group = QGroupBox("Send")
        layout = QVBoxLayout()

        self.send_input = QPlainTextEdit()
        self.send_input.setFont(FONTS.CONSOLE)
        self.send_input.setMaximumHeight(SIZES.SEND_MAX_HEIGHT)
        layout.addWidget(self.send_input)

        controls_layout = QHBoxLayout()
        self.text_radio = QRadioButton("Text")
        self.hex_radio = QRadioButton("Hex")
        self.text_radio.setChecked(True)
        self.send_format_group = QButtonGroup(self)
        self.send_format_group.addButton(self.text_radio)
        self.send_format_group.addButton(self.hex_radio)
        controls_layout.addWidget(self.text_radio)
        controls_layout.addWidget(self.hex_radio)

        self.auto_send_check = QCheckBox("Auto Send every")
        controls_layout.addWidget(self.auto_send_check)
        self.interval_spin = WidgetFactory.create_int_spinbox(
            10, 3_600_000, self.settings.auto_send_interval_ms, suffix=" ms", step=100
        )
        controls_layout.addWidget(self.interval_spin)
        controls_layout.addStretch()

        self.clear_send_btn = QPushButton("Clear")
        controls_layout.addWidget(self.clear_send_btn)

        self.send_btn = QPushButton("Send")
        self.send_btn.setMinimumWidth(SIZES.BUTTON_MIN_WIDTH)
        controls_layout.addWidget(self.send_btn)
        layout.addLayout(controls_layout)

        group.setLayout(layout)
        parent_layout.addWidget(group)

    def _connect_signals(self):
        """Connect internal signals to handlers."""
        self.refresh_btn.clicked.connect(self.refresh_ports)
        self.open_btn.clicked.connect(self.open_port)
        self.close_btn.clicked.connect(self.close_port)
        self.send_btn.clicked.connect(self.send_data)
        self.clear_send_btn.clicked.connect(self.send_input.clear)
        self.clear_receive_btn.clicked.connect(self._clear_receive)
        self.auto_send_check.toggled.connect(self._on_auto_send_toggled)
        self.interval_spin.valueChanged.connect(self._on_interval_changed)

    # === Ports ===

    def refresh_ports(self):
        """Refresh the list of available serial ports."""
        self.port_combo.clear()
        ports = list_ports()
        for device, description in ports:
            self.port_combo.addItem(f"{device} - {description}", device)
        if not ports:
            self.port_combo.addItem("No ports found", None)
            self.error_log.log(
                "No serial devices detected. Make sure the device is connected.",
                ERROR_SOURCE,
            )

    def current_config(self) -> SerialConfig:
        return SerialConfig(
            port=self.port_combo.currentData() or "",
            baud_rate=self.baud_combo.currentData(),
            data_bits=self.data_bits_combo.currentData(),
            stop_bits=self.stop_bits_combo.currentData(),
            parity=Parity(self.parity_combo.currentData()),
        )

    # === Connection Management ===

    def open_port(self):
        """Open the selected port on a background thread."""
        config = self.current_config()
        if not config.port:
            self.error_log.log("Select a serial port first", ERROR_SOURCE)
            QMessageBox.warning(self, "No Port Selected", "Please select a valid serial port.")
            return
        if self.is_connected():
            self.error_log.log("Serial port is already open", ERROR_SOURCE)
            return

        self._update_connection_state(ConnectionState.CONNECTING)

        self.serial_thread = SerialThread(config)
        self.serial_thread.data_received.connect(self._on_data_received)
        self.serial_thread.data_sent.connect(self._on_data_sent)
        self.serial_thread.connection_changed.connect(self._update_connection_state)
        self.serial_thread.error_occurred.connect(self._on_serial_error)
        self.serial_thread.start()

    def close_port(self):
        """Stop auto-send and close the serial connection."""
        self.auto_send_check.setChecked(False)
        if self.serial_thread:
            self.serial_thread.clear_queue()
            self.serial_thread.stop()
            self.serial_thread.wait(2000)  # Wait up to 2 seconds
            self.serial_thread = None
        self._update_connection_state(ConnectionState.DISCONNECTED)

    def is_connected(self) -> bool:
        return (
            self.serial_thread is not None
            and self.serial_thread.isRunning()
            and self.connection_state == ConnectionState.CONNECTED
        )

    def _update_connection_state(self, state: ConnectionState):
        """Update buttons and the status indicator."""
        self.connection_state = state
        busy = state in (ConnectionState.CONNECTED, ConnectionState.CONNECTING)
        self.open_btn.setEnabled(not busy)
        self.close_btn.setEnabled(busy)

        self.status_label.setStyleSheet(connection_stylesheet(state))
        self.status_label.setToolTip(state.value)
        self.connection_state_changed.emit(state)

    def _on_serial_error(self, message: str):
        self.auto_send_check.setChecked(False)
        self.error_log.log(message, ERROR_SOURCE)

    # === Sending ===

    def send_data(self):
        """Send the send-box contents as text or hex."""
        if not self.is_connected():
            self.auto_send_check.setChecked(False)
            self.error_log.log("Open a serial port first", ERROR_SOURCE)
            return

        text = self.send_input.toPlainText()
        if not text:
            self.error_log.log("Enter data to send", ERROR_SOURCE)
            return

        try:
            payload = encode_outgoing(text, self.hex_radio.isChecked())
        except ValueError as e:
            self.auto_send_check.setChecked(False)
            self.error_log.log(str(e), ERROR_SOURCE)
            return

        self.serial_thread.write(payload)

    def _on_data_sent(self, count: int):
        self.counter.add_tx(count)
        self.count_label.setText(str(self.counter))

    def _on_auto_send_toggled(self, checked: bool):
        if checked:
            self.auto_send_timer.start(self.interval_spin.value())
        else:
            self.auto_send_timer.stop()

    def _on_interval_changed(self, value: int):
        if self.auto_send_timer.isActive():
            self.auto_send_timer.start(value)

    # === Receiving ===

    def _on_data_received(self, data: bytes):
        """Append a received chunk to the receive view."""
        timestamp = datetime.now() if self.show_time_check.isChecked() else None
        line = format_received(data, self.show_hex_check.isChecked(), timestamp)

        self.receive_view.append(line)
        if self.auto_scroll_check.isChecked():
            scrollbar = self.receive_view.verticalScrollBar()
            if scrollbar:
                scrollbar.setValue(scrollbar.maximum())

        self.counter.add_rx(len(data))
        self.count_label.setText(str(self.counter))

    def _clear_receive(self):
        self.receive_view.clear()
        self.counter.reset()
        self.count_label.setText(str(self.counter))

    # === Public Methods ===

    def update_settings(self, settings: AppSettings):
        self.settings = settings

    def apply_to_settings(self, settings: AppSettings) -> AppSettings:
        """Settings updated with the panel's current framing values."""
        config = self.current_config()
        return replace(
            settings,
            baud_rate=config.baud_rate,
            data_bits=config.data_bits,
            stop_bits=config.stop_bits,
            parity=config.parity.value,
            auto_send_interval_ms=self.interval_spin.value(),
        )
