"""Serial communication handler for the serial terminal tool."""

from collections import deque
from typing import Optional

import serial
from PyQt6.QtCore import QMutex, QMutexLocker, QThread, pyqtSignal

from models import ConnectionState, SerialConfig
from serial_utils import serial_kwargs

READ_CHUNK_SIZE = 4096  # bytes per read call

# AIDEV-NOTE: On posix an unplugged adapter surfaces as a bare OSError from
# the in_waiting ioctl rather than a SerialException
PORT_ERRORS = (serial.SerialException, OSError)


class SerialThread(QThread):
    """Background thread for serial communication to avoid blocking GUI."""

    data_received = pyqtSignal(bytes)
    data_sent = pyqtSignal(int)  # byte count
    connection_changed = pyqtSignal(ConnectionState)
    error_occurred = pyqtSignal(str)

    def __init__(self, config: SerialConfig):
        super().__init__()
        self.config = config
        self.serial_port: Optional[serial.Serial] = None

        self.running = True

        # Outgoing payloads, written in order by the reader loop
        self.write_queue = deque()
        self.queue_lock = QMutex()

    # -------------------------------------------------------------

    def run(self):
        try:
            self.serial_port = serial.Serial(**serial_kwargs(self.config))
            self.connection_changed.emit(ConnectionState.CONNECTED)

            while self.running:
                self._read_incoming()
                if not self.running:
                    break
                self._write_pending()
                self._adaptive_sleep()

        except PORT_ERRORS as e:
            self._fail(f"Serial error: {e}")

        finally:
            if self.serial_port and self.serial_port.is_open:
                self.serial_port.close()

            self.connection_changed.emit(ConnectionState.DISCONNECTED)

    # -------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------

    def _read_incoming(self):
        """Forward any incoming bytes as a raw chunk."""
        if not self.serial_port:
            return

        try:
            waiting = self.serial_port.in_waiting
            if not waiting:
                return
            # AIDEV-NOTE: No framing; chunks are emitted exactly as the driver
            # returns them and the terminal decides how to display them
            data = self.serial_port.read(min(waiting, READ_CHUNK_SIZE))
        except PORT_ERRORS as e:
            self._fail(f"Read error: {e}")
            return

        if data:
            self.data_received.emit(bytes(data))

    # -------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------

    def _write_pending(self):
        """Flush queued payloads to the port in order.

        A failed write stops the thread; payloads still queued are discarded
        along with the connection.
        """
        if not self.write_queue:
            return

        with QMutexLocker(self.queue_lock):
            payloads = list(self.write_queue)
            self.write_queue.clear()

        for payload in payloads:
            try:
                self.serial_port.write(payload)
                self.serial_port.flush()
            except PORT_ERRORS as e:
                self.clear_queue()
                self._fail(f"Write error: {e}")
                return
            self.data_sent.emit(len(payload))

    def _fail(self, message: str):
        """Report a port error and leave the run loop."""
        self.running = False
        self.error_occurred.emit(message)
        self.connection_changed.emit(ConnectionState.ERROR)

    # -------------------------------------------------------------
    # CPU-friendly loop pacing
    # -------------------------------------------------------------

    def _adaptive_sleep(self):
        """Poll quickly while there is work, relax when idle."""
        if self.write_queue:
            self.msleep(1)
        else:
            self.msleep(10)

    # -------------------------------------------------------------
    # API methods
    # -------------------------------------------------------------

    def write(self, data: bytes):
        """Thread-safe enqueue."""
        with QMutexLocker(self.queue_lock):
            self.write_queue.append(bytes(data))

    def clear_queue(self):
        with QMutexLocker(self.queue_lock):
            self.write_queue.clear()

    def stop(self):
        self.running = False
