from __future__ import annotations

import unittest
from unittest import mock

import serial
from PyQt6.QtCore import QCoreApplication

import serial_handler
from models import ConnectionState, SerialConfig
from serial_handler import READ_CHUNK_SIZE, SerialThread


def setUpModule() -> None:
    global _app
    _app = QCoreApplication.instance() or QCoreApplication([])


class FakePort:
    """Stands in for serial.Serial; stops the thread once it runs idle."""

    def __init__(self, chunks=(), in_waiting_error=None, write_error=None):
        self.thread: SerialThread | None = None
        self.chunks = list(chunks)
        self.in_waiting_error = in_waiting_error
        self.write_error = write_error
        self.read_sizes: "list[int]" = []
        self.written: "list[bytes]" = []
        self.idle_polls = 0
        self.is_open = True

    @property
    def in_waiting(self) -> int:
        if self.in_waiting_error is not None:
            raise self.in_waiting_error
        if self.chunks:
            return len(self.chunks[0])
        self.idle_polls += 1
        if self.idle_polls > 1:
            self.thread.running = False
        return 0

    def read(self, size: int) -> bytes:
        self.read_sizes.append(size)
        chunk = self.chunks.pop(0)
        if len(chunk) > size:
            self.chunks.insert(0, chunk[size:])
        return chunk[:size]

    def write(self, payload: bytes) -> int:
        if self.write_error is not None:
            raise self.write_error
        self.written.append(payload)
        return len(payload)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self.is_open = False


class TestSerialThread(unittest.TestCase):
    def setUp(self) -> None:
        self.thread = SerialThread(SerialConfig(port="/dev/ttyFAKE"))
        self.received: "list[bytes]" = []
        self.sent: "list[int]" = []
        self.errors: "list[str]" = []
        self.states: "list[ConnectionState]" = []
        self.thread.data_received.connect(self.received.append)
        self.thread.data_sent.connect(self.sent.append)
        self.thread.error_occurred.connect(self.errors.append)
        self.thread.connection_changed.connect(self.states.append)

    def run_with(self, port: FakePort) -> None:
        port.thread = self.thread
        with mock.patch.object(serial_handler.serial, "Serial", return_value=port):
            self.thread.run()

    def test_chunks_are_forwarded_raw(self) -> None:
        port = FakePort(chunks=[b"hel", b"lo\xff"])
        self.run_with(port)

        self.assertEqual(self.received, [b"hel", b"lo\xff"])
        self.assertEqual(self.errors, [])
        self.assertEqual(
            self.states, [ConnectionState.CONNECTED, ConnectionState.DISCONNECTED]
        )
        self.assertFalse(port.is_open)

    def test_reads_are_capped_at_chunk_size(self) -> None:
        port = FakePort(chunks=[bytes(READ_CHUNK_SIZE + 10)])
        self.run_with(port)

        self.assertEqual(port.read_sizes, [READ_CHUNK_SIZE, 10])
        self.assertEqual([len(chunk) for chunk in self.received], [READ_CHUNK_SIZE, 10])

    def test_queued_writes_flush_in_order(self) -> None:
        self.thread.write(b"AT\r\n")
        self.thread.write(bytearray(b"\x01\x02"))
        port = FakePort()
        self.run_with(port)

        self.assertEqual(port.written, [b"AT\r\n", b"\x01\x02"])
        self.assertEqual(self.sent, [4, 2])
        self.assertEqual(len(self.thread.write_queue), 0)

    def test_open_failure_reports_error(self) -> None:
        failure = serial.SerialException("could not open port")
        with mock.patch.object(serial_handler.serial, "Serial", side_effect=failure):
            self.thread.run()

        self.assertEqual(len(self.errors), 1)
        self.assertIn("could not open port", self.errors[0])
        self.assertEqual(
            self.states, [ConnectionState.ERROR, ConnectionState.DISCONNECTED]
        )

    def test_unplugged_adapter_stops_thread(self) -> None:
        port = FakePort(in_waiting_error=OSError(5, "Input/output error"))
        self.run_with(port)

        self.assertEqual(len(self.errors), 1)
        self.assertTrue(self.errors[0].startswith("Read error:"))
        self.assertEqual(
            self.states,
            [
                ConnectionState.CONNECTED,
                ConnectionState.ERROR,
                ConnectionState.DISCONNECTED,
            ],
        )
        self.assertFalse(self.thread.running)
        self.assertFalse(port.is_open)

    def test_write_failure_stops_thread_and_drops_queue(self) -> None:
        self.thread.write(b"one")
        self.thread.write(b"two")
        port = FakePort(write_error=serial.SerialTimeoutException("Write timeout"))
        self.run_with(port)

        self.assertEqual(self.sent, [])
        self.assertEqual(len(self.errors), 1)
        self.assertTrue(self.errors[0].startswith("Write error:"))
        self.assertIn(ConnectionState.ERROR, self.states)
        self.assertEqual(self.states[-1], ConnectionState.DISCONNECTED)
        self.assertEqual(len(self.thread.write_queue), 0)
        self.assertFalse(self.thread.running)

    def test_stop_ends_loop(self) -> None:
        self.thread.stop()
        port = FakePort()
        port.thread = self.thread
        with mock.patch.object(serial_handler.serial, "Serial", return_value=port):
            self.thread.run()

        self.assertEqual(port.idle_polls, 0)
        self.assertEqual(
            self.states, [ConnectionState.CONNECTED, ConnectionState.DISCONNECTED]
        )


if __name__ == "__main__":
    unittest.main()
