from __future__ import annotations

import unittest
from datetime import datetime

from error_log import ErrorLog


class TestErrorLog(unittest.TestCase):
    def setUp(self) -> None:
        self.log = ErrorLog(clock=lambda: datetime(2024, 5, 6, 12, 0, 1, 250000))

    def test_entries_are_newest_first(self) -> None:
        self.log.log("first", "LCD")
        self.log.log("second", "Serial")
        self.assertEqual([e.message for e in self.log.entries], ["second", "first"])
        self.assertEqual(len(self.log), 2)

    def test_default_source(self) -> None:
        entry = self.log.log("oops")
        self.assertEqual(entry.source, "System")

    def test_format_entry(self) -> None:
        entry = self.log.log("Port busy", "Serial")
        self.assertEqual(
            ErrorLog.format_entry(entry), "[12:00:01.250] Port busy (Source: Serial)"
        )
        self.assertEqual(
            ErrorLog.format_entry(entry, source_label=None), "[12:00:01.250] Port busy"
        )

    def test_listeners(self) -> None:
        seen = []
        self.log.subscribe(seen.append)
        self.log.log("one")
        self.log.unsubscribe(seen.append)
        self.log.log("two")
        self.assertEqual([e.message for e in seen], ["one"])

    def test_clear(self) -> None:
        self.log.log("one")
        self.log.clear()
        self.assertEqual(len(self.log), 0)
        self.assertEqual(self.log.entries, [])


if __name__ == "__main__":
    unittest.main()
