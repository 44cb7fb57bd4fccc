from __future__ import annotations

import unittest

from loguru import logger

from repoview import log


class PerfLogTests(unittest.TestCase):
    def setUp(self) -> None:
        self._previous = log.perf_enabled()
        self.messages: list[str] = []
        self._sink_id = logger.add(lambda message: self.messages.append(str(message)), format="{message}", level="DEBUG")

    def tearDown(self) -> None:
        logger.remove(self._sink_id)
        log.set_perf_enabled(self._previous)

    def test_perf_lines_are_dropped_when_disabled(self) -> None:
        log.set_perf_enabled(False)
        log.perf_log("diff took=1ms")

        self.assertFalse(any("[perf]" in message for message in self.messages))

    def test_perf_lines_are_emitted_when_enabled(self) -> None:
        log.set_perf_enabled(True)
        log.perf_log("diff took=1ms")

        self.assertTrue(any("[perf] diff took=1ms" in message for message in self.messages))


if __name__ == "__main__":
    unittest.main()
