"""
Unit test file.
"""

import logging
import sys
import tempfile
import unittest
from pathlib import Path

from oss_uploader import log


class LogTester(unittest.TestCase):
    """Tests for the logging entry points."""

    def setUp(self) -> None:
        self._handlers = logging.root.handlers[:]
        self._level = logging.root.level
        self._initialised = log._INITIALISED
        logging.root.handlers = []
        log._INITIALISED = False

    def tearDown(self) -> None:
        for handler in logging.root.handlers:
            handler.close()
        logging.root.handlers = self._handlers
        logging.root.setLevel(self._level)
        log._INITIALISED = self._initialised

    def test_default_logging_installs_stdout_handler(self) -> None:
        log.setup_default_logging()
        self.assertEqual(len(logging.root.handlers), 1)
        handler = logging.root.handlers[0]
        self.assertIsInstance(handler, logging.StreamHandler)
        self.assertIs(handler.stream, sys.stdout)  # type: ignore[attr-defined]
        self.assertEqual(logging.root.level, logging.INFO)

    def test_default_logging_keeps_existing_handlers(self) -> None:
        existing = logging.NullHandler()
        logging.root.addHandler(existing)
        log.setup_default_logging()
        self.assertEqual(logging.root.handlers, [existing])

    def test_default_logging_runs_once(self) -> None:
        log.setup_default_logging()
        logging.root.handlers = []
        log.setup_default_logging()
        self.assertEqual(logging.root.handlers, [])

    def test_configure_logging_replaces_handlers(self) -> None:
        logging.root.addHandler(logging.NullHandler())
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "oss.log"
            log.configure_logging(logging.DEBUG, log_file=log_file)
            self.assertEqual(logging.root.level, logging.DEBUG)
            kinds = [type(h) for h in logging.root.handlers]
            self.assertEqual(kinds, [logging.StreamHandler, logging.FileHandler])
            logging.getLogger("oss_uploader.test").debug("to the file")
            for handler in logging.root.handlers:
                handler.flush()
            self.assertIn("to the file", log_file.read_text())
            for handler in logging.root.handlers:
                handler.close()
            logging.root.handlers = []


if __name__ == "__main__":
    unittest.main()
