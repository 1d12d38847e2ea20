"""
Test suite for lib/logging_utils.py
"""

import logging
import os
import sys
import tempfile
import unittest
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))
from lib.logging_utils import SDK_LOGGERS, configureLogger, getLogLevelByStr, initLogging


class TestLoggingUtils(unittest.TestCase):

    def setUp(self):
        self.tempDir = tempfile.TemporaryDirectory()
        self.rootLogger = logging.getLogger()
        self.savedRootLevel = self.rootLogger.level
        self.savedRootHandlers = self.rootLogger.handlers[:]
        self.savedSdkLevels = {name: logging.getLogger(name).level for name in SDK_LOGGERS}

    def tearDown(self):
        for handler in self.rootLogger.handlers[:]:
            self.rootLogger.removeHandler(handler)
            if handler not in self.savedRootHandlers:
                handler.close()
        for handler in self.savedRootHandlers:
            self.rootLogger.addHandler(handler)
        self.rootLogger.setLevel(self.savedRootLevel)
        for name, level in self.savedSdkLevels.items():
            logging.getLogger(name).setLevel(level)
        testLogger = logging.getLogger("test.storage.logger")
        for handler in testLogger.handlers[:]:
            testLogger.removeHandler(handler)
            handler.close()
        self.tempDir.cleanup()

    def test_get_log_level_by_str(self):
        """Test level name lookup"""
        self.assertEqual(getLogLevelByStr("debug"), logging.DEBUG)
        self.assertEqual(getLogLevelByStr("WARNING"), logging.WARNING)
        self.assertIsNone(getLogLevelByStr("loud"))
        self.assertEqual(getLogLevelByStr("loud", logging.INFO), logging.INFO)
        # Non-level attributes of logging module are rejected
        self.assertIsNone(getLogLevelByStr("getLogger"))

    def test_configure_logger_console_and_file(self):
        """Test console and rotating file handlers with own levels"""
        logFile = Path(self.tempDir.name) / "logs" / "storage.log"
        testLogger = logging.getLogger("test.storage.logger")

        configureLogger(
            testLogger,
            {
                "level": "DEBUG",
                "console": True,
                "console-level": "ERROR",
                "file": str(logFile),
                "file-level": "INFO",
                "rotate": True,
                "propagate": False,
            },
        )

        self.assertEqual(testLogger.level, logging.DEBUG)
        self.assertFalse(testLogger.propagate)
        self.assertEqual(len(testLogger.handlers), 2)
        consoleHandler, fileHandler = testLogger.handlers
        self.assertEqual(consoleHandler.level, logging.ERROR)
        self.assertIsInstance(fileHandler, TimedRotatingFileHandler)
        self.assertEqual(fileHandler.level, logging.INFO)
        self.assertTrue(logFile.parent.is_dir())

    def test_configure_logger_replaces_handlers(self):
        """Test that reconfiguring does not duplicate handlers"""
        testLogger = logging.getLogger("test.storage.logger")

        configureLogger(testLogger, {"console": True})
        configureLogger(testLogger, {"console": True})

        self.assertEqual(len(testLogger.handlers), 1)

    def test_init_logging_quiets_sdk_loggers(self):
        """Test that SDK loggers are raised to WARNING on verbose root"""
        initLogging({"level": "DEBUG"})

        self.assertEqual(self.rootLogger.level, logging.DEBUG)
        for name in SDK_LOGGERS:
            self.assertEqual(logging.getLogger(name).level, logging.WARNING)

    def test_init_logging_configures_named_loggers(self):
        """Test per-logger sections"""
        initLogging({"level": "INFO", "logger": {"test.storage.logger": {"level": "ERROR"}}})

        self.assertEqual(logging.getLogger("test.storage.logger").level, logging.ERROR)


if __name__ == "__main__":
    unittest.main()
