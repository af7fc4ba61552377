import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

from rich.logging import RichHandler

from regroup.utils.logging_utils import (
    PACKAGE_LOGGER,
    TRACE_LEVEL,
    JSONFormatter,
    configure_logging,
    get_log_format,
    resolve_level,
)


class TestJSONFormatter(unittest.TestCase):
    def test_format_structure(self):
        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="regroup.binder",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg="Bound group %r",
            args=("num",),
            exc_info=None,
        )
        record.extra = {"group": "num"}

        data = json.loads(formatter.format(record))

        self.assertEqual(data["message"], "Bound group 'num'")
        self.assertEqual(data["level"], "INFO")
        self.assertEqual(data["logger"], "regroup.binder")
        self.assertEqual(data["group"], "num")
        self.assertIn("timestamp", data)

    def test_exception_info(self):
        formatter = JSONFormatter()
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord(
                name="regroup",
                level=logging.ERROR,
                pathname=__file__,
                lineno=1,
                msg="failed",
                args=(),
                exc_info=sys.exc_info(),
            )
        data = json.loads(formatter.format(record))
        self.assertIn("ValueError: boom", data["exception"])


class TestConfigureLogging(unittest.TestCase):
    def tearDown(self):
        logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    def test_get_log_format(self):
        configure_logging(log_format="json")
        self.assertEqual(get_log_format(), "json")

        configure_logging(log_format="human")
        self.assertEqual(get_log_format(), "human")

    def test_human_format_uses_rich(self):
        configure_logging("debug")
        logger = logging.getLogger(PACKAGE_LOGGER)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], RichHandler)

    def test_reconfiguring_replaces_handlers(self):
        configure_logging("info", log_format="json")
        configure_logging("trace", log_format="json")
        logger = logging.getLogger(PACKAGE_LOGGER)
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0].formatter, JSONFormatter)
        self.assertEqual(logger.level, TRACE_LEVEL)

    def test_log_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "regroup.log"
            configure_logging("info", log_format="json", log_file=str(path))
            logging.getLogger("regroup.engine").info("Compiled %r", "x")
            for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
                handler.flush()
            line = path.read_text().strip().splitlines()[-1]
            self.assertEqual(json.loads(line)["message"], "Compiled 'x'")
            self.tearDown()


class TestLevels(unittest.TestCase):
    def test_resolve_level(self):
        self.assertEqual(resolve_level("trace"), TRACE_LEVEL)
        self.assertEqual(resolve_level("WARNING"), logging.WARNING)
        self.assertEqual(resolve_level("unknown"), logging.INFO)
        self.assertEqual(resolve_level(logging.ERROR), logging.ERROR)

    def test_trace_method(self):
        logger = logging.getLogger("regroup.test")
        self.assertTrue(callable(getattr(logger, "trace")))
