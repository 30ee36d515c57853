"""Tests for structured JSON logging."""

import json
import logging
import sys
import unittest

from utils.logging import JSONFormatter, setup_structured_logging


class TestJSONFormatter(unittest.TestCase):

    def _record(self, msg="User signed up", extra=None, exc_info=None):
        record = logging.LogRecord(
            name="services.authentication_service",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg=msg,
            args=None,
            exc_info=exc_info,
        )
        for key, value in (extra or {}).items():
            setattr(record, key, value)
        return record

    def test_formats_core_fields(self):
        data = json.loads(JSONFormatter().format(self._record()))

        self.assertEqual(data["level"], "INFO")
        self.assertEqual(data["logger"], "services.authentication_service")
        self.assertEqual(data["message"], "User signed up")
        self.assertTrue(data["timestamp"].endswith("Z"))

    def test_extra_fields_become_top_level_keys(self):
        data = json.loads(JSONFormatter().format(self._record(extra={"email": "a@x.com"})))

        self.assertEqual(data["email"], "a@x.com")
        self.assertNotIn("pathname", data)
        self.assertNotIn("lineno", data)

    def test_non_serializable_extra_is_stringified(self):
        data = json.loads(JSONFormatter().format(self._record(extra={"obj": object()})))

        self.assertIsInstance(data["obj"], str)

    def test_exception_is_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = self._record(exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        self.assertIn("RuntimeError: boom", data["exception"])


class TestSetupStructuredLogging(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        self._saved = (root.level, list(root.handlers))

    def tearDown(self):
        root = logging.getLogger()
        root.setLevel(self._saved[0])
        root.handlers = self._saved[1]

    def test_installs_json_handler_with_level(self):
        setup_structured_logging(level="debug")

        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JSONFormatter)
        self.assertEqual(logging.getLogger("uvicorn.access").level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
