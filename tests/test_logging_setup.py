"""Tests for JSON log formatting"""

import logging
import sys

import orjson
import pytest

from chat_decoder.logging_setup import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


def _record(message, *args, **extra):
    record = logging.LogRecord("chat_decoder.decoder", logging.WARNING, __file__, 1, message, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Each record becomes one JSON object"""

    def test_basic_fields(self):
        line = JSONFormatter().format(_record("Unexpected object type %r", "x"))
        data = orjson.loads(line)

        assert data["level"] == "WARNING"
        assert data["logger"] == "chat_decoder.decoder"
        assert data["message"] == "Unexpected object type 'x'"
        assert data["timestamp"].endswith("Z")
        assert "completion_id" not in data

    def test_decoder_extras(self):
        record = _record("decode failed", completion_id="chatcmpl-1", field_path="usage.total_tokens", error_kind="MissingField")
        data = orjson.loads(JSONFormatter().format(record))

        assert data["completion_id"] == "chatcmpl-1"
        assert data["field_path"] == "usage.total_tokens"
        assert data["error_kind"] == "MissingField"

    def test_exception_text(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record("failed")
            record.exc_info = sys.exc_info()

        data = orjson.loads(JSONFormatter().format(record))

        assert "ValueError: boom" in data["exception"]


class TestSetupLogging:
    """setup_logging installs a single JSON handler"""

    def test_replaces_root_handlers(self, restore_root_logger):
        restore_root_logger.addHandler(logging.NullHandler())

        setup_logging("debug")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
