import sys
from io import StringIO

import pytest
from loguru import logger

from backlogkit.log_config import configure_logging, loguru_http_logger
from backlogkit.types import HttpLogger


def test_configure_logging_default_level():
    """configure_logging() installs a single INFO handler."""
    logger.remove()

    configure_logging()

    assert len(logger._core.handlers) == 1
    handler = next(iter(logger._core.handlers.values()))
    assert handler._levelno == logger.level("INFO").no


@pytest.mark.parametrize("level", ["debug", "WARNING"])
def test_configure_logging_custom_level(level):
    logger.remove()
    configure_logging(level=level)
    handler = next(iter(logger._core.handlers.values()))
    assert handler._levelno == logger.level(level.upper()).no


def test_configure_logging_removes_existing_handlers():
    logger.remove()
    logger.add(lambda _: None, level="ERROR")
    assert len(logger._core.handlers) == 1

    configure_logging(level="INFO")

    assert len(logger._core.handlers) == 1
    handler = next(iter(logger._core.handlers.values()))
    assert handler._levelno == logger.level("INFO").no


def test_configure_logging_writes_to_custom_sink():
    stream = StringIO()
    configure_logging(level="INFO", sink=stream)

    logger.info("hello from the test")

    assert "hello from the test" in stream.getvalue()


@pytest.fixture
def captured():
    """Captures Loguru messages at DEBUG and above."""
    logger.remove()
    messages: list[str] = []
    logger.add(lambda message: messages.append(message), level="DEBUG", format="{level} {message}")
    return messages


def test_loguru_http_logger_has_all_callbacks():
    sink = loguru_http_logger()
    assert isinstance(sink, HttpLogger)
    assert sink.request and sink.response and sink.error


def test_loguru_http_logger_request_and_response(captured):
    sink = loguru_http_logger()

    sink.request("POST", "https://h/api/v2/issues?apiKey=****", {}, {"summary": "x"})
    sink.response("POST", "https://h/api/v2/issues?apiKey=****", 201, {}, {}, 0.25)

    assert any("--> POST https://h/api/v2/issues?apiKey=****" in m for m in captured)
    assert any("Request Body: {'summary': 'x'}" in m for m in captured)
    assert any("<-- 201 POST" in m and "(0.250s)" in m for m in captured)


def test_loguru_http_logger_uses_requested_level(captured):
    sink = loguru_http_logger(level="INFO")
    sink.request("GET", "https://h/api/v2/space", {}, None)
    assert captured[0].startswith("INFO --> GET")
    assert len(captured) == 1


def test_loguru_http_logger_errors_are_logged_at_error_level(captured):
    sink = loguru_http_logger(level="DEBUG")
    sink.error("GET", "https://h/api/v2/space", {"message": "boom"}, 0.1)
    assert captured[0].startswith("ERROR <-- ERROR GET")
    assert "boom" in captured[0]


@pytest.fixture(autouse=True)
def reset_logger_after_test():
    """Resets Loguru to a default state after each test in this module."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="INFO")
