# backlogkit/log_config.py
"""Logging configuration for the backlogkit library using Loguru.

This module provides a centralized function to configure the Loguru logger
with a standardized format, level, and sink, and a factory for an
`HttpLogger` sink that forwards request/response/error events to Loguru.
"""

import sys
from typing import Any

from loguru import logger

from .types import HttpLogger


def configure_logging(level: str = "INFO", sink=sys.stderr):
    """
    Configures Loguru logger.

    Removes default handlers and adds a new one with the specified level and sink.

    Args:
        level: The minimum logging level (e.g., "DEBUG", "INFO", "WARNING").
        sink: The output sink (e.g., sys.stderr, "file.log").
    """
    logger.remove()
    logger.add(
        sink,
        level=level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        colorize=sink is sys.stderr,
        backtrace=True,
        diagnose=True,
    )
    logger.info(
        f"Loguru logger configured with level={level.upper()} writing to {sink}"
    )


def loguru_http_logger(level: str = "DEBUG") -> HttpLogger:
    """Builds an HttpLogger that writes every event to Loguru.

    Requests and responses are logged at `level`, errors always at ERROR.

    Args:
        level: The Loguru level used for request and response events.

    Returns:
        HttpLogger: A sink suitable for `BacklogConfig.logger`.
    """

    def on_request(
        method: str, url: str, headers: dict[str, str], body: Any | None
    ) -> None:
        logger.log(level, f"--> {method} {url}")
        if body is not None:
            logger.log(level, f"Request Body: {body}")

    def on_response(
        method: str,
        url: str,
        status: int,
        headers: dict[str, str],
        body: Any,
        duration: float,
    ) -> None:
        logger.log(level, f"<-- {status} {method} {url} ({duration:.3f}s)")

    def on_error(method: str, url: str, error: Any, duration: float) -> None:
        logger.error(f"<-- ERROR {method} {url} ({duration:.3f}s): {error}")

    return HttpLogger(request=on_request, response=on_response, error=on_error)
