"""Default HTTP transport backed by httpx."""

import ssl
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import certifi
import httpx

from .log_config import logger
from .types import Transport


def create_http_client() -> httpx.AsyncClient:
    """Create a default httpx.AsyncClient.

    Timeouts are left to the request engine, which applies
    `BacklogConfig.timeout` to each attempt.

    Returns:
        httpx.AsyncClient: HTTP client using the certifi CA bundle.
    """
    try:
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        verify_ssl: ssl.SSLContext | bool = ssl_context
        logger.debug("Using certifi SSL context.")
    except (OSError, ssl.SSLError):
        verify_ssl = True
        logger.warning(
            "certifi bundle failed to load. Using default SSL verification."
        )

    return httpx.AsyncClient(timeout=httpx.Timeout(None), verify=verify_ssl)


@asynccontextmanager
async def transport_scope(transport: Transport | None) -> AsyncIterator[Transport]:
    """Yields the given transport, or a short-lived client's `send` if none was given."""
    if transport is not None:
        yield transport
        return
    async with create_http_client() as client:
        yield client.send
