# backlogkit/types.py
"""Core type definitions and data structures for backlogkit.

This module defines the types shared by the request engine: the query
parameter value kinds, the injected transport and sleep capabilities, the
per-call request descriptor and the optional HTTP logging sink.
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

QueryScalar = str | int | float | bool
QueryValue = QueryScalar | Sequence[QueryScalar | None] | None
QueryParams = Mapping[str, QueryValue]
"""Query parameters. `None` values (also inside sequences) are dropped, sequences become repeated `key[]` pairs."""

Transport = Callable[[httpx.Request], Awaitable[httpx.Response]]
"""Sends one request and resolves to its response, e.g. `httpx.AsyncClient.send`."""

Sleep = Callable[[float], Awaitable[None]]
"""Suspends the caller for the given number of seconds, e.g. `asyncio.sleep`."""


class RequestData(BaseModel):
    """Encapsulates the data of one logical call, reused by every attempt."""

    method: str = "GET"
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any | None = None

    def build_request(self) -> httpx.Request:
        """Builds a fresh httpx.Request object from the stored data."""
        return httpx.Request(
            method=self.method,
            url=self.url,
            json=self.body,
            headers=self.headers,
        )


RequestHook = Callable[[str, str, dict[str, str], Any | None], None]
"""Observes a request before it is sent.

Args:
    method (str): The HTTP method of the request (e.g., "GET", "POST").
    url (str): The full URL with the API key masked.
    headers (dict[str, str]): The request headers.
    body (Any | None): The JSON body for non-GET requests, otherwise `None`.
"""

ResponseHook = Callable[[str, str, int, dict[str, str], Any, float], None]
"""Observes a successful response.

Args:
    method (str): The HTTP method of the request.
    url (str): The full URL with the API key masked.
    status (int): The HTTP status code.
    headers (dict[str, str]): The response headers.
    body (Any): The decoded JSON body, or a summary for downloads.
    duration (float): Seconds elapsed for the attempt.
"""

ErrorHook = Callable[[str, str, Any, float], None]
"""Observes the terminal failure of a logical call.

Args:
    method (str): The HTTP method of the request.
    url (str): The full URL with the API key masked.
    error (Any): The decoded error body, or a descriptive string.
    duration (float): Seconds elapsed for the failing attempt.
"""


class HttpLogger(BaseModel):
    """Optional sink for request, response and error events.

    Every callback is individually optional; missing ones are simply not
    called. Callbacks are expected to be synchronous and not to raise.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    request: RequestHook | None = None
    response: ResponseHook | None = None
    error: ErrorHook | None = None
