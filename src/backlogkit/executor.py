"""HTTP request execution for the Backlog API.

`request` performs one logical JSON call: it builds the URL and headers once,
sends up to `max_attempts` attempts through the transport, classifies every
failure and retries the transient ones with backoff. `download` follows the
same URL, header and error path in a single attempt and returns raw bytes.

Callers only ever observe the decoded result or one normalized error; the
failures of intermediate attempts are reported through the log only.
"""

import asyncio
import re
import time
from typing import Any, NoReturn
from urllib.parse import unquote

import httpx
import tenacity
from tenacity import AsyncRetrying, stop_after_attempt

from .builders import build_headers, build_url, mask_api_key
from .config import BacklogConfig, resolve_retry_policy
from .exceptions import (
    APIError,
    BacklogError,
    DecodeError,
    NetworkError,
    TimeoutError,
    error_class_for_status,
)
from .log_config import logger
from .models import DownloadResult, ErrorBody
from .retry import AttemptFailure, log_before_retry, retry_if_retryable, wait_backoff
from .transport import transport_scope
from .types import QueryParams, RequestData, Sleep, Transport

RETRIES_EXHAUSTED_MESSAGE = "Request failed after all retry attempts"

_FILENAME_PATTERN = re.compile(r'filename\s*=\s*(?:"([^"]*)"|([^;]+))', re.IGNORECASE)
_FILENAME_EXTENDED_PATTERN = re.compile(
    r"filename\*\s*=\s*UTF-8''([^;]+)", re.IGNORECASE
)


def extract_file_name(content_disposition: str | None) -> str | None:
    """Extracts the filename announced by a Content-Disposition header.

    The plain `filename=` parameter (quoted or not) wins; otherwise the RFC
    5987 form `filename*=UTF-8''...` is percent-decoded.

    Args:
        content_disposition: The header value, if the response had one.

    Returns:
        str | None: The filename, or None when the header names none.
    """
    if not content_disposition:
        return None
    match = _FILENAME_PATTERN.search(content_disposition)
    if match:
        file_name = (match.group(1) or match.group(2) or "").strip()
        if file_name:
            return file_name
    match = _FILENAME_EXTENDED_PATTERN.search(content_disposition)
    if match:
        file_name = unquote(match.group(1).strip(), encoding="utf-8")
        if file_name:
            return file_name
    return None


def _decode_error_payload(response: httpx.Response) -> Any:
    """Decodes an error body, synthesizing one when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return {
            "message": f"HTTP {response.status_code}: {response.reason_phrase}",
            "code": response.status_code,
        }


def _error_from_response(response: httpx.Response) -> tuple[APIError, Any]:
    """Builds the normalized error for a non-2xx response.

    Returns:
        tuple[APIError, Any]: The error and the payload it was built from.
    """
    payload = _decode_error_payload(response)
    body = ErrorBody.from_payload(payload)
    error_cls = error_class_for_status(response.status_code)
    error = error_cls(body.resolved_message(), code=body.code, errors=body.errors)
    return error, payload


async def _send_attempt(
    send: Transport, request_data: RequestData, timeout: float | None
) -> tuple[httpx.Response, float]:
    """Sends one attempt and classifies anything but a 2xx response.

    Raises:
        AttemptFailure: For timeouts, other httpx request errors and error
            responses.
    """
    started = time.perf_counter()
    try:
        async with asyncio.timeout(timeout):
            response = await send(request_data.build_request())
            await response.aread()
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        duration = time.perf_counter() - started
        message = (
            f"Request timed out after {timeout}s" if timeout else "Request timed out"
        )
        raise AttemptFailure(
            TimeoutError(message), duration=duration, timed_out=True
        ) from e
    except httpx.TransportError as e:
        duration = time.perf_counter() - started
        raise AttemptFailure(
            NetworkError(f"Network error: {type(e).__name__}: {e}"),
            duration=duration,
            transport_error=True,
        ) from e
    except httpx.RequestError as e:
        # Decoding errors, redirect loops and the like: terminal.
        duration = time.perf_counter() - started
        raise AttemptFailure(
            NetworkError(f"Request error: {type(e).__name__}: {e}"),
            duration=duration,
        ) from e

    duration = time.perf_counter() - started
    logger.debug(f"Received response: {response.status_code} in {duration:.3f}s")

    if not response.is_success:
        error, payload = _error_from_response(response)
        raise AttemptFailure(
            error,
            duration=duration,
            status_code=response.status_code,
            log_payload=payload,
        )
    return response, duration


async def _attempt_json(
    send: Transport, request_data: RequestData, timeout: float | None
) -> tuple[httpx.Response, Any, float]:
    """Runs one attempt and decodes its JSON body."""
    response, duration = await _send_attempt(send, request_data, timeout)
    try:
        data = response.json()
    except ValueError as e:
        raise AttemptFailure(
            DecodeError(
                f"Response body is not valid JSON (status {response.status_code})"
            ),
            duration=duration,
        ) from e
    return response, data, duration


def _log_request(config: BacklogConfig, request_data: RequestData, url: str) -> None:
    logger.debug(f"Sending request: {request_data.method} {url}")
    if config.logger and config.logger.request:
        config.logger.request(
            request_data.method, url, dict(request_data.headers), request_data.body
        )


def _log_response(
    config: BacklogConfig,
    method: str,
    url: str,
    response: httpx.Response,
    body: Any,
    duration: float,
) -> None:
    if config.logger and config.logger.response:
        config.logger.response(
            method, url, response.status_code, dict(response.headers), body, duration
        )


def _fail(
    config: BacklogConfig, method: str, url: str, failure: AttemptFailure
) -> NoReturn:
    """Reports a terminal failure and raises its normalized error."""
    logger.error(f"{method} {url} failed: {type(failure.error).__name__} - {failure.error}")
    if config.logger and config.logger.error:
        config.logger.error(method, url, failure.log_payload, failure.duration)
    raise failure.error from failure.__cause__


async def request(
    config: BacklogConfig,
    path: str,
    *,
    method: str = "GET",
    params: QueryParams | None = None,
    body: Any | None = None,
    transport: Transport | None = None,
    sleep: Sleep = asyncio.sleep,
) -> Any:
    """Performs one logical API call and returns its decoded JSON body.

    Args:
        config: The connection configuration.
        path: Path relative to `/api/v2/`.
        method: HTTP method (GET, POST, PUT, PATCH, DELETE).
        params: Query parameters.
        body: JSON body; only sent for non-GET requests.
        transport: Sends a single request. A short-lived httpx client is
            used when omitted.
        sleep: Waits between attempts.

    Returns:
        Any: The decoded JSON body of the successful response.

    Raises:
        APIError: For error responses (or a status-specific subclass).
        TimeoutError: If an attempt exceeded `config.timeout`.
        NetworkError: If the last attempt failed at the transport level or
            httpx rejected the exchange (decoding errors, redirect loops).
        DecodeError: If the successful response body is not JSON.
        BacklogError: If no attempt produced an outcome.
    """
    method = method.upper()
    policy = resolve_retry_policy(config)
    url = build_url(config, path, params)
    masked_url = mask_api_key(url)
    request_data = RequestData(
        method=method,
        url=url,
        headers=build_headers(config),
        body=body if body and method != "GET" else None,
    )
    _log_request(config, request_data, masked_url)

    retrying = AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_backoff(policy),
        retry=retry_if_retryable(policy),
        sleep=sleep,
        before_sleep=log_before_retry(method, masked_url),
        reraise=True,
    )

    async with transport_scope(transport) as send:
        try:
            response, data, duration = await retrying(
                _attempt_json, send, request_data, config.timeout
            )
        except AttemptFailure as failure:
            _fail(config, method, masked_url, failure)
        except tenacity.RetryError as e:
            raise BacklogError(RETRIES_EXHAUSTED_MESSAGE) from e

    _log_response(config, method, masked_url, response, data, duration)
    return data


async def download(
    config: BacklogConfig, path: str, *, transport: Transport | None = None
) -> DownloadResult:
    """Downloads a file in a single attempt.

    Args:
        config: The connection configuration.
        path: Path relative to `/api/v2/`.
        transport: Sends the request. A short-lived httpx client is used
            when omitted.

    Returns:
        DownloadResult: The raw body and the filename from Content-Disposition.

    Raises:
        APIError: For error responses (or a status-specific subclass).
        TimeoutError: If the attempt exceeded `config.timeout`.
        NetworkError: If the attempt failed at the transport level.
    """
    url = build_url(config, path)
    masked_url = mask_api_key(url)
    request_data = RequestData(method="GET", url=url, headers=build_headers(config))
    _log_request(config, request_data, masked_url)

    async with transport_scope(transport) as send:
        try:
            response, duration = await _send_attempt(
                send, request_data, config.timeout
            )
        except AttemptFailure as failure:
            _fail(config, "GET", masked_url, failure)

    result = DownloadResult(
        body=response.content,
        file_name=extract_file_name(response.headers.get("Content-Disposition")),
    )
    _log_response(
        config,
        "GET",
        masked_url,
        response,
        {"fileName": result.file_name, "size": len(result.body)},
        duration,
    )
    return result
