"""URL and header construction for Backlog API requests.

All functions here are pure: they derive a request URL and header set from a
`BacklogConfig` and a logical path without touching the network.
"""

import re
from collections.abc import Sequence
from urllib.parse import urlencode

from .config import BacklogConfig
from .types import QueryParams, QueryScalar

API_PREFIX = "api/v2"
API_KEY_PARAM = "apiKey"
MASKED_VALUE = "****"

_API_KEY_PATTERN = re.compile(rf"([?&]{API_KEY_PARAM}=)[^&#]*")


def _format_scalar(value: QueryScalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))  # 1.0 -> "1"
    return str(value)


def build_query_string(params: QueryParams) -> str:
    """Serializes query parameters in the form the Backlog API expects.

    `None` values are skipped, also inside sequences. Sequences expand to
    repeated `key[]` pairs in their original order, and scalars appear once
    as `key=value`. Integral floats are written without a fraction.

    Args:
        params: Mapping of parameter names to values.

    Returns:
        str: The encoded query string, empty if nothing remains.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, Sequence) and not isinstance(value, str):
            pairs.extend(
                (f"{key}[]", _format_scalar(item)) for item in value if item is not None
            )
        else:
            pairs.append((key, _format_scalar(value)))
    return urlencode(pairs)


def build_url(
    config: BacklogConfig, path: str, params: QueryParams | None = None
) -> str:
    """Builds the fully-qualified URL for an API path.

    Hosts starting with `localhost:` are reached over plain http, everything
    else over https. The API key, when configured, travels as the `apiKey`
    query parameter.

    Args:
        config: The connection configuration.
        path: Path relative to `/api/v2/`, e.g. "issues/TEST-1".
        params: Optional query parameters.

    Returns:
        str: The request URL including its query string.
    """
    scheme = "http" if config.host.startswith("localhost:") else "https"
    base_url = f"{scheme}://{config.host}/{API_PREFIX}/{path}"

    query_params: dict = dict(params or {})
    if config.api_key:
        query_params.pop(API_KEY_PARAM, None)  # always last
        query_params[API_KEY_PARAM] = config.api_key

    query_string = build_query_string(query_params)
    return f"{base_url}?{query_string}" if query_string else base_url


def build_headers(config: BacklogConfig) -> dict[str, str]:
    """Builds the headers sent with every request.

    The API key never appears here; only an OAuth2 access token is sent as
    a Bearer `Authorization` header.
    """
    headers = {"Content-Type": "application/json"}
    if config.access_token:
        headers["Authorization"] = f"Bearer {config.access_token}"
    return headers


def mask_api_key(url: str) -> str:
    """Replaces the value of the `apiKey` query parameter with a placeholder."""
    return _API_KEY_PATTERN.sub(rf"\g<1>{MASKED_VALUE}", url)


def strip_query(url: str) -> str:
    """Returns the URL without its query string."""
    return url.split("?", 1)[0]
