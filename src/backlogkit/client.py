"""Backlog API client.

This module provides the BacklogClient class, which binds a `BacklogConfig`
and a pooled httpx.AsyncClient to the request engine and groups the endpoint
methods into resource namespaces (space, issues, documents, projects, users).
"""

import asyncio
from typing import Any, Self

import httpx

from . import executor
from .config import BacklogConfig, get_config
from .log_config import logger
from .models import DownloadResult
from .resources import (
    DocumentsClient,
    IssuesClient,
    ProjectsClient,
    SpaceClient,
    UsersClient,
)
from .transport import create_http_client
from .types import QueryParams, Sleep


class BacklogClient:
    """Asynchronous client for the Backlog API.

    All resource namespaces share one configuration and one connection pool.
    Retries, timeouts, error normalization and logging are handled by the
    request engine for every call.

    Example:
    ```python
    async with BacklogClient(BacklogConfig(host="example.backlog.com", api_key="...")) as client:
        issue = await client.issues.get_issue("PROJ-1")
    ```

    Attributes:
        space (SpaceClient): Space-wide endpoints.
        issues (IssuesClient): Issue endpoints.
        documents (DocumentsClient): Document endpoints.
        projects (ProjectsClient): Project endpoints.
        users (UsersClient): User endpoints.
        _config: The connection configuration.
        _http_client: The underlying httpx.AsyncClient for making requests.
        _should_close_client: Flag indicating if this instance owns the _http_client.
        _sleep: Waits between retry attempts.
    """

    def __init__(
        self,
        config: BacklogConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """Initialize the BacklogClient.

        Args:
            config: Connection configuration. Loaded from the environment
                (`BACKLOG_*` variables) when omitted.
            http_client: Optional pre-configured httpx.AsyncClient instance.
            sleep: Waits between retry attempts.
        """
        self._config = config or get_config()
        self._should_close_client = http_client is None  # Close only if we created it
        self._http_client = http_client or create_http_client()
        self._sleep = sleep

        self.space = SpaceClient(self)
        self.issues = IssuesClient(self)
        self.documents = DocumentsClient(self)
        self.projects = ProjectsClient(self)
        self.users = UsersClient(self)
        logger.info(f"BacklogClient initialized for host: {self._config.host}")

    @property
    def config(self) -> BacklogConfig:
        """The connection configuration of this client."""
        return self._config

    async def request(
        self,
        path: str,
        *,
        method: str = "GET",
        params: QueryParams | None = None,
        body: Any | None = None,
    ) -> Any:
        """Perform an API call through the pooled connection.

        Args:
            path: Path relative to `/api/v2/`.
            method: HTTP method.
            params: Query parameters.
            body: JSON body for non-GET requests.

        Returns:
            Any: The decoded JSON response.
        """
        return await executor.request(
            self._config,
            path,
            method=method,
            params=params,
            body=body,
            transport=self._http_client.send,
            sleep=self._sleep,
        )

    async def download(self, path: str) -> DownloadResult:
        """Download a file through the pooled connection."""
        return await executor.download(
            self._config, path, transport=self._http_client.send
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._should_close_client and not self._http_client.is_closed:
            await self._http_client.aclose()
            logger.debug(f"BacklogClient internal HTTP client closed. Client ID: {id(self)}.")

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        await self.aclose()


def create_client(config: BacklogConfig | None = None, **kwargs: Any) -> BacklogClient:
    """Create a BacklogClient for the given configuration.

    Args:
        config: Connection configuration; loaded from the environment when omitted.
        **kwargs: Passed through to `BacklogClient`.
    """
    return BacklogClient(config, **kwargs)
