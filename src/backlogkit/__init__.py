"""backlogkit: an asynchronous client for the Backlog project-management API.

The package is built around a small request engine (`request`, `download`)
that handles URL construction, API-key and OAuth2 authentication, timeouts,
retries with exponential backoff and normalized errors. `BacklogClient`
binds a configuration to that engine and exposes one method per endpoint.
"""

__version__ = "0.1.0"

from .builders import build_headers, build_url
from .client import BacklogClient, create_client
from .config import BacklogConfig, RetryPolicy, default_retry_policy, get_config
from .exceptions import (
    APIError,
    AuthError,
    BacklogError,
    ConfigurationError,
    DecodeError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    TimeoutError,
    ValidationError,
)
from .executor import download, request
from .log_config import configure_logging, loguru_http_logger
from .models import DownloadResult, FileData
from .types import HttpLogger

__all__ = [
    "__version__",
    # Client
    "BacklogClient",
    "create_client",
    # Core
    "request",
    "download",
    "build_url",
    "build_headers",
    # Configuration
    "BacklogConfig",
    "RetryPolicy",
    "default_retry_policy",
    "get_config",
    # Logging
    "HttpLogger",
    "configure_logging",
    "loguru_http_logger",
    # Results
    "DownloadResult",
    "FileData",
    # Exceptions
    "BacklogError",
    "APIError",
    "AuthError",
    "ConfigurationError",
    "DecodeError",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "TimeoutError",
    "ValidationError",
]
