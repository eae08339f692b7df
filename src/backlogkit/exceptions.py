"""Custom exception classes for the backlogkit library."""

from http import HTTPStatus
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ErrorDetail


class BacklogError(Exception):
    """Base exception class for all backlogkit errors."""

    def __init__(self, message: str, *, code: int | str | None = None):
        """Initializes the base exception.

        Args:
            message: The normalized, human-readable error message.
            code: Optional error code reported by the API.
        """
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return self.message


class APIError(BacklogError):
    """Represents an error response returned by the API (non-specific 4xx/5xx)."""

    def __init__(
        self,
        message: str,
        *,
        code: int | str | None = None,
        errors: "list[ErrorDetail] | None" = None,
    ):
        """Initializes the APIError.

        Args:
            message: The normalized error message.
            code: Error code from the body, or the HTTP status when the
                body could not be decoded.
            errors: The detailed error list reported by the API, if any.
        """
        super().__init__(message, code=code)
        self.errors = errors or []


class ValidationError(APIError):
    """Represents a rejected request (400 Bad Request)."""


class AuthError(APIError):
    """Represents missing or invalid credentials (401 Unauthorized)."""


class NotFoundError(APIError):
    """Represents a resource not found error (404 Not Found)."""


class RateLimitError(APIError):
    """Represents hitting the API rate limit (429 Too Many Requests)."""


class TimeoutError(BacklogError):
    """Represents a request attempt that exceeded the configured timeout.

    Timeouts are never retried.
    """


class NetworkError(BacklogError):
    """Represents a network connection error (e.g., DNS resolution failure, connection refused).

    This error indicates a problem in establishing or maintaining a network connection
    to the server during an HTTP request.
    """


class DecodeError(BacklogError):
    """Raised when a successful response body is not valid JSON."""


class ConfigurationError(BacklogError):
    """Represents an error in the library's configuration."""


_STATUS_ERRORS: dict[int, type[APIError]] = {
    HTTPStatus.BAD_REQUEST: ValidationError,
    HTTPStatus.UNAUTHORIZED: AuthError,
    HTTPStatus.NOT_FOUND: NotFoundError,
    HTTPStatus.TOO_MANY_REQUESTS: RateLimitError,
}


def error_class_for_status(status_code: int) -> type[APIError]:
    """Returns the most specific APIError subclass for an HTTP status code."""
    return _STATUS_ERRORS.get(status_code, APIError)
