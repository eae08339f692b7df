# backlogkit/config.py
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .log_config import logger
from .types import HttpLogger

DEFAULT_RETRYABLE_STATUS_CODES: frozenset[int] = frozenset([429, 500, 502, 503, 504])
"""Default set of HTTP status codes considered retryable."""


class RetryPolicy(BaseModel):
    """How a logical call retries failed attempts.

    Any field left out when the policy is built falls back to its default
    when the policy is resolved for a call, see `resolve_retry_policy`.
    """

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(
        default=3, ge=1, description="Total attempts per call; 1 disables retries"
    )
    base_delay: float = Field(
        default=1.0, ge=0, description="Delay before the first retry (seconds)"
    )
    max_delay: float = Field(
        default=30.0, ge=0, description="Upper bound for any single delay (seconds)"
    )
    retryable_status_codes: frozenset[int] = Field(
        default=DEFAULT_RETRYABLE_STATUS_CODES,
        description="HTTP status codes that trigger a retry",
    )
    exponential_backoff: bool = Field(
        default=True, description="Double the delay after each attempt"
    )


def default_retry_policy() -> RetryPolicy:
    """Returns a fresh retry policy holding only default values."""
    return RetryPolicy()


class BacklogConfig(BaseSettings):
    """
    Connection settings for one Backlog client, loaded from keyword arguments,
    environment variables (prefixed with 'BACKLOG_') or .env/secrets.env files.

    Exactly one of `api_key` and `access_token` is expected. The API key is
    sent as the `apiKey` query parameter, the access token as a Bearer
    `Authorization` header.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "secrets.env"),
        env_file_encoding="utf-8",
        env_prefix="BACKLOG_",
        env_nested_delimiter="__",  # BACKLOG_RETRY__MAX_ATTEMPTS=5
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        arbitrary_types_allowed=True,
    )

    host: str = Field(description="Space host, e.g. 'your-space.backlog.com'")
    api_key: str | None = Field(default=None, description="API key credential")
    access_token: str | None = Field(
        default=None, description="OAuth2 access token credential"
    )
    timeout: float | None = Field(
        default=None, gt=0, description="Timeout of a single attempt (seconds)"
    )
    logger: HttpLogger | None = Field(
        default=None, description="Optional sink for request/response/error events"
    )
    retry: RetryPolicy | None = Field(
        default=None, description="Overrides for the default retry policy"
    )

    @field_validator("host")
    @classmethod
    def _normalize_host(cls, value: str) -> str:
        host = value.strip().rstrip("/")
        if not host:
            raise ConfigurationError("BacklogConfig requires a non-empty 'host'.")
        return host

    @model_validator(mode="after")
    def _check_credentials(self) -> "BacklogConfig":
        if not self.api_key and not self.access_token:
            logger.warning(
                f"No credentials configured for {self.host}; requests will be unauthenticated."
            )
        elif self.api_key and self.access_token:
            logger.warning(
                "Both api_key and access_token are configured; the API key is sent "
                "in the URL and the Bearer header is added as well."
            )
        return self


def resolve_retry_policy(config: BacklogConfig) -> RetryPolicy:
    """Merges the caller's retry overrides field-by-field over the defaults.

    Only fields the caller explicitly set are taken from `config.retry`;
    everything else comes from `default_retry_policy()`.
    """
    policy = default_retry_policy()
    if config.retry is None:
        return policy
    overrides = config.retry.model_dump(include=config.retry.model_fields_set)
    return policy.model_copy(update=overrides)


@lru_cache
def get_config() -> BacklogConfig:
    """
    Provides access to the configuration loaded from the environment.

    Settings are loaded from environment variables (prefixed with 'BACKLOG_')
    or .env/secrets.env files. The instance is cached for performance.

    Returns:
        BacklogConfig: The configuration instance.
    """
    return BacklogConfig()  # type: ignore[call-arg]
