"""Retry policy evaluation: failure classification and backoff delays.

The request engine wraps every failed attempt in an `AttemptFailure`, which
records what went wrong without exposing those details on the error that is
eventually raised. Tenacity drives the loop; the predicate and wait strategy
defined here decide whether and when the next attempt happens.
"""

import random

import tenacity
from tenacity.wait import wait_base

from .config import RetryPolicy
from .exceptions import BacklogError
from .log_config import logger

JITTER_RATIO = 0.1


class AttemptFailure(Exception):
    """Classified outcome of one failed attempt.

    Attributes:
        error: The normalized error to raise if this failure is terminal.
        status_code: The HTTP status, for error responses only.
        duration: Seconds elapsed between dispatch and failure.
        transport_error: True for connection-level failures.
        timed_out: True when the attempt was cancelled by the timeout.
        log_payload: The decoded error body or a descriptive string.
    """

    def __init__(
        self,
        error: BacklogError,
        *,
        duration: float,
        status_code: int | None = None,
        transport_error: bool = False,
        timed_out: bool = False,
        log_payload: object | None = None,
    ):
        super().__init__(error.message)
        self.error = error
        self.duration = duration
        self.status_code = status_code
        self.transport_error = transport_error
        self.timed_out = timed_out
        self.log_payload = log_payload if log_payload is not None else error.message

    def is_retryable(self, policy: RetryPolicy) -> bool:
        """Whether another attempt may fix this failure.

        Timeouts are always terminal. Remaining attempts are checked by the
        stop condition, not here.
        """
        if self.timed_out:
            return False
        if self.transport_error:
            return True
        return (
            self.status_code is not None
            and self.status_code in policy.retryable_status_codes
        )


def backoff_delay(
    policy: RetryPolicy, attempt: int, jitter: float | None = None
) -> float:
    """Computes the delay before the retry that follows `attempt`.

    With constant backoff this is `base_delay`. With exponential backoff it is
    `base_delay * 2 ** (attempt - 1) * (1 + jitter)`, capped at `max_delay`,
    where jitter lies in [0, 0.1).

    Args:
        policy: The resolved retry policy.
        attempt: Number of the attempt that just failed, starting at 1.
        jitter: Fractional bonus; drawn at random when omitted.

    Returns:
        float: Seconds to wait.
    """
    if not policy.exponential_backoff:
        return policy.base_delay
    if jitter is None:
        jitter = random.random() * JITTER_RATIO
    delay = policy.base_delay * 2 ** (attempt - 1) * (1 + jitter)
    return min(delay, policy.max_delay)


class wait_backoff(wait_base):
    """Tenacity wait strategy applying `backoff_delay` to a retry policy."""

    def __init__(self, policy: RetryPolicy):
        self.policy = policy

    def __call__(self, retry_state: tenacity.RetryCallState) -> float:
        return backoff_delay(self.policy, retry_state.attempt_number)


def retry_if_retryable(policy: RetryPolicy) -> tenacity.retry_if_exception:
    """Tenacity predicate that retries classified failures the policy allows."""
    return tenacity.retry_if_exception(
        lambda exc: isinstance(exc, AttemptFailure) and exc.is_retryable(policy)
    )


def log_before_retry(method: str, masked_url: str):
    """Builds a `before_sleep` callback that logs each scheduled retry."""

    def _log(retry_state: tenacity.RetryCallState) -> None:
        if not retry_state.outcome:
            return
        exc = retry_state.outcome.exception()
        sleep_time = (
            retry_state.next_action.sleep if retry_state.next_action else 0.0
        )
        logger.info(
            f"Retrying {method} {masked_url} in {sleep_time:.2f}s "
            f"after attempt {retry_state.attempt_number} due to: {exc}"
        )

    return _log
