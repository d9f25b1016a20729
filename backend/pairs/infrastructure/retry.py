"""Retry policy for calls to the scores API, built on tenacity."""

import logging

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
BACKOFF_MULTIPLIER = 0.5  # seconds, doubled per attempt
BACKOFF_MAX = 5.0  # seconds
BACKOFF_JITTER = 0.5  # seconds


class RetryableError(Exception):
    """An error worth another attempt."""


class TransientError(RetryableError):
    """Connection failure, timeout or 5xx from a remote service."""


def _log_retry(retry_state: RetryCallState) -> None:
    name = getattr(retry_state.fn, "__name__", "call")
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        f"{name} failed on attempt {retry_state.attempt_number} ({error}), "
        f"retrying in {retry_state.next_action.sleep:.2f}s"
    )


def retrying(
    max_attempts: int = MAX_ATTEMPTS,
    multiplier: float = BACKOFF_MULTIPLIER,
    max_wait: float = BACKOFF_MAX,
    jitter: float = BACKOFF_JITTER,
    retry_on: tuple[type[BaseException], ...] = (RetryableError, ConnectionError, TimeoutError),
) -> AsyncRetrying:
    """Build the retry controller.

    Waits multiplier * 2^n (capped at max_wait) plus up to `jitter` seconds,
    and re-raises the last error once attempts run out.
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=multiplier, max=max_wait) + wait_random(0, jitter),
        retry=retry_if_exception_type(retry_on),
        before_sleep=_log_retry,
        reraise=True,
    )
