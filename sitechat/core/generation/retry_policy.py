"""
Generation retry policy.

Classifies model errors as transient (overload, rate limit, 429, 503,
timeout) or terminal, and builds the tenacity controller used by the answer
generator.

Dependencies: tenacity
System role: Backoff policy for generative model calls
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 503})
RETRYABLE_MARKERS = ("overloaded", "429", "503", "rate limit", "rate-limit", "ratelimit")


def _error_chain(error: BaseException):
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__


def is_retryable_error(error: BaseException) -> bool:
    """
    True when the error (or anything it was raised from) signals a transient
    provider condition.
    """
    for item in _error_chain(error):
        if isinstance(item, (TimeoutError, asyncio.TimeoutError)):
            return True
        for attribute in ("status_code", "code"):
            value = getattr(item, attribute, None)
            if isinstance(value, int) and value in RETRYABLE_STATUS_CODES:
                return True
        message = str(item).lower()
        if any(marker in message for marker in RETRYABLE_MARKERS):
            return True
    return False


def _log_before_sleep(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.warning(
        f"{__name__}:retry - Attempt {retry_state.attempt_number} failed "
        f"({type(error).__name__}: {error}); retrying in {delay:.2f}s"
    )


def build_retrying(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_jitter: float = 1.0,
    sleep: Callable[[float], Awaitable[None]] | None = None,
) -> AsyncRetrying:
    """
    Retry controller: base_delay * 2^(attempt-1) + U(0, max_jitter) between attempts.

    Args:
        max_attempts: Total attempts including the first
        base_delay: Delay after the first failed attempt (seconds)
        max_jitter: Upper bound of the random jitter (seconds)
        sleep: Awaitable sleep function (tests pass a recorder)

    Returns:
        AsyncRetrying: Reraises the last error once attempts run out
    """
    kwargs = {}
    if sleep is not None:
        kwargs["sleep"] = sleep
    return AsyncRetrying(
        retry=retry_if_exception(is_retryable_error),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=base_delay, exp_base=2, min=0) + wait_random(0, max_jitter),
        before_sleep=_log_before_sleep,
        reraise=True,
        **kwargs,
    )
