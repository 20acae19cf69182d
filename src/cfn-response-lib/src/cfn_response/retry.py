"""
cfn_response.retry — Fixed-delay retry wrapper for the outbound delivery call.

Thin layer over tenacity so callers describe retries with a RetryPolicy and
tests can inject a fake sleep.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from aws_lambda_powertools import Logger
from tenacity import RetryCallState, Retrying, stop_after_attempt, wait_fixed

from cfn_response.models import RetryPolicy

logger = Logger(service="cfn-response")

T = TypeVar("T")


def _log_attempt_failure(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome
    error = outcome.exception() if outcome is not None else None
    logger.warning(
        "delivery attempt failed, retrying",
        extra={
            "attempt": retry_state.attempt_number,
            "error": repr(error),
            "sleep_seconds": retry_state.next_action.sleep if retry_state.next_action else None,
        },
    )


def with_retries(
    policy: RetryPolicy,
    fn: Callable[..., T],
    *,
    sleep: Callable[[float], Any] = time.sleep,
) -> Callable[..., T]:
    """Wrap fn so that it is attempted up to policy.attempts times.

    Any Exception triggers another attempt after policy.delay_seconds. When
    attempts are exhausted the last exception is re-raised unchanged.
    """

    @wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        retrying = Retrying(
            stop=stop_after_attempt(policy.attempts),
            wait=wait_fixed(policy.delay_seconds),
            sleep=sleep,
            before_sleep=_log_attempt_failure,
            reraise=True,
        )
        return retrying(fn, *args, **kwargs)

    return wrapper
