"""
cfn_response.config — Immutable settings shared by the submitter and the guard.

Defaults are read once from the environment by ResponseConfig.from_env();
tests and embedding applications pass an explicit ResponseConfig instead.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TypeVar

from aws_lambda_powertools import Logger

from cfn_response.models import (
    CREATE_FAILED_PHYSICAL_ID_MARKER,
    MISSING_PHYSICAL_ID_MARKER,
    RetryPolicy,
)

logger = Logger(service="cfn-response")

N = TypeVar("N", int, float)

INCLUDE_STACK_TRACES_ENV = "CFN_RESPONSE_INCLUDE_STACK_TRACES"
RETRY_ATTEMPTS_ENV = "CFN_RESPONSE_RETRY_ATTEMPTS"
RETRY_DELAY_SECONDS_ENV = "CFN_RESPONSE_RETRY_DELAY_SECONDS"
REQUEST_TIMEOUT_ENV = "CFN_RESPONSE_REQUEST_TIMEOUT"

_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_number(env: Mapping[str, str], name: str, cast: Callable[[str], N], default: N) -> N:
    """Parse a numeric setting, falling back to default when it is unset or invalid."""
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        logger.warning(
            "Ignoring invalid environment setting, using default",
            extra={"variable": name, "value": raw, "default": default},
        )
        return default


@dataclass(frozen=True)
class ResponseConfig:
    """Settings for one ResponseSubmitter / HandlerGuard pair.

    include_stack_traces: FAILED reasons carry the formatted traceback when
        True, only str(error) when False.
    request_timeout: per-attempt timeout handed to requests; None leaves the
        overall bound to the Lambda function timeout.
    """

    include_stack_traces: bool = True
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    request_timeout: float | None = None
    create_failed_marker: str = CREATE_FAILED_PHYSICAL_ID_MARKER
    missing_physical_id_marker: str = MISSING_PHYSICAL_ID_MARKER

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ResponseConfig:
        """Build settings from the environment.

        Runs at import time of cfn_response, so it never raises: unparsable or
        out-of-range values are logged and replaced by their defaults.
        """
        env = os.environ if environ is None else environ
        defaults = RetryPolicy()

        attempts = _env_number(env, RETRY_ATTEMPTS_ENV, int, defaults.attempts)
        delay = _env_number(env, RETRY_DELAY_SECONDS_ENV, float, defaults.delay_seconds)
        try:
            retry_policy = RetryPolicy(attempts=attempts, delay_seconds=delay)
        except ValueError as e:
            logger.warning(
                "Ignoring invalid retry settings, using defaults",
                extra={"attempts": attempts, "delay_seconds": delay, "error": str(e)},
            )
            retry_policy = defaults

        timeout = _env_number(env, REQUEST_TIMEOUT_ENV, float, 0.0)
        include = env.get(INCLUDE_STACK_TRACES_ENV)
        return cls(
            include_stack_traces=include is None or include.strip().lower() not in _FALSE_VALUES,
            retry_policy=retry_policy,
            request_timeout=timeout if timeout > 0 else None,
        )
