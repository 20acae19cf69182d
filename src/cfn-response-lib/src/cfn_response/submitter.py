"""
cfn_response.submitter — Build and deliver the CloudFormation response envelope.

One submission = one envelope, PUT to the event's pre-signed ResponseURL with
up to RetryPolicy.attempts tries. Only the transport call is retried; envelope
construction is pure.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from aws_lambda_powertools import Logger

from cfn_response.config import ResponseConfig
from cfn_response.models import LifecycleEvent, ResponseEnvelope, ResponseStatus
from cfn_response.outbound import http_put
from cfn_response.redaction import redact_url
from cfn_response.retry import with_retries

logger = Logger(service="cfn-response")

# (url, body, headers, timeout) -> Any
Transport = Callable[[str, bytes, dict[str, str], float | None], Any]


def build_envelope(
    status: ResponseStatus | str,
    event: LifecycleEvent,
    *,
    reason: str | None = None,
    no_echo: bool | None = None,
    config: ResponseConfig | None = None,
) -> ResponseEnvelope:
    """Resolve Reason and PhysicalResourceId defaults for a response."""
    config = config or ResponseConfig()
    return ResponseEnvelope.from_event(
        ResponseStatus(status),
        event,
        reason=reason,
        no_echo=no_echo,
        missing_physical_id_marker=config.missing_physical_id_marker,
    )


class ResponseSubmitter:
    """
    Reports a custom resource outcome to CloudFormation.

    transport and sleep are injectable so tests can count attempts without
    network access or wall-clock delay.
    """

    def __init__(
        self,
        config: ResponseConfig | None = None,
        *,
        transport: Transport = http_put,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> None:
        self.config = config or ResponseConfig()
        self._transport = transport
        self._sleep = sleep

    def submit(
        self,
        status: ResponseStatus | str,
        event: LifecycleEvent,
        *,
        reason: str | None = None,
        no_echo: bool | None = None,
    ) -> None:
        """Send status for event. Re-raises the transport error once retries are exhausted."""
        envelope = build_envelope(status, event, reason=reason, no_echo=no_echo, config=self.config)
        body = envelope.to_json().encode("utf-8")
        response_url = event["ResponseURL"]

        logger.info(
            "submit response to cloudformation",
            extra={"response_url": redact_url(response_url), "response": envelope.to_dict()},
        )

        headers = {"content-type": "", "content-length": str(len(body))}
        deliver = with_retries(self.config.retry_policy, self._transport, sleep=self._sleep)
        deliver(response_url, body, headers, self.config.request_timeout)
