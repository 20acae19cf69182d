"""
cfn_response.guard — Failure translation for custom resource lifecycle actions.

HandlerGuard wraps a Lambda-style action(event, context) so that:
  - a DELETE for a resource whose CREATE failed is answered SUCCESS without
    running the action;
  - a Retry raised by the action propagates unchanged (no response sent);
  - any other exception becomes exactly one FAILED response.

Success is NOT reported by the guard. An action that completes normally must
submit SUCCESS itself, or be registered on a CustomResourceProvider, which does
so on its behalf. This keeps existing actions that self-report compatible.
"""

from __future__ import annotations

import json
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any

from aws_lambda_powertools import Logger

from cfn_response.config import ResponseConfig
from cfn_response.exceptions import Retry
from cfn_response.models import LifecycleEvent, RequestType, ResponseStatus
from cfn_response.redaction import redact_event
from cfn_response.submitter import ResponseSubmitter

logger = Logger(service="cfn-response")

Action = Callable[[LifecycleEvent, Any], Any]
Handler = Callable[..., None]


class HandlerGuard:
    def __init__(
        self,
        submitter: ResponseSubmitter | None = None,
        config: ResponseConfig | None = None,
    ) -> None:
        self.config = config or (submitter.config if submitter else ResponseConfig())
        self.submitter = submitter or ResponseSubmitter(self.config)

    def __call__(self, action: Action) -> Handler:
        return self.wrap(action)

    def wrap(self, action: Action) -> Handler:
        @wraps(action)
        def handler(event: LifecycleEvent, context: Any = None) -> None:
            if self.is_orphaned_delete(event):
                logger.info("ignoring DELETE event caused by a failed CREATE event")
                self.submitter.submit(ResponseStatus.SUCCESS, event)
                return

            try:
                action(event, context)
            except Retry:
                logger.info("retry requested by handler")
                raise
            except Exception as error:
                logger.exception(
                    "custom resource action failed",
                    extra={"request_type": event.get("RequestType")},
                )
                self._mark_missing_physical_id(event)
                self.submitter.submit(
                    ResponseStatus.FAILED, event, reason=self.failure_reason(error)
                )

        return handler

    def is_orphaned_delete(self, event: LifecycleEvent) -> bool:
        return (
            event.get("RequestType") == RequestType.DELETE
            and event.get("PhysicalResourceId") == self.config.create_failed_marker
        )

    def failure_reason(self, error: BaseException) -> str:
        if self.config.include_stack_traces:
            return "".join(traceback.format_exception(error))
        return str(error)

    def _mark_missing_physical_id(self, event: LifecycleEvent) -> None:
        if event.get("PhysicalResourceId"):
            return

        if event.get("RequestType") == RequestType.CREATE:
            logger.info(
                "CREATE failed, responding with a marker physical resource id "
                "so that the subsequent DELETE will be ignored"
            )
            event["PhysicalResourceId"] = self.config.create_failed_marker
        else:
            redacted = redact_event(event)
            logger.error(
                'Malformed event. "PhysicalResourceId" is required: '
                + json.dumps(redacted, default=str),
                extra={"event": redacted},
            )
