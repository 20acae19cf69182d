"""
cfn_response.provider — Dispatch lifecycle events to per-operation functions.

CustomResourceProvider owns both outcomes of an invocation: it runs the
registered operation under a HandlerGuard (failure, Retry, orphaned DELETE)
and submits SUCCESS itself when the operation returns. New resources should
register here rather than calling the submitter from their own code.

Usage:
    provider = CustomResourceProvider()

    @provider.on_create
    def create(event, context) -> ProviderResult:
        ...
        return ProviderResult(physical_resource_id="my-id", data={"Arn": arn})

    handler = provider.handler
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from aws_lambda_powertools import Logger

from cfn_response.exceptions import InvalidEventError
from cfn_response.guard import HandlerGuard
from cfn_response.models import LifecycleEvent, RequestType, ResponseStatus

logger = Logger(service="cfn-response")


@dataclass(frozen=True)
class ProviderResult:
    """What an operation reports back on success.

    data is merged into the event's Data and returned to CloudFormation for
    Fn::GetAtt. no_echo masks data in the console and describe calls.
    """

    physical_resource_id: str | None = None
    data: dict[str, Any] | None = None
    no_echo: bool | None = None


Operation = Callable[[LifecycleEvent, Any], ProviderResult | None]


class CustomResourceProvider:
    def __init__(self, guard: HandlerGuard | None = None) -> None:
        self.guard = guard or HandlerGuard()
        self._operations: dict[RequestType, Operation] = {}

    def on_create(self, fn: Operation) -> Operation:
        self._operations[RequestType.CREATE] = fn
        return fn

    def on_update(self, fn: Operation) -> Operation:
        self._operations[RequestType.UPDATE] = fn
        return fn

    def on_delete(self, fn: Operation) -> Operation:
        self._operations[RequestType.DELETE] = fn
        return fn

    def handler(self, event: LifecycleEvent, context: Any = None) -> None:
        """Lambda entrypoint. Sends exactly one response unless Retry is raised.

        SUCCESS is submitted outside the guarded call so that a delivery
        failure propagates instead of being reported as a FAILED resource.
        """
        results: list[ProviderResult] = []

        def run(event: LifecycleEvent, context: Any) -> None:
            results.append(self._dispatch(event, context))

        self.guard.wrap(run)(event, context)
        if not results:
            return

        result = results[0]
        self._apply_result(RequestType(event["RequestType"]), event, result)
        self.guard.submitter.submit(ResponseStatus.SUCCESS, event, no_echo=result.no_echo)

    def _dispatch(self, event: LifecycleEvent, context: Any) -> ProviderResult:
        raw_type = event.get("RequestType")
        try:
            request_type = RequestType(raw_type)
        except ValueError:
            raise InvalidEventError(f"Unsupported RequestType {raw_type!r}") from None

        operation = self._operations.get(request_type)
        if operation is None:
            raise InvalidEventError(f"No operation registered for {request_type} requests")

        logger.info(
            "dispatching custom resource request",
            extra={
                "request_type": str(request_type),
                "logical_resource_id": event.get("LogicalResourceId"),
                "physical_resource_id": event.get("PhysicalResourceId"),
            },
        )
        return operation(event, context) or ProviderResult()

    @staticmethod
    def _apply_result(
        request_type: RequestType, event: LifecycleEvent, result: ProviderResult
    ) -> None:
        previous_id = event.get("PhysicalResourceId")
        if result.physical_resource_id:
            if request_type == RequestType.UPDATE and previous_id != result.physical_resource_id:
                logger.info(
                    "physical resource id changed, CloudFormation will delete the old resource",
                    extra={
                        "old_physical_resource_id": previous_id,
                        "new_physical_resource_id": result.physical_resource_id,
                    },
                )
            event["PhysicalResourceId"] = result.physical_resource_id
        elif not previous_id:
            event["PhysicalResourceId"] = event.get("RequestId")

        if result.data:
            event["Data"] = {**(event.get("Data") or {}), **result.data}
