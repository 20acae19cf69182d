"""
cfn_response.models — CloudFormation custom resource wire types.

Inbound events are kept as the raw dict Lambda delivers (see LifecycleEvent);
the outbound envelope is a frozen dataclass serialized once per submission.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import StrEnum
from typing import Any

# ---------------------------------------------------------------------------
# Physical id markers
# Values match the CDK provider framework so that a DELETE issued after a
# failed CREATE is recognised whichever implementation answered the CREATE.
# ---------------------------------------------------------------------------
CREATE_FAILED_PHYSICAL_ID_MARKER: str = "AWSCDK::CustomResourceProviderFramework::CREATE_FAILED"
MISSING_PHYSICAL_ID_MARKER: str = "AWSCDK::CustomResourceProviderFramework::MISSING_PHYSICAL_ID"

# Raw CloudFormation custom resource request, mutated in place by the guard.
LifecycleEvent = dict[str, Any]


def _json_default(value: Any) -> Any:
    # Data copied from DynamoDB items carries Decimals, boto3 responses carry datetimes.
    # Never raises: an unserializable value must not prevent the response from being sent.
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    if isinstance(value, set | frozenset):
        return list(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


class RequestType(StrEnum):
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"


class ResponseStatus(StrEnum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-delay retry policy for response delivery."""

    attempts: int = 5
    delay_seconds: float = 1.0

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError(f"attempts must be at least 1, got {self.attempts!r}")
        if self.delay_seconds < 0:
            raise ValueError(f"delay_seconds must not be negative, got {self.delay_seconds!r}")


@dataclass(frozen=True)
class ResponseEnvelope:
    """Body PUT to the pre-signed ResponseURL.

    no_echo and data are omitted from the wire form when None.
    """

    status: ResponseStatus
    reason: str
    stack_id: str
    request_id: str
    physical_resource_id: str
    logical_resource_id: str
    no_echo: bool | None = None
    data: dict[str, Any] | None = None

    @classmethod
    def from_event(
        cls,
        status: ResponseStatus,
        event: LifecycleEvent,
        *,
        reason: str | None = None,
        no_echo: bool | None = None,
        missing_physical_id_marker: str = MISSING_PHYSICAL_ID_MARKER,
    ) -> ResponseEnvelope:
        return cls(
            status=ResponseStatus(status),
            reason=reason or str(status),
            stack_id=event.get("StackId"),
            request_id=event.get("RequestId"),
            physical_resource_id=event.get("PhysicalResourceId") or missing_physical_id_marker,
            logical_resource_id=event.get("LogicalResourceId"),
            no_echo=no_echo,
            data=event.get("Data"),
        )

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "Status": str(self.status),
            "Reason": self.reason,
            "StackId": self.stack_id,
            "RequestId": self.request_id,
            "PhysicalResourceId": self.physical_resource_id,
            "LogicalResourceId": self.logical_resource_id,
        }
        if self.no_echo is not None:
            body["NoEcho"] = self.no_echo
        if self.data is not None:
            body["Data"] = self.data
        return body

    def to_json(self) -> str:
        return json.dumps(
            self.to_dict(), separators=(",", ":"), ensure_ascii=False, default=_json_default
        )
