"""Shared fixtures for cfn_response tests."""

from __future__ import annotations

from typing import Any

import pytest

RESPONSE_URL = (
    "https://cloudformation-custom-resource-response-euwest2.s3.eu-west-2.amazonaws.com/"
    "arn%3Aaws%3Acloudformation%3Aeu-west-2%3A111111111111%3Astack/demo/abc%7CParam%7Creq-1"
    "?X-Amz-Algorithm=AWS4-HMAC-SHA256&X-Amz-Credential=AKIAEXAMPLE&X-Amz-Signature=deadbeef"
)


class RecordingTransport:
    """Stands in for cfn_response.outbound.http_put.

    Fails the first `failures` calls with `error`, then succeeds.
    """

    def __init__(self, failures: int = 0, error: Exception | None = None) -> None:
        self.failures = failures
        self.error = error or ConnectionError("connection reset by peer")
        self.calls: list[dict[str, Any]] = []

    def __call__(
        self, url: str, body: bytes, headers: dict[str, str], timeout: float | None
    ) -> None:
        self.calls.append({"url": url, "body": body, "headers": headers, "timeout": timeout})
        if len(self.calls) <= self.failures:
            raise self.error


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def create_event() -> dict[str, Any]:
    return {
        "RequestType": "Create",
        "ServiceToken": "arn:aws:lambda:eu-west-2:111111111111:function:provider",
        "ResponseURL": RESPONSE_URL,
        "StackId": "arn:aws:cloudformation:eu-west-2:111111111111:stack/demo/abc",
        "RequestId": "req-1",
        "LogicalResourceId": "Param",
        "ResourceType": "Custom::Parameter",
        "ResourceProperties": {"Value": "v1"},
    }


@pytest.fixture
def update_event(create_event: dict[str, Any]) -> dict[str, Any]:
    return {
        **create_event,
        "RequestType": "Update",
        "RequestId": "req-2",
        "PhysicalResourceId": "/platform/custom-resources/Param",
        "OldResourceProperties": {"Value": "v0"},
    }


@pytest.fixture
def delete_event(create_event: dict[str, Any]) -> dict[str, Any]:
    return {
        **create_event,
        "RequestType": "Delete",
        "RequestId": "req-3",
        "PhysicalResourceId": "/platform/custom-resources/Param",
    }


@pytest.fixture
def flaky_transport() -> type[RecordingTransport]:
    """The RecordingTransport class, for tests that need a failure count."""
    return RecordingTransport
