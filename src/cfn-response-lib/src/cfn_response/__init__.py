"""
cfn_response — CloudFormation custom resource response delivery.

Reports SUCCESS/FAILED for a custom resource lifecycle event to its
pre-signed ResponseURL, with bounded retries, and translates handler
failures into FAILED responses.

The module-level submit_response / safe_handler use a ResponseConfig read
from the environment at import time.
"""

from cfn_response.config import ResponseConfig
from cfn_response.exceptions import CfnResponseError, InvalidEventError, Retry
from cfn_response.guard import HandlerGuard
from cfn_response.models import (
    CREATE_FAILED_PHYSICAL_ID_MARKER,
    MISSING_PHYSICAL_ID_MARKER,
    RequestType,
    ResponseEnvelope,
    ResponseStatus,
    RetryPolicy,
)
from cfn_response.provider import CustomResourceProvider, ProviderResult
from cfn_response.submitter import ResponseSubmitter, build_envelope

default_config = ResponseConfig.from_env()
default_submitter = ResponseSubmitter(default_config)
default_guard = HandlerGuard(default_submitter)

submit_response = default_submitter.submit
safe_handler = default_guard.wrap

__all__ = [
    "CREATE_FAILED_PHYSICAL_ID_MARKER",
    "MISSING_PHYSICAL_ID_MARKER",
    "CfnResponseError",
    "CustomResourceProvider",
    "HandlerGuard",
    "InvalidEventError",
    "ProviderResult",
    "RequestType",
    "ResponseConfig",
    "ResponseEnvelope",
    "ResponseStatus",
    "ResponseSubmitter",
    "Retry",
    "RetryPolicy",
    "build_envelope",
    "default_config",
    "default_guard",
    "default_submitter",
    "safe_handler",
    "submit_response",
]
