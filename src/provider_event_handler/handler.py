"""
provider_event_handler.handler — CloudFormation custom resource Lambda for SSM parameters.

Manages a String parameter in SSM Parameter Store as a custom resource.
Responses are delivered through cfn_response, so failures, orphaned deletes
after a failed create, and throttling retries are handled uniformly.

Resource properties:
  {
    "Name":        str — parameter name (optional, generated when absent)
    "Value":       str — parameter value (required)
    "Description": str — parameter description (optional)
  }

Attributes returned for Fn::GetAtt: Name, Version.
"""

import os
from typing import Any

import boto3
from aws_lambda_powertools import Logger, Tracer
from botocore.exceptions import ClientError
from cfn_response import (
    CustomResourceProvider,
    InvalidEventError,
    ProviderResult,
    Retry,
    default_guard,
)

logger = Logger(service="provider-event-handler")
tracer = Tracer()

PARAMETER_PREFIX = os.environ.get("PARAMETER_PREFIX", "/platform/custom-resources")

# Error codes that mean "try the whole invocation again later"
_RETRYABLE_ERROR_CODES = {"ThrottlingException", "TooManyUpdates"}

_ssm_client = None

provider = CustomResourceProvider(default_guard)


def get_ssm():
    global _ssm_client
    if _ssm_client is None:
        region = os.environ.get("AWS_REGION", "eu-west-2")
        _ssm_client = boto3.client("ssm", region_name=region)
    return _ssm_client


def _properties(event: dict[str, Any], key: str = "ResourceProperties") -> dict[str, Any]:
    props = event.get(key) or {}
    if not isinstance(props, dict):
        raise InvalidEventError(f"{key} must be an object")
    return props


def _parameter_name(event: dict[str, Any], props: dict[str, Any]) -> str:
    name = props.get("Name")
    if name:
        return str(name)
    # RequestId is unique per stack operation; keep the generated name short
    suffix = str(event.get("RequestId", ""))[:8]
    return f"{PARAMETER_PREFIX}/{event['LogicalResourceId']}-{suffix}"


def _put_parameter(name: str, props: dict[str, Any], *, overwrite: bool) -> int:
    if "Value" not in props:
        raise InvalidEventError('"Value" is a required property')

    kwargs: dict[str, Any] = {
        "Name": name,
        "Value": str(props["Value"]),
        "Type": "String",
        "Overwrite": overwrite,
    }
    if props.get("Description"):
        kwargs["Description"] = str(props["Description"])

    try:
        response = get_ssm().put_parameter(**kwargs)
    except ClientError as e:
        _raise_retry_if_throttled(e)
        raise
    return int(response["Version"])


def _raise_retry_if_throttled(error: ClientError) -> None:
    code = error.response.get("Error", {}).get("Code")
    if code in _RETRYABLE_ERROR_CODES:
        raise Retry(f"SSM throttled the request ({code})") from error


@provider.on_create
def create_parameter(event: dict[str, Any], context: Any) -> ProviderResult:
    props = _properties(event)
    name = _parameter_name(event, props)
    version = _put_parameter(name, props, overwrite=False)
    logger.info("Parameter created", extra={"parameter_name": name, "version": version})
    return ProviderResult(physical_resource_id=name, data={"Name": name, "Version": version})


@provider.on_update
def update_parameter(event: dict[str, Any], context: Any) -> ProviderResult:
    props = _properties(event)
    current_name = event["PhysicalResourceId"]
    name = str(props["Name"]) if props.get("Name") else current_name

    # A new name means replacement: create it and let CloudFormation delete the old one.
    replacing = name != current_name
    version = _put_parameter(name, props, overwrite=not replacing)
    logger.info(
        "Parameter updated",
        extra={"parameter_name": name, "version": version, "replaced": replacing},
    )
    return ProviderResult(physical_resource_id=name, data={"Name": name, "Version": version})


@provider.on_delete
def delete_parameter(event: dict[str, Any], context: Any) -> None:
    name = event["PhysicalResourceId"]
    try:
        get_ssm().delete_parameter(Name=name)
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") == "ParameterNotFound":
            logger.warning("Parameter already deleted", extra={"parameter_name": name})
            return None
        _raise_retry_if_throttled(e)
        raise
    logger.info("Parameter deleted", extra={"parameter_name": name})
    return None


@logger.inject_lambda_context(correlation_id_path="RequestId")
@tracer.capture_lambda_handler
def handler(event: dict[str, Any], context: Any) -> None:
    """Lambda entrypoint (ServiceToken target)."""
    logger.append_keys(
        request_type=event.get("RequestType"),
        logical_resource_id=event.get("LogicalResourceId"),
        stack_id=event.get("StackId"),
    )
    provider.handler(event, context)
