"""
cfn_response.exceptions — Error kinds raised by the guard and the provider dispatcher.
"""


class CfnResponseError(Exception):
    """Base class for cfn_response errors."""


class Retry(CfnResponseError):
    """
    Raised by a lifecycle action to ask the Lambda runtime to re-invoke it.

    The guard re-raises this unchanged instead of sending a FAILED response,
    so CloudFormation keeps waiting for the next attempt. It is recognised by
    type only; the message is informational.
    """


class InvalidEventError(CfnResponseError):
    """Raised when a lifecycle event cannot be dispatched (unknown RequestType, bad properties)."""
