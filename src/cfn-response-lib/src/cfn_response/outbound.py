"""
cfn_response.outbound — HTTP transport for CloudFormation responses.
"""

from __future__ import annotations

import requests
from aws_lambda_powertools import Logger

logger = Logger(service="cfn-response")


def http_put(
    url: str,
    body: bytes,
    headers: dict[str, str],
    timeout: float | None = None,
) -> requests.Response:
    """PUT body to url. Raises requests.HTTPError on a non-2xx status."""
    response = requests.put(url, data=body, headers=headers, timeout=timeout)
    logger.debug("cloudformation response status", extra={"status_code": response.status_code})
    response.raise_for_status()
    return response
