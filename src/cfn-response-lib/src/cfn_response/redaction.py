"""
cfn_response.redaction — Keep pre-signed callback URLs out of logs.

The ResponseURL is a bearer credential: anyone holding it can answer for the
stack. Only scheme, host and path are ever logged.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

REDACTED_QUERY = "***"
REDACTED_RESPONSE_URL = "..."


def redact_url(url: str) -> str:
    """Return scheme://host/path?*** for a callback URL.

    Userinfo, port and the query string are dropped.
    """
    parts = urlsplit(url)
    path = parts.path if parts.path.startswith("/") else f"/{parts.path}"
    return f"{parts.scheme}://{parts.hostname or ''}{path}?{REDACTED_QUERY}"


def redact_event(event: dict[str, Any]) -> dict[str, Any]:
    """Shallow copy of a lifecycle event that is safe to log."""
    redacted = dict(event)
    if "ResponseURL" in redacted:
        redacted["ResponseURL"] = REDACTED_RESPONSE_URL
    return redacted
