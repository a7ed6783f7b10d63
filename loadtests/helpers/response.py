"""Response error extraction for load test observability.

Parses storefront API error responses into human-readable messages. Every
service answers errors as ``{"error": "msg"}`` or ``{"error": {"field": ["msg"]}}``;
validate-token answers ``{"valid": false, "message": "..."}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except ValueError:
        # Not JSON, return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(f"{k}: {', '.join(map(str, v)) if isinstance(v, list) else v}" for k, v in error.items())
        return str(error)

    if body.get("valid") is False:
        return str(body.get("message", "invalid token"))

    return str(body)[:300]
