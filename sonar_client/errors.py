"""Exceptions raised by the client.

Transport and HTTP errors live here; validation errors (raised before any
request is sent) live in ``sonar_client.validation`` and share the same base.
"""

import json
from typing import Any


class SonarClientError(Exception):
    """Base exception for all client errors."""


class NetworkError(SonarClientError):
    """Raised on connection timeout or unreachable server."""


class APIError(SonarClientError):
    """Raised when SonarQube answers with a non-success status code."""

    def __init__(self, method: str, url: str, status_code: int, body: bytes = b"") -> None:
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body
        self.message = parse_error_body(body)
        super().__init__(f"{method} {url}: {status_code} {self.message}")


class AuthenticationError(APIError):
    """Raised on HTTP 401: invalid or expired credentials."""


class ForbiddenError(APIError):
    """Raised on HTTP 403: authenticated but lacking permission."""


class NotFoundError(APIError):
    """Raised on HTTP 404: project, component or resource not found."""


def parse_error_body(body: bytes) -> str:
    """Flatten a SonarQube error payload into a single line.

    SonarQube answers ``{"errors": [{"msg": "..."}]}``; anything that is not
    JSON is returned as-is.
    """
    if not body:
        return ""
    text = body.decode("utf-8", errors="replace")
    try:
        raw = json.loads(text)
    except ValueError:
        return text
    return _flatten(raw)


def _flatten(raw: Any) -> str:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, list):
        return "[" + ", ".join(_flatten(v) for v in raw) + "]"
    if isinstance(raw, dict):
        return ", ".join(sorted(f"{{{k}: {_flatten(v)}}}" for k, v in raw.items()))
    return f"failed to parse unexpected error type: {type(raw).__name__}"
