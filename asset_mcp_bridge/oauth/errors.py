"""Error types specific to the OAuth token exchange.

Purpose:
- Provide typed exceptions thrown by `OAuthTokenClient`.
- Expose HTTP-oriented context (upstream status code, truncated body) so the
  caller can see why the provider refused the exchange.

Usage:
- Catch `OAuthExchangeError` for any failure and inspect `status_code`,
  `details`, and `http_status` (the status this service should answer with).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

PREVIEW_CHARS = 200


def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    return text[:limit]


class OAuthExchangeError(Exception):
    """Base error for token exchange failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code returned by the token endpoint.
        details: Optional payload from the token endpoint (JSON or truncated text).
    """

    http_status = 502

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": str(self)}
        if self.status_code is not None:
            payload["status"] = self.status_code
        if self.details is not None:
            payload["response_preview"] = self.details
        return payload


class UpstreamHTTPError(OAuthExchangeError):
    """The token endpoint answered with a non-2xx status."""


class UpstreamHtmlError(OAuthExchangeError):
    """The token endpoint answered with an HTML page instead of JSON."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__("Token endpoint returned HTML instead of JSON", status_code=status_code, details=preview(body))


class UpstreamResponseError(OAuthExchangeError):
    """The token endpoint body could not be parsed as JSON."""

    def __init__(self, status_code: int, body: str, parse_error: str) -> None:
        super().__init__("Failed to parse token endpoint response", status_code=status_code, details=preview(body))
        self.parse_error = parse_error

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["parse_error"] = self.parse_error
        return payload


class MissingAccessTokenError(OAuthExchangeError):
    """The token endpoint answered with JSON that has no access_token."""

    http_status = 400

    def __init__(self, status_code: int, body: Any) -> None:
        super().__init__("No access_token in token endpoint response", status_code=status_code, details=body)

    def to_payload(self) -> Dict[str, Any]:
        return {"error": str(self), "upstream_response": self.details}


class OAuthTransportError(OAuthExchangeError):
    """The token endpoint could not be reached."""

    http_status = 500
