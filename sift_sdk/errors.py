"""Structured exceptions for the Sift SDK."""

from __future__ import annotations

from typing import Any, Optional

# HTTP statuses whose bodies describe a rejected request shape or credential.
VALIDATION_STATUS_CODES = frozenset({400, 401, 403, 422})


class SiftError(Exception):
    """Base exception for all Sift SDK errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ServerError(SiftError):
    """Transport, timeout or (de)serialization failure.

    Also raised when the API answers without a body on a call that needs one.
    Carries only a message, no status code.
    """

    def __str__(self) -> str:
        return f"Sift server error: {self.message}"


class ConfigurationError(ServerError):
    """A client-level setting required by the call is missing.

    Raised locally, before any request is sent.
    """
    pass


class RequestError(SiftError):
    """The API processed the request but answered with a non-zero status.

    See https://sift.com/developers/docs/curl/events-api/error-codes
    """

    def __init__(self, status: int, error_message: str) -> None:
        self.status = status
        self.error_message = error_message
        super().__init__(error_message)

    def __str__(self) -> str:
        return f"Sift error ({self.status}): {self.error_message}"


class ValidationError(SiftError):
    """HTTP 400/401/403/422: the request shape or credentials were rejected."""

    def __init__(
        self,
        http_status: int,
        message: str,
        issues: Any = None,
    ) -> None:
        self.http_status = http_status
        self.issues = issues
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.http_status}] {self.message}"


def _message_from_body(body: Any) -> str:
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict):
            return str(err.get("message", body))
        return str(
            body.get("error_message")
            or body.get("message")
            or body.get("description")
            or body
        )
    return str(body)


def is_error_body(body: Any) -> bool:
    """True when ``body`` has the API's ``{status, error_message}`` error shape."""
    return (
        isinstance(body, dict)
        and isinstance(body.get("status"), int)
        and not isinstance(body.get("status"), bool)
        and isinstance(body.get("error_message"), str)
    )


def error_from_response(http_status: int, body: Optional[Any]) -> SiftError:
    """Map a non-success HTTP reply to the matching SDK exception.

    ``body`` is the decoded JSON body, the raw text when it was not JSON, or
    ``None`` when the reply was empty.
    """
    if is_error_body(body):
        return RequestError(body["status"], body["error_message"])
    if http_status in VALIDATION_STATUS_CODES:
        issues = body if isinstance(body, (dict, list)) else None
        message = _message_from_body(body) if body else f"HTTP {http_status}"
        return ValidationError(http_status, message, issues)
    if body is None or body == "":
        return ServerError(f"HTTP {http_status} with empty response body")
    return ServerError(f"HTTP {http_status}: {_message_from_body(body)}")
