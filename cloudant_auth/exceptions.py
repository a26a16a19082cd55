"""Custom exceptions raised by the Cloudant auth client."""

from __future__ import annotations

from typing import Any, Optional


class CloudantAuthError(Exception):
    """Base exception for all credential derivation failures."""


class MissingInputError(CloudantAuthError):
    """Raised when a required configuration field is blank."""

    def __init__(self, field: str):
        super().__init__(f"Required field '{field}' is empty")
        self.field = field


class UpstreamRejectedError(CloudantAuthError):
    """Raised when IAM or Cloudant answers with a non-200 status."""

    def __init__(self, message: str, status_code: int, response: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:  # pragma: no cover - repr helper
        return f"{self.status_code}: {self.message}"


class AuthenticationError(UpstreamRejectedError):
    """Raised when the supplied API key or username/password is rejected."""


class MalformedResponseError(CloudantAuthError):
    """Raised when a successful response lacks the expected token or cookie."""


class TransportError(CloudantAuthError):
    """Raised when the HTTP request could not be completed."""
