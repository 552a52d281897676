"""Typed exception hierarchy for Notion-related errors.

This module defines all custom exceptions used by the Notion client library.
Every Notion exception carries a ``kind`` so callers can branch on the class
of failure (authentication, not found, rate limiting, generic API failure,
unreachable) without inspecting messages.
"""

from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    """Classification of a failed Notion API call."""
    AUTH = "auth"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    API = "api"
    UNREACHABLE = "unreachable"


class SyncError(Exception):
    """Base exception for all problem-tracker-sync errors.

    Use this to catch any application-level error from the sync tool.
    """
    pass


class NotionError(SyncError):
    """Base exception for all Notion-related errors."""

    kind: FailureKind = FailureKind.API

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTokenError(NotionError):
    """Raised when the integration token is missing, invalid or revoked (HTTP 401)."""

    kind = FailureKind.AUTH

    def __init__(self, message: str = "API token is invalid"):
        super().__init__(message)


class ObjectNotFoundError(NotionError):
    """Raised when a database or page does not exist or is not shared (HTTP 404)."""

    kind = FailureKind.NOT_FOUND

    def __init__(self, object_id: str, message: Optional[str] = None):
        super().__init__(message or f"Object {object_id} not found")
        self.object_id = object_id


class RateLimitError(NotionError):
    """Raised when Notion answers HTTP 429."""

    kind = FailureKind.RATE_LIMITED

    def __init__(self, retry_after: Optional[float] = None, message: str = "Rate limited"):
        super().__init__(message)
        self.retry_after = retry_after


class APIAccessError(NotionError):
    """Raised for any other non-2xx response, or when retries are exhausted."""

    kind = FailureKind.API

    def __init__(
        self,
        message: str = "Notion API failure (after 3 retries)",
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.status_code = status_code


class APIUnreachableError(NotionError):
    """Raised when the Notion API is not available or the request timed out."""

    kind = FailureKind.UNREACHABLE

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint
