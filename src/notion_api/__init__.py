"""Notion client library for problem tracker sync.

This package provides Python abstractions over the Notion REST API,
covering the database and page operations the sync engine relies on.
"""

from .errors import (
    SyncError,
    FailureKind,
    NotionError,
    InvalidTokenError,
    ObjectNotFoundError,
    RateLimitError,
    APIAccessError,
    APIUnreachableError,
)

__all__ = [
    "SyncError",
    "FailureKind",
    "NotionError",
    "InvalidTokenError",
    "ObjectNotFoundError",
    "RateLimitError",
    "APIAccessError",
    "APIUnreachableError",
]
