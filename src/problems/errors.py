"""Typed exception hierarchy for the local problem store and page scraper."""

from typing import Optional

from src.notion_api.errors import SyncError


class ProblemsError(SyncError):
    """Base exception for local problem collection errors."""
    pass


class StoreError(ProblemsError):
    """Raised when the store file is malformed or a record fails validation."""

    def __init__(self, message: str, field: Optional[str] = None):
        if field:
            full_message = f"Store error in field '{field}': {message}"
        else:
            full_message = f"Store error: {message}"
        super().__init__(full_message)
        self.field = field
        self.original_message = message


class StoreFilesystemError(ProblemsError):
    """Raised when store file filesystem operations fail."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Store file operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ScrapeError(ProblemsError):
    """Raised when a problem page cannot be fetched or parsed."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Could not scrape {url}: {reason}")
        self.url = url
        self.reason = reason
