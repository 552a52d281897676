"""Typed exceptions raised by sync engine helpers."""

from src.notion_api.errors import SyncError


class SyncEngineError(SyncError):
    """Base exception for sync engine errors."""
    pass


class ProvisioningError(SyncEngineError):
    """Raised when a tracker database cannot be set up."""

    def __init__(self, message: str):
        super().__init__(message)
