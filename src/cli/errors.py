"""Typed exception hierarchy for CLI-related errors.

This module defines all custom exceptions used by the CLI.
All exceptions inherit from CLIError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import List

from src.notion_api.errors import SyncError


class CLIError(SyncError):
    """Base exception for all CLI-related errors."""
    pass


class NotConfiguredError(CLIError):
    """Raised when the Notion token or database id has not been set up."""

    def __init__(self, missing: List[str]):
        super().__init__(
            f"Sync is not configured (missing: {', '.join(missing)})"
        )
        self.missing = missing


class ProblemNotFoundError(CLIError):
    """Raised when a command references a problem id that is not stored."""

    def __init__(self, problem_id: str):
        super().__init__(f"No problem with id {problem_id}")
        self.problem_id = problem_id
