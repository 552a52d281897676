"""Data models for CLI operations.

All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, validation failures)
    - SCHEMA_ERROR (2): Notion database is missing required columns
    - AUTH_ERROR (3): Invalid or missing Notion token
    - NETWORK_ERROR (4): Network connectivity or API availability issues
    - PARTIAL_FAILURE (5): Sync completed but some items failed

    Example:
        >>> sys.exit(ExitCode.SUCCESS)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    SCHEMA_ERROR = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    PARTIAL_FAILURE = 5


@dataclass
class SyncConfig:
    """Settings needed for one sync invocation.

    Loaded fresh for every operation and never cached, so a rotated or
    revoked token is picked up immediately.

    Attributes:
        token: Notion integration token (secret)
        database_id: Target tracker database id
        parent_page_id: Page the database was created under (informational)
        parent_page_title: Title of that page (informational)
        auto_sync: Mirror problems to Notion right after they are added
        include_status: Database uses the variant schema with a Status column
        lock_path: File that marks a sync in progress for this store
    """
    token: str
    database_id: str
    parent_page_id: Optional[str] = None
    parent_page_title: Optional[str] = None
    auto_sync: bool = False
    include_status: bool = False
    lock_path: Optional[str] = None
