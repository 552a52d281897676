"""Data models for sync runs.

These are plain value objects returned by the engine; callers render them
and the engine keeps no presentation state of its own.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from src.notion_api.errors import FailureKind
from src.notion_api.properties import read_title, read_url
from src.problems.models import Problem


class SyncMode(str, Enum):
    PUSH = "push"
    BIDIRECTIONAL = "bidirectional"


class SyncPhase(str, Enum):
    """Phases of a single sync invocation.

    IDLE -> VALIDATING_SCHEMA -> SCHEMA_BROKEN (terminal)
                              -> DIFFING -> ADDING -> DELETING -> COMPLETED (terminal)

    FAILED marks a top-level API failure before any mutation; REJECTED marks
    an invocation refused because another run was in progress.
    """
    IDLE = "idle"
    VALIDATING_SCHEMA = "validating_schema"
    SCHEMA_BROKEN = "schema_broken"
    DIFFING = "diffing"
    ADDING = "adding"
    DELETING = "deleting"
    COMPLETED = "completed"
    FAILED = "failed"
    REJECTED = "rejected"


@dataclass
class RemotePage:
    """Read-only view of a tracker database row.

    Attributes:
        page_id: Notion page id
        url: Value of the URL column (None when empty)
        title: Value of the Problem column (None when empty)
    """
    page_id: str
    url: Optional[str]
    title: Optional[str] = None

    @classmethod
    def from_api(cls, page: Dict[str, Any]) -> "RemotePage":
        return cls(page_id=page.get("id", ""), url=read_url(page), title=read_title(page))


@dataclass
class SyncPlan:
    """Outcome of diffing local problems against the remote snapshot."""
    to_create: List[Problem] = field(default_factory=list)
    to_skip: List[Problem] = field(default_factory=list)
    to_archive: List[RemotePage] = field(default_factory=list)


@dataclass
class SyncResult:
    """Aggregate result of one sync invocation.

    Attributes:
        mode: Push-only or bidirectional
        phase: Terminal phase reached
        added: Pages created
        skipped: Local problems already present remotely
        deleted: Remote pages archived
        failed: Items whose create or archive call failed
        errors: One formatted message per failure, in processing order
        schema_broken: True when required columns are missing
        missing_properties: The missing column names
        error: Top-level failure message (schema broken, API failure, rejected)
        error_kind: Classification of a top-level API failure
    """
    mode: SyncMode
    phase: SyncPhase = SyncPhase.IDLE
    added: int = 0
    skipped: int = 0
    deleted: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)
    schema_broken: bool = False
    missing_properties: List[str] = field(default_factory=list)
    error: Optional[str] = None
    error_kind: Optional[FailureKind] = None

    @property
    def success(self) -> int:
        return self.added

    @property
    def ok(self) -> bool:
        return self.phase == SyncPhase.COMPLETED

    def first_errors(self, limit: int = 3) -> List[str]:
        return self.errors[:limit]

    def record_failure(self, message: str) -> None:
        self.failed += 1
        self.errors.append(message)
