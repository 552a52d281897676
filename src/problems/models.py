"""Data models for the local problem collection.

All models use dataclasses for clean, type-safe data structures,
following the same patterns as the rest of the code base.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, UTC
from enum import Enum
from typing import Any, Dict, Optional

from .errors import StoreError
from .url_normalizer import extract_slug


class Difficulty(str, Enum):
    """Problem difficulty as shown on the archive site."""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class ProblemStatus(str, Enum):
    """Progress on a problem (only mirrored when the database has a Status column)."""
    NOT_STARTED = "Not Started"
    ATTEMPTED = "Attempted"
    SOLVED = "Solved"


def utc_now_iso() -> str:
    """Current time as an ISO 8601 string with a Z suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Problem:
    """A tracked coding-practice problem.

    Attributes:
        id: Opaque identifier, unique within the local collection
        title: Problem title
        url: Problem URL as visited
        slug: Path segment identifying the problem (dedup key in the store)
        date_added: ISO 8601 creation timestamp
        difficulty: Optional difficulty
        status: Optional progress status
        notes: Optional free-text notes

    Example:
        >>> problem = Problem.create("Two Sum", "https://leetcode.com/problems/two-sum/")
        >>> problem.slug
        'two-sum'
    """
    id: str
    title: str
    url: str
    slug: str
    date_added: str
    difficulty: Optional[Difficulty] = None
    status: Optional[ProblemStatus] = None
    notes: Optional[str] = None

    @classmethod
    def create(
        cls,
        title: str,
        url: str,
        difficulty: Optional[Difficulty] = None,
        status: Optional[ProblemStatus] = None,
        notes: Optional[str] = None,
    ) -> "Problem":
        """Build a fresh record with a new id, derived slug and current timestamp."""
        return cls(
            id=uuid.uuid4().hex,
            title=title,
            url=url,
            slug=extract_slug(url),
            date_added=utc_now_iso(),
            difficulty=difficulty,
            status=status,
            notes=notes,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'url': self.url,
            'slug': self.slug,
            'difficulty': self.difficulty.value if self.difficulty else None,
            'status': self.status.value if self.status else None,
            'date_added': self.date_added,
            'notes': self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Problem":
        """Parse a stored mapping back into a Problem.

        Raises:
            StoreError: If a required field is missing or an enum value is unknown
        """
        if not isinstance(data, dict):
            raise StoreError(f"Problem entry must be a mapping, got {type(data).__name__}")

        for required in ('id', 'title', 'url'):
            if not data.get(required):
                raise StoreError(f"Problem entry is missing '{required}'", required)

        try:
            difficulty = Difficulty(data['difficulty']) if data.get('difficulty') else None
            status = ProblemStatus(data['status']) if data.get('status') else None
        except ValueError as e:
            raise StoreError(str(e)) from e

        return cls(
            id=str(data['id']),
            title=str(data['title']),
            url=str(data['url']),
            slug=data.get('slug') or extract_slug(str(data['url'])),
            date_added=str(data.get('date_added') or utc_now_iso()),
            difficulty=difficulty,
            status=status,
            notes=data.get('notes'),
        )
