"""Factories for Problem records."""

from typing import Optional

from src.problems.models import Difficulty, Problem, ProblemStatus
from src.problems.url_normalizer import extract_slug

BASE_URL = "https://leetcode.com/problems"


def make_problem(
    slug: str = "two-sum",
    title: Optional[str] = None,
    url: Optional[str] = None,
    difficulty: Optional[Difficulty] = Difficulty.EASY,
    status: Optional[ProblemStatus] = None,
    notes: Optional[str] = None,
    problem_id: Optional[str] = None,
    date_added: str = "2024-01-15T10:30:00.000Z",
) -> Problem:
    url = url or f"{BASE_URL}/{slug}/"
    return Problem(
        id=problem_id or f"id-{slug}",
        title=title or " ".join(part.capitalize() for part in slug.split("-")),
        url=url,
        slug=extract_slug(url),
        date_added=date_added,
        difficulty=difficulty,
        status=status,
        notes=notes,
    )
