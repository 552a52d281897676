"""Test fixtures for problem tracker tests.

This module provides:
- Notion payload builders and an in-memory FakeNotionAPI
- Sample problem pages for scraper tests
- Problem factories
"""

from .notion_fixtures import (
    DATABASE_ID,
    PARENT_PAGE_ID,
    FakeNotionAPI,
    database_payload,
    tracker_page,
    workspace_page,
)
from .problem_fixtures import make_problem
from .sample_pages import (
    PAGE_WITH_BADGE,
    PAGE_WITH_JSON_ONLY,
    PAGE_WITH_CONTEXT_ONLY,
    PAGE_WITHOUT_DETAILS,
)

__all__ = [
    "DATABASE_ID",
    "PARENT_PAGE_ID",
    "FakeNotionAPI",
    "database_payload",
    "tracker_page",
    "workspace_page",
    "make_problem",
    "PAGE_WITH_BADGE",
    "PAGE_WITH_JSON_ONLY",
    "PAGE_WITH_CONTEXT_ONLY",
    "PAGE_WITHOUT_DETAILS",
]
