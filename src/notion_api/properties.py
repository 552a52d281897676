"""Conversion between problems and Notion's structured property format.

Notion stores each database column as a typed property object. The tracker
database uses:

    Problem     title      [{"type": "text", "text": {"content": ...}}]
    Difficulty  select     {"name": "Easy"}
    Status      select     {"name": "Solved"}   (optional schema variant)
    URL         url        "https://..."
    Date Added  date       {"start": "YYYY-MM-DD"}
    Notes       rich_text  [{"type": "text", "text": {"content": ...}}]
"""

from typing import Any, Dict, List, Optional

from src.problems.models import Difficulty, Problem, ProblemStatus

TITLE_COLUMN = 'Problem'
DIFFICULTY_COLUMN = 'Difficulty'
STATUS_COLUMN = 'Status'
URL_COLUMN = 'URL'
DATE_COLUMN = 'Date Added'
NOTES_COLUMN = 'Notes'

DIFFICULTY_COLORS = {
    Difficulty.EASY: 'green',
    Difficulty.MEDIUM: 'yellow',
    Difficulty.HARD: 'red',
}

STATUS_COLORS = {
    ProblemStatus.NOT_STARTED: 'gray',
    ProblemStatus.ATTEMPTED: 'orange',
    ProblemStatus.SOLVED: 'green',
}

# Notion rejects rich text items longer than 2000 characters
_RICH_TEXT_LIMIT = 2000


def _text_items(text: str) -> List[Dict[str, Any]]:
    text = text or ""
    if not text:
        return [{"type": "text", "text": {"content": ""}}]
    return [
        {"type": "text", "text": {"content": text[start:start + _RICH_TEXT_LIMIT]}}
        for start in range(0, len(text), _RICH_TEXT_LIMIT)
    ]


def title_property(text: str) -> Dict[str, Any]:
    return {"title": _text_items(text)}


def rich_text_property(text: str) -> Dict[str, Any]:
    return {"rich_text": _text_items(text)}


def select_property(name: str) -> Dict[str, Any]:
    return {"select": {"name": name}}


def url_property(url: str) -> Dict[str, Any]:
    return {"url": url}


def date_property(iso_timestamp: str) -> Dict[str, Any]:
    """Date property from an ISO timestamp, truncated at the 'T' separator."""
    return {"date": {"start": iso_timestamp.split('T')[0]}}


def build_problem_properties(problem: Problem, include_status: bool = False) -> Dict[str, Any]:
    """Full property set for creating a page from a local problem."""
    properties: Dict[str, Any] = {TITLE_COLUMN: title_property(problem.title)}
    if problem.difficulty:
        properties[DIFFICULTY_COLUMN] = select_property(problem.difficulty.value)
    if include_status and problem.status:
        properties[STATUS_COLUMN] = select_property(problem.status.value)
    properties[URL_COLUMN] = url_property(problem.url)
    properties[DATE_COLUMN] = date_property(problem.date_added)
    if problem.notes:
        properties[NOTES_COLUMN] = rich_text_property(problem.notes)
    return properties


def build_update_properties(
    title: Optional[str] = None,
    difficulty: Optional[Difficulty] = None,
    notes: Optional[str] = None,
    date_added: Optional[str] = None,
    status: Optional[ProblemStatus] = None,
) -> Dict[str, Any]:
    """Partial property set containing only the fields being changed.

    None means "leave unchanged"; an empty title or notes string clears the column.
    """
    properties: Dict[str, Any] = {}
    if title is not None:
        properties[TITLE_COLUMN] = title_property(title)
    if difficulty is not None:
        properties[DIFFICULTY_COLUMN] = select_property(difficulty.value)
    if status is not None:
        properties[STATUS_COLUMN] = select_property(status.value)
    if notes is not None:
        properties[NOTES_COLUMN] = rich_text_property(notes)
    if date_added:
        properties[DATE_COLUMN] = date_property(date_added)
    return properties


def tracker_database_schema(include_status: bool = False) -> Dict[str, Any]:
    """Column definitions for a new tracker database."""
    schema: Dict[str, Any] = {
        TITLE_COLUMN: {"title": {}},
        DIFFICULTY_COLUMN: {
            "select": {
                "options": [
                    {"name": d.value, "color": color}
                    for d, color in DIFFICULTY_COLORS.items()
                ]
            }
        },
    }
    if include_status:
        schema[STATUS_COLUMN] = {
            "select": {
                "options": [
                    {"name": s.value, "color": color}
                    for s, color in STATUS_COLORS.items()
                ]
            }
        }
    schema[URL_COLUMN] = {"url": {}}
    schema[DATE_COLUMN] = {"date": {}}
    schema[NOTES_COLUMN] = {"rich_text": {}}
    return schema


def _plain_text(items: Any) -> str:
    if not isinstance(items, list):
        return ""
    parts = []
    for item in items:
        if not isinstance(item, dict):
            continue
        text = item.get("plain_text") or (item.get("text") or {}).get("content") or ""
        parts.append(text)
    return "".join(parts)


def read_url(page: Dict[str, Any]) -> Optional[str]:
    """URL property of a tracker page, or None when absent or empty."""
    prop = (page.get("properties") or {}).get(URL_COLUMN) or {}
    url = prop.get("url")
    return url or None


def read_title(page: Dict[str, Any]) -> Optional[str]:
    """Problem title of a tracker page, or None when absent."""
    prop = (page.get("properties") or {}).get(TITLE_COLUMN) or {}
    return _plain_text(prop.get("title")) or None


def page_title(page: Dict[str, Any]) -> Optional[str]:
    """Title of an arbitrary page, whatever its title property is called."""
    properties = page.get("properties") or {}
    for name in ("title", "Name"):
        text = _plain_text((properties.get(name) or {}).get("title"))
        if text:
            return text
    for prop in properties.values():
        if isinstance(prop, dict) and prop.get("type") == "title":
            text = _plain_text(prop.get("title"))
            if text:
                return text
    return None
