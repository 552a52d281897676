"""Schema drift detection for the tracker database.

Users can rename or delete columns in Notion at any time. Creating pages
against a drifted schema fails item by item with unhelpful messages, so the
column set is checked up front and a run is refused when anything is missing.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from src.notion_api.properties import (
    DATE_COLUMN,
    DIFFICULTY_COLUMN,
    NOTES_COLUMN,
    STATUS_COLUMN,
    TITLE_COLUMN,
    URL_COLUMN,
)

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [TITLE_COLUMN, DIFFICULTY_COLUMN, URL_COLUMN, DATE_COLUMN, NOTES_COLUMN]


def required_columns(include_status: bool = False) -> List[str]:
    columns = list(REQUIRED_COLUMNS)
    if include_status:
        columns.append(STATUS_COLUMN)
    return columns


@dataclass
class SchemaCheck:
    """Result of comparing a database's columns against the required set.

    Attributes:
        missing: Required column names absent from the database, in required order
        columns: Column name to Notion property type, as declared by the database
    """
    missing: List[str] = field(default_factory=list)
    columns: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.missing

    def remediation(self) -> str:
        missing_list = "\n".join(f"• {name}" for name in self.missing)
        return (
            f"Database schema is broken. Missing properties:\n\n{missing_list}\n\n"
            f"Please add these columns to your Notion database."
        )


class SchemaValidator:
    """Checks that the tracker database has every column the engine writes.

    Example:
        >>> check = SchemaValidator(api).validate(database_id)
        >>> if not check.ok:
        ...     print(check.remediation())
    """

    def __init__(self, api):
        self.api = api

    def validate(self, database_id: str, include_status: bool = False) -> SchemaCheck:
        """Fetch the database's columns and report missing ones.

        Raises:
            NotionError: If the database cannot be read (classified by kind)
        """
        database = self.api.get_database(database_id)
        declared = database.get("properties") or {}
        columns = {
            name: (definition or {}).get("type", "")
            for name, definition in declared.items()
        }

        missing = [name for name in required_columns(include_status) if name not in columns]
        if missing:
            logger.warning(f"Database {database_id} is missing column(s): {', '.join(missing)}")
        else:
            logger.debug(f"Database {database_id} schema OK ({len(columns)} columns)")

        return SchemaCheck(missing=missing, columns=columns)
