"""Provisioning of the tracker database.

Lists the pages an integration can use as a parent and creates a database
with the tracker schema under one of them.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from src.notion_api.properties import TITLE_COLUMN, page_title, tracker_database_schema

from .errors import ProvisioningError

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_TITLE = "Problem Tracker"
UNTITLED_PAGE = "Untitled Page"


@dataclass
class ParentPage:
    id: str
    title: str
    url: Optional[str] = None


class DatabaseProvisioner:
    """Finds parent pages and creates tracker databases."""

    def __init__(self, api):
        self.api = api

    def list_parent_pages(self) -> List[ParentPage]:
        """Pages usable as a database parent.

        Excludes database rows (including our own tracker entries, which carry
        a Problem property) and anything not under the workspace or a page.
        """
        pages = []
        for item in self.api.search_pages():
            if item.get("object") != "page":
                continue
            parent_type = (item.get("parent") or {}).get("type")
            if parent_type not in ("workspace", "page_id"):
                continue
            if TITLE_COLUMN in (item.get("properties") or {}):
                continue
            pages.append(ParentPage(
                id=item.get("id", ""),
                title=page_title(item) or UNTITLED_PAGE,
                url=item.get("url"),
            ))
        logger.debug(f"Found {len(pages)} candidate parent page(s)")
        return pages

    def create_tracker_database(
        self,
        parent_page_id: Optional[str] = None,
        title: str = DEFAULT_DATABASE_TITLE,
        include_status: bool = False,
    ) -> str:
        """Create a tracker database and return its id.

        Without an explicit parent, the first accessible page is used.

        Raises:
            ProvisioningError: If no parent page is available
            NotionError: If the API rejects the request
        """
        if not parent_page_id:
            candidates = self.list_parent_pages()
            if not candidates:
                raise ProvisioningError("No accessible pages found in workspace")
            parent_page_id = candidates[0].id
            logger.info(f"Using parent page: {candidates[0].title} ({parent_page_id})")

        database = self.api.create_database(
            parent_page_id,
            title,
            tracker_database_schema(include_status),
        )
        database_id = database.get("id")
        if not database_id:
            raise ProvisioningError("Notion did not return an id for the new database")

        logger.info(f"Database created: {database_id}")
        return database_id
