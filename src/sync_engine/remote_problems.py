"""Single-problem operations against the tracker database.

Used outside full reconciliation: removing the remote copy of a locally
deleted problem and pushing edits (notes, difficulty, status) of a problem
that already exists remotely.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from src.notion_api.errors import NotionError
from src.notion_api.properties import build_update_properties
from src.problems.models import Difficulty, ProblemStatus
from src.problems.url_normalizer import normalize_url

from .models import RemotePage
from .reconciler import DEFAULT_REQUEST_DELAY, RequestThrottle

logger = logging.getLogger(__name__)


@dataclass
class MirrorResult:
    """Outcome of a single-problem remote operation.

    Attributes:
        ok: True when every remote call succeeded
        message: Human-readable summary
        page_ids: Pages created, archived or updated
        failures: One message per failed call
    """
    ok: bool
    message: str
    page_ids: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)


class ProblemMirror:
    """Archives and updates individual tracker pages."""

    def __init__(
        self,
        api,
        delay: float = DEFAULT_REQUEST_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api = api
        self.delay = delay
        self._sleep = sleep

    def _matching_pages(self, url: str, database_id: str) -> List[RemotePage]:
        target = normalize_url(url)
        pages = [RemotePage.from_api(page) for page in self.api.query_database(database_id)]
        return [page for page in pages if page.url and normalize_url(page.url) == target]

    def remove_problem(self, url: str, database_id: str) -> MirrorResult:
        """Archive every page whose normalized URL matches ``url``."""
        try:
            matches = self._matching_pages(url, database_id)
        except NotionError as e:
            logger.error(f"Remove problem from Notion error: {e}")
            return MirrorResult(ok=False, message=str(e), failures=[str(e)])

        if not matches:
            return MirrorResult(ok=True, message="Problem not found in Notion database")

        throttle = RequestThrottle(self.delay, self._sleep)
        result = MirrorResult(ok=True, message="")
        for page in matches:
            try:
                throttle.wait()
                self.api.archive_page(page.page_id)
                result.page_ids.append(page.page_id)
            except NotionError as e:
                result.failures.append(f"{page.page_id}: {e}")
                logger.error(f"Failed to archive page {page.page_id}: {e}")

        result.ok = not result.failures
        result.message = f"Deleted {len(result.page_ids)} problem(s) from Notion"
        if result.failures:
            result.message += f", {len(result.failures)} failed"
        return result

    def update_problem(
        self,
        url: str,
        database_id: str,
        title: Optional[str] = None,
        difficulty: Optional[Difficulty] = None,
        notes: Optional[str] = None,
        date_added: Optional[str] = None,
        status: Optional[ProblemStatus] = None,
    ) -> MirrorResult:
        """Patch the given fields of the first page matching ``url``."""
        properties = build_update_properties(
            title=title, difficulty=difficulty, notes=notes,
            date_added=date_added, status=status,
        )
        if not properties:
            return MirrorResult(ok=True, message="Nothing to update")

        try:
            matches = self._matching_pages(url, database_id)
            if not matches:
                return MirrorResult(ok=False, message="Problem not found in Notion database")
            page_id = matches[0].page_id
            self.api.update_page(page_id, properties)
        except NotionError as e:
            logger.error(f"Update problem error: {e}")
            return MirrorResult(ok=False, message=str(e), failures=[str(e)])

        logger.info(f"Problem updated in Notion: {url}")
        return MirrorResult(ok=True, message="Updated problem in Notion", page_ids=[page_id])
