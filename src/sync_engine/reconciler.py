"""Reconciliation engine between the local collection and the Notion database.

Two entry points share one run loop:

- sync_local_to_remote(): create remote pages for local problems the
  database does not have yet; everything else is left alone.
- sync_bidirectional(): the same push, then archive remote pages whose
  problem no longer exists locally.

Each run validates the schema, takes one snapshot of the database, diffs it
against the local problems by normalized URL, then mutates item by item with a
fixed delay between calls to stay under Notion's 3 requests/second limit.
A failing item is recorded and the batch continues. The entry points always
return a SyncResult and never raise.
"""

import logging
import threading
import time
from typing import Callable, List, Optional

from src.notion_api.errors import NotionError
from src.notion_api.properties import build_problem_properties
from src.problems.models import Problem

from .models import RemotePage, SyncMode, SyncPhase, SyncResult
from .planner import build_sync_plan
from .schema_validator import SchemaValidator
from .sync_lock import SyncLock

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_DELAY = 0.35


class RequestThrottle:
    """Spaces consecutive mutating calls by a fixed delay.

    The first call of a run goes out immediately; each later call waits
    ``delay`` seconds first, so no sleep follows the last call of a batch.
    """

    def __init__(self, delay: float = DEFAULT_REQUEST_DELAY, sleep: Callable[[float], None] = time.sleep):
        self.delay = delay
        self._sleep = sleep
        self._calls = 0

    def wait(self) -> None:
        if self._calls and self.delay > 0:
            self._sleep(self.delay)
        self._calls += 1


class Reconciler:
    """Drives create/archive operations that make Notion match local problems.

    Only one run may be in flight. Overlapping runs on the same Reconciler
    are refused through an in-memory lock; with ``lock_path`` set, runs in
    other processes that share the lock file are refused too. A refused run
    ends with phase REJECTED instead of racing the first one.

    Example:
        >>> reconciler = Reconciler(NotionAPI(Authenticator()))
        >>> result = reconciler.sync_bidirectional(store.get_problems(), database_id)
        >>> print(result.added, result.deleted, result.skipped, result.failed)
    """

    def __init__(
        self,
        api,
        validator: Optional[SchemaValidator] = None,
        delay: float = DEFAULT_REQUEST_DELAY,
        sleep: Callable[[float], None] = time.sleep,
        lock_path: Optional[str] = None,
    ):
        """Initialize the reconciler.

        Args:
            api: NotionAPI (or compatible) used for all remote calls
            validator: SchemaValidator (defaults to one over the same api)
            delay: Seconds between consecutive mutating calls
            sleep: Sleep function, injectable for tests
            lock_path: File used to detect syncs running in other processes
        """
        self.api = api
        self.validator = validator or SchemaValidator(api)
        self.delay = delay
        self._sleep = sleep
        self._run_lock = threading.Lock()
        self._sync_lock = SyncLock(lock_path) if lock_path else None

    @property
    def in_progress(self) -> bool:
        if self._run_lock.locked():
            return True
        return bool(self._sync_lock and self._sync_lock.is_locked_elsewhere())

    def sync_local_to_remote(
        self,
        problems: List[Problem],
        database_id: str,
        include_status: bool = False,
    ) -> SyncResult:
        """Create remote pages for local problems that are not in the database."""
        return self._run(SyncMode.PUSH, problems, database_id, include_status)

    def sync_bidirectional(
        self,
        problems: List[Problem],
        database_id: str,
        include_status: bool = False,
    ) -> SyncResult:
        """Push missing problems, then archive remote pages absent locally."""
        return self._run(SyncMode.BIDIRECTIONAL, problems, database_id, include_status)

    def _run(
        self,
        mode: SyncMode,
        problems: List[Problem],
        database_id: str,
        include_status: bool,
    ) -> SyncResult:
        result = SyncResult(mode=mode)

        if not self._run_lock.acquire(blocking=False):
            logger.warning("Sync rejected: another sync is already in progress")
            return self._reject(result)

        try:
            if not self._acquire_sync_lock(result):
                return result
            try:
                self._execute(result, list(problems), database_id, include_status)
            except Exception as e:
                # Anything escaping the per-item guards happened before mutations began
                logger.exception("Unexpected error during sync")
                result.phase = SyncPhase.FAILED
                result.error = f"Unexpected error: {e}"
            finally:
                if self._sync_lock:
                    self._sync_lock.release()
        finally:
            self._run_lock.release()

        logger.info(
            f"{mode.value.capitalize()} sync finished ({result.phase.value}): "
            f"{result.added} added, {result.deleted} deleted, "
            f"{result.skipped} skipped, {result.failed} failed"
        )
        return result

    @staticmethod
    def _reject(result: SyncResult) -> SyncResult:
        result.phase = SyncPhase.REJECTED
        result.error = "Sync already in progress"
        return result

    def _acquire_sync_lock(self, result: SyncResult) -> bool:
        """Take the cross-process lock, marking ``result`` when that fails."""
        if self._sync_lock is None:
            return True
        try:
            acquired = self._sync_lock.try_acquire()
        except OSError as e:
            logger.error(f"Cannot open sync lock {self._sync_lock.path}: {e}")
            result.phase = SyncPhase.FAILED
            result.error = f"Cannot open sync lock: {e}"
            return False
        if not acquired:
            logger.warning(f"Sync rejected: {self._sync_lock.path} is held by another process")
            self._reject(result)
        return acquired

    def _execute(
        self,
        result: SyncResult,
        problems: List[Problem],
        database_id: str,
        include_status: bool,
    ) -> None:
        result.phase = SyncPhase.VALIDATING_SCHEMA
        try:
            check = self.validator.validate(database_id, include_status=include_status)
        except NotionError as e:
            self._fail(result, e, "Failed to read database schema")
            return

        if not check.ok:
            result.phase = SyncPhase.SCHEMA_BROKEN
            result.schema_broken = True
            result.missing_properties = list(check.missing)
            result.error = check.remediation()
            return

        result.phase = SyncPhase.DIFFING
        try:
            remote_pages = [RemotePage.from_api(page) for page in self.api.query_database(database_id)]
        except NotionError as e:
            self._fail(result, e, "Failed to read Notion database")
            return

        bidirectional = result.mode == SyncMode.BIDIRECTIONAL
        plan = build_sync_plan(problems, remote_pages, bidirectional=bidirectional)
        logger.info(
            f"Local problems: {len(problems)}, Notion pages: {len(remote_pages)} "
            f"({len(plan.to_create)} to add, {len(plan.to_skip)} already present, "
            f"{len(plan.to_archive)} to delete)"
        )

        for problem in plan.to_skip:
            result.skipped += 1
            logger.debug(f"Skipped: {problem.title} (already exists)")

        throttle = RequestThrottle(self.delay, self._sleep)

        result.phase = SyncPhase.ADDING
        for problem in plan.to_create:
            self._create(result, throttle, problem, database_id, include_status)

        if bidirectional:
            result.phase = SyncPhase.DELETING
            for page in plan.to_archive:
                self._archive(result, throttle, page)

        result.phase = SyncPhase.COMPLETED

    def _create(
        self,
        result: SyncResult,
        throttle: RequestThrottle,
        problem: Problem,
        database_id: str,
        include_status: bool,
    ) -> None:
        try:
            throttle.wait()
            self.api.create_page(database_id, build_problem_properties(problem, include_status))
            result.added += 1
            logger.info(f"Added: {problem.title}")
        except Exception as e:
            result.record_failure(f"{problem.title}: {e}")
            logger.error(f"Failed to add: {problem.title} - {e}")

    def _archive(self, result: SyncResult, throttle: RequestThrottle, page: RemotePage) -> None:
        title = page.title or page.url or page.page_id
        try:
            throttle.wait()
            self.api.archive_page(page.page_id)
            result.deleted += 1
            logger.info(f"Deleted: {title}")
        except Exception as e:
            result.record_failure(f"Delete failed ({title}): {e}")
            logger.error(f"Failed to delete: {title} - {e}")

    @staticmethod
    def _fail(result: SyncResult, error: NotionError, context: str) -> None:
        logger.error(f"{context}: {error}")
        result.phase = SyncPhase.FAILED
        result.error = f"{context}: {error.message}"
        result.error_kind = error.kind
