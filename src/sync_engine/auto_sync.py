"""Post-commit hook that mirrors a newly added problem.

The caller invokes after_add() once a local add has been saved. The hook is
independent from the add itself: a failing or skipped auto-sync never undoes
the local change, and the reconciler stays callable on its own.
"""

import logging
from typing import Optional

from src.notion_api.errors import SyncError
from src.problems.models import Problem

from .models import SyncResult
from .reconciler import Reconciler

logger = logging.getLogger(__name__)


class AutoSyncHook:
    """Runs a one-way push of a single problem when auto-sync is enabled.

    Args:
        reconciler_factory: Callable taking a SyncConfig and returning a Reconciler
        config_loader: Object whose load() returns a fresh SyncConfig
    """

    def __init__(self, reconciler_factory, config_loader):
        self.reconciler_factory = reconciler_factory
        self.config_loader = config_loader

    def after_add(self, problem: Problem) -> Optional[SyncResult]:
        """Mirror ``problem`` if auto-sync is on.

        Returns:
            The push result, or None when auto-sync is off or not configured
        """
        try:
            config = self.config_loader.load()
        except SyncError as e:
            logger.debug(f"Auto-sync skipped: {e}")
            return None

        if not config.auto_sync:
            return None

        reconciler: Reconciler = self.reconciler_factory(config)
        logger.info(f"Auto-syncing {problem.title}")
        return reconciler.sync_local_to_remote(
            [problem], config.database_id, include_status=config.include_status
        )
