"""Sync command orchestration for CLI.

This module provides the SyncCommand class that runs one reconciliation
between the local store and the Notion database: it loads configuration,
hands the local problems to the Reconciler, records the sync time and
translates the SyncResult into terminal output and an exit code.
"""

import logging
from typing import Callable, Optional

from src.notion_api.api_wrapper import NotionAPI
from src.notion_api.auth import Authenticator
from src.notion_api.errors import FailureKind, NotionError
from src.problems.errors import ProblemsError
from src.problems.store import LocalStore
from src.sync_engine.models import SyncPhase, SyncResult
from src.sync_engine.reconciler import Reconciler

from .config import ConfigLoader
from .errors import CLIError, NotConfiguredError
from .models import ExitCode, SyncConfig
from .output import OutputHandler

logger = logging.getLogger(__name__)

FAILURE_EXIT_CODES = {
    FailureKind.AUTH: ExitCode.AUTH_ERROR,
    FailureKind.NOT_FOUND: ExitCode.GENERAL_ERROR,
    FailureKind.RATE_LIMITED: ExitCode.NETWORK_ERROR,
    FailureKind.API: ExitCode.NETWORK_ERROR,
    FailureKind.UNREACHABLE: ExitCode.NETWORK_ERROR,
}

FAILURE_MESSAGES = {
    FailureKind.AUTH: "Invalid Notion API token. Check NOTION_TOKEN and that the integration is still active.",
    FailureKind.NOT_FOUND: "Database not found. Check the database id and that it is shared with the integration.",
    FailureKind.UNREACHABLE: "Notion API is unreachable. Check your internet connection and try again.",
}


def build_reconciler(config: SyncConfig) -> Reconciler:
    """Reconciler bound to the token of one freshly loaded config."""
    return Reconciler(NotionAPI(Authenticator(token=config.token)), lock_path=config.lock_path)


def report_not_configured(output: OutputHandler, error: NotConfiguredError) -> ExitCode:
    output.error(str(error))
    output.print("Set NOTION_TOKEN in your environment (or .env) and run:")
    output.print("  problem-tracker configure --database-id <id>")
    output.print("or create a database with:")
    output.print("  problem-tracker create-db")
    return ExitCode.GENERAL_ERROR


def report_notion_error(output: OutputHandler, error: NotionError) -> ExitCode:
    """Render a classified Notion failure and map it to an exit code."""
    logger.error(f"Notion API error: {error}")
    output.error(FAILURE_MESSAGES.get(error.kind, f"Notion API error: {error}"))
    return FAILURE_EXIT_CODES.get(error.kind, ExitCode.GENERAL_ERROR)


class SyncCommand:
    """Runs a push-only or bidirectional sync for the CLI.

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> sync_cmd = SyncCommand(store=LocalStore(path), output_handler=output)
        >>> exit_code = sync_cmd.run(bidirectional=True)
    """

    def __init__(
        self,
        store: LocalStore,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        config_loader: Optional[ConfigLoader] = None,
        reconciler_factory: Optional[Callable[[SyncConfig], Reconciler]] = None,
    ):
        """Initialize sync command with dependencies.

        Args:
            store: LocalStore holding problems and settings
            output_handler: OutputHandler for terminal output (optional)
            authenticator: Secret provider for the token (optional)
            config_loader: ConfigLoader (optional, built from store and authenticator)
            reconciler_factory: Builds a Reconciler for a config (optional)
        """
        self.store = store
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator or Authenticator()
        self.config_loader = config_loader or ConfigLoader(store, self.authenticator)
        self.reconciler_factory = reconciler_factory or build_reconciler

    def run(self, bidirectional: bool = True) -> ExitCode:
        """Execute one sync.

        Args:
            bidirectional: Also archive remote pages missing locally

        Returns:
            ExitCode indicating success or specific failure type
        """
        try:
            config = self.config_loader.load()
            problems = self.store.get_problems()
        except NotConfiguredError as e:
            return report_not_configured(self.output_handler, e)
        except (ProblemsError, CLIError) as e:
            logger.error(f"Cannot start sync: {e}")
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        reconciler = self.reconciler_factory(config)
        mode = "bidirectional" if bidirectional else "push-only"
        logger.info(f"Starting {mode} sync of {len(problems)} problem(s)")

        with self.output_handler.spinner("Syncing with Notion..."):
            if bidirectional:
                result = reconciler.sync_bidirectional(
                    problems, config.database_id, include_status=config.include_status
                )
            else:
                result = reconciler.sync_local_to_remote(
                    problems, config.database_id, include_status=config.include_status
                )

        return self._report(result)

    def _report(self, result: SyncResult) -> ExitCode:
        output = self.output_handler

        if result.phase == SyncPhase.SCHEMA_BROKEN:
            output.error("Database schema error:")
            output.print(result.error or "")
            return ExitCode.SCHEMA_ERROR

        if result.phase == SyncPhase.REJECTED:
            output.warning(result.error or "Sync already in progress")
            return ExitCode.GENERAL_ERROR

        if result.phase != SyncPhase.COMPLETED:
            if result.error_kind in FAILURE_MESSAGES:
                output.error(FAILURE_MESSAGES[result.error_kind])
            else:
                output.error(f"Sync failed: {result.error}")
            return FAILURE_EXIT_CODES.get(result.error_kind, ExitCode.GENERAL_ERROR)

        try:
            self.store.update_last_sync_time()
        except ProblemsError as e:
            logger.warning(f"Could not record last sync time: {e}")
            output.warning(f"Could not record last sync time: {e}")

        output.print_sync_summary(result)
        return ExitCode.PARTIAL_FAILURE if result.failed else ExitCode.SUCCESS
