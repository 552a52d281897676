"""Connection and database setup commands.

Covers everything needed before the first sync: checking the token,
listing the pages shared with the integration, creating the tracker
database under one of them and editing the stored settings.
"""

import logging
from typing import Callable, Optional

from src.notion_api.api_wrapper import NotionAPI
from src.notion_api.auth import Authenticator
from src.notion_api.errors import InvalidTokenError, NotionError
from src.problems.errors import ProblemsError
from src.problems.store import LocalStore
from src.sync_engine.database_setup import DEFAULT_DATABASE_TITLE, DatabaseProvisioner
from src.sync_engine.errors import ProvisioningError

from .models import ExitCode
from .output import OutputHandler
from .sync_command import report_notion_error

logger = logging.getLogger(__name__)


def build_api(token: str) -> NotionAPI:
    return NotionAPI(Authenticator(token=token))


def _compact_id(object_id: str) -> str:
    return object_id.replace('-', '').lower()


class SetupCommand:
    """Token check, parent page listing, database creation and settings.

    Example:
        >>> setup = SetupCommand(LocalStore(path), OutputHandler())
        >>> setup.create_database(title="LeetCode")
    """

    def __init__(
        self,
        store: LocalStore,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        api_factory: Callable[[str], NotionAPI] = build_api,
    ):
        self.store = store
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator or Authenticator()
        self.api_factory = api_factory

    def _api(self) -> NotionAPI:
        """Client for the current token.

        Raises:
            InvalidTokenError: If no token is configured
        """
        return self.api_factory(self.authenticator.get_credentials().token)

    def test_connection(self) -> ExitCode:
        output = self.output_handler
        try:
            api = self._api()
            with output.spinner("Connecting to Notion..."):
                user = api.test_connection()
        except InvalidTokenError as e:
            output.error(str(e))
            return ExitCode.AUTH_ERROR
        except NotionError as e:
            return report_notion_error(output, e)

        workspace = (user.get("bot") or {}).get("workspace_name")
        output.success(f"Connected to Notion as {user.get('name') or 'integration'}")
        if workspace:
            output.info(f"  Workspace: {workspace}")
        return ExitCode.SUCCESS

    def list_pages(self) -> ExitCode:
        output = self.output_handler
        try:
            provisioner = DatabaseProvisioner(self._api())
            with output.spinner("Searching pages..."):
                pages = provisioner.list_parent_pages()
        except InvalidTokenError as e:
            output.error(str(e))
            return ExitCode.AUTH_ERROR
        except NotionError as e:
            return report_notion_error(output, e)

        output.print_parent_pages(pages)
        return ExitCode.SUCCESS

    def create_database(
        self,
        parent_page_id: Optional[str] = None,
        title: str = DEFAULT_DATABASE_TITLE,
        include_status: bool = False,
    ) -> ExitCode:
        """Create a tracker database and store its id as the sync target.

        Without ``parent_page_id`` the first page shared with the
        integration becomes the parent.
        """
        output = self.output_handler
        try:
            provisioner = DatabaseProvisioner(self._api())
            with output.spinner("Creating Notion database..."):
                pages = provisioner.list_parent_pages()
                if parent_page_id:
                    parent = next(
                        (p for p in pages if _compact_id(p.id) == _compact_id(parent_page_id)),
                        None,
                    )
                else:
                    parent = pages[0] if pages else None
                    parent_page_id = parent.id if parent else None

                database_id = provisioner.create_tracker_database(
                    parent_page_id, title=title, include_status=include_status
                )
        except InvalidTokenError as e:
            output.error(str(e))
            return ExitCode.AUTH_ERROR
        except ProvisioningError as e:
            output.error(f"{e}. Share a page with the integration in Notion first.")
            return ExitCode.GENERAL_ERROR
        except NotionError as e:
            return report_notion_error(output, e)

        try:
            self.store.save_config(
                database_id=database_id,
                parent_page_id=parent_page_id,
                parent_page_title=parent.title if parent else None,
                include_status=include_status,
            )
        except ProblemsError as e:
            logger.error(f"Failed to save database id: {e}")
            output.error(f"Database {database_id} created but could not be saved: {e}")
            return ExitCode.GENERAL_ERROR

        output.success(f"Database created: {database_id}")
        if parent:
            output.info(f"  Parent page: {parent.title}")
        return ExitCode.SUCCESS

    def configure(
        self,
        database_id: Optional[str] = None,
        parent_page_id: Optional[str] = None,
        parent_page_title: Optional[str] = None,
        auto_sync: Optional[bool] = None,
        include_status: Optional[bool] = None,
    ) -> ExitCode:
        """Update stored settings, or show them when nothing is given."""
        values = {
            key: value for key, value in (
                ('database_id', database_id),
                ('parent_page_id', parent_page_id),
                ('parent_page_title', parent_page_title),
                ('auto_sync', auto_sync),
                ('include_status', include_status),
            ) if value is not None
        }

        output = self.output_handler
        try:
            if values:
                self.store.save_config(**values)
                output.success(f"Saved {', '.join(values)}")
            config = self.store.get_config()
        except ProblemsError as e:
            output.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        if not values:
            self._show(config)
        return ExitCode.SUCCESS

    def _show(self, config: dict) -> None:
        try:
            self.authenticator.get_credentials()
            token_state = "set"
        except InvalidTokenError:
            token_state = "missing"

        output = self.output_handler
        output.print(f"Store:          {self.store.path}")
        output.print(f"Notion token:   {token_state}")
        output.print(f"Database id:    {config.get('database_id') or '-'}")
        parent = config.get('parent_page_title') or config.get('parent_page_id') or '-'
        output.print(f"Parent page:    {parent}")
        output.print(f"Auto-sync:      {'on' if config.get('auto_sync') else 'off'}")
        output.print(f"Status column:  {'yes' if config.get('include_status') else 'no'}")
        output.print(f"Last sync:      {config.get('last_sync_time') or 'never'}")
