"""Configuration loading for sync commands.

The token comes from the secret provider (environment / .env); everything
else lives in the local store. Nothing is cached: each command builds a new
SyncConfig so it sees the current token.
"""

import os
from typing import Optional

from dotenv import load_dotenv

from src.notion_api.auth import Authenticator
from src.notion_api.errors import InvalidTokenError
from src.problems.store import LocalStore
from src.sync_engine.sync_lock import lock_path_for

from .errors import NotConfiguredError
from .models import SyncConfig

STORE_ENV_VAR = 'PROBLEM_TRACKER_STORE'


def resolve_store_path(explicit: Optional[str] = None) -> str:
    """Store location: explicit path, then PROBLEM_TRACKER_STORE, then the default."""
    if explicit:
        return explicit
    load_dotenv()
    return os.getenv(STORE_ENV_VAR) or LocalStore.default_path()


class ConfigLoader:
    """Builds a SyncConfig from the store and the secret provider.

    Example:
        >>> loader = ConfigLoader(LocalStore(resolve_store_path()), Authenticator())
        >>> config = loader.load()
    """

    def __init__(self, store: LocalStore, authenticator: Authenticator):
        self.store = store
        self.authenticator = authenticator

    def load(self) -> SyncConfig:
        """Load the current configuration.

        Raises:
            NotConfiguredError: If the token or database id is missing
            StoreError: If the store file is malformed
        """
        stored = self.store.get_config()
        missing = []

        token = None
        try:
            token = self.authenticator.get_credentials().token
        except InvalidTokenError:
            missing.append('Notion API token')

        database_id = stored.get('database_id')
        if not database_id:
            missing.append('database id')

        if missing:
            raise NotConfiguredError(missing)

        return SyncConfig(
            token=token,
            database_id=database_id,
            parent_page_id=stored.get('parent_page_id'),
            parent_page_title=stored.get('parent_page_title'),
            auto_sync=bool(stored.get('auto_sync')),
            include_status=bool(stored.get('include_status')),
            lock_path=lock_path_for(self.store.path),
        )
