"""Secret provider for the Notion integration token.

The token is taken from an explicit value when one is supplied, otherwise from
the NOTION_TOKEN environment variable (a .env file is honoured through
python-dotenv). The token is read on every call and never cached, since the
remote side may revoke it at any time.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidTokenError

TOKEN_ENV_VAR = 'NOTION_TOKEN'


class Credentials(NamedTuple):
    """Notion API credentials."""
    token: str


class Authenticator:
    """Loads and validates the Notion integration token.

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
    """

    def __init__(self, token: Optional[str] = None):
        """Initialize the authenticator.

        Args:
            token: Explicit token; when omitted the environment is consulted
        """
        self._token = token
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get the current integration token.

        Returns:
            Credentials: A named tuple holding the token

        Raises:
            InvalidTokenError: If no token is configured
        """
        token = self._token or os.getenv(TOKEN_ENV_VAR)
        if not token or not token.strip():
            raise InvalidTokenError(
                f"No Notion API token configured (set {TOKEN_ENV_VAR})"
            )
        return Credentials(token=token.strip())
