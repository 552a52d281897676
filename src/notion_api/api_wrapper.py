"""API wrapper for the Notion REST API.

This module wraps a requests Session with Notion's authentication and version
headers and translates HTTP failures into our typed exception hierarchy.
It integrates with the retry logic for handling rate limits.
"""

import logging
import re
from typing import Any, Dict, List, Optional

import requests
from requests.exceptions import ConnectionError, Timeout

from .auth import Authenticator
from .errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidTokenError,
    ObjectNotFoundError,
    RateLimitError,
)
from .retry_logic import retry_on_rate_limit

logger = logging.getLogger(__name__)

NOTION_API_BASE = "https://api.notion.com"
NOTION_VERSION = "2022-06-28"

_ID_RE = re.compile(r'^[0-9a-fA-F]{32}$')


class NotionAPI:
    """Thin wrapper around the Notion REST API with error translation.

    This class:
    1. Attaches the bearer token and fixed Notion-Version header to every call
    2. Translates HTTP errors to typed exceptions
    3. Integrates retry logic for 429 rate limits
    4. Provides one method per remote operation the sync engine needs

    Example:
        >>> api = NotionAPI(Authenticator())
        >>> schema = api.get_database("0123456789abcdef0123456789abcdef")
    """

    def __init__(
        self,
        authenticator: Authenticator,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        base_url: str = NOTION_API_BASE,
    ):
        """Initialize the API wrapper.

        Args:
            authenticator: Secret provider for the integration token
            session: Optional pre-built requests Session (created lazily otherwise)
            timeout: Per-request timeout in seconds
            base_url: API root, without trailing slash
        """
        self._authenticator = authenticator
        self._session = session
        self._timeout = timeout
        self._base_url = base_url.rstrip('/')

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def _headers(self, with_body: bool) -> Dict[str, str]:
        # Token is read per request so a revoked or rotated token is noticed
        creds = self._authenticator.get_credentials()
        headers = {
            'Authorization': f'Bearer {creds.token}',
            'Notion-Version': NOTION_VERSION,
        }
        if with_body:
            headers['Content-Type'] = 'application/json'
        return headers

    def _validate_id(self, object_id: str) -> str:
        """Validate a Notion database or page id.

        Notion ids are UUIDs, accepted with or without dashes.

        Raises:
            ValueError: If object_id is not a valid id
        """
        if not object_id or not str(object_id).strip():
            raise ValueError("id cannot be empty")

        id_str = str(object_id).strip()
        if not _ID_RE.match(id_str.replace('-', '')):
            raise ValueError(
                f"Invalid id format: '{object_id}'. "
                f"Notion ids must be 32 hexadecimal characters (dashes optional)."
            )
        return id_str

    def _sanitize_credentials(self, text: str) -> str:
        """Mask integration tokens in error messages before they are logged."""
        if not text:
            return text

        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            text,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'\b(?:secret|ntn)_[A-Za-z0-9]{8,}\b',
            '***REDACTED***',
            sanitized
        )
        return sanitized

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """The body's ``message`` field, falling back to the HTTP reason phrase."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get('message'):
            return str(body['message'])
        return response.reason or f"HTTP {response.status_code}"

    def _translate_error(self, response: requests.Response, operation: str, object_id: Optional[str] = None) -> Exception:
        """Translate a non-2xx response into a typed Notion exception.

        Args:
            response: The failed HTTP response
            operation: Description of the operation that failed (for logging)
            object_id: Database or page id the operation targeted, if any

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        status_code = response.status_code
        message = self._sanitize_credentials(self._error_message(response))

        if status_code == 401:
            return InvalidTokenError(f"API token is invalid: {message}")

        if status_code == 404:
            return ObjectNotFoundError(object_id or "unknown", message)

        if status_code == 429:
            retry_after: Optional[float] = None
            header = response.headers.get('Retry-After')
            if header:
                try:
                    retry_after = float(header)
                except ValueError:
                    retry_after = None
            return RateLimitError(retry_after=retry_after, message=message)

        logger.error(f"API operation failed: {operation} - HTTP {status_code}: {message}")
        return APIAccessError(f"API Error {status_code}: {message}", status_code=status_code)

    def _request(
        self,
        method: str,
        path: str,
        operation: str,
        json_body: Optional[Dict[str, Any]] = None,
        object_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"

        def _send():
            headers = self._headers(with_body=json_body is not None)
            try:
                response = self._get_session().request(
                    method,
                    url,
                    headers=headers,
                    json=json_body,
                    timeout=self._timeout,
                )
            except (Timeout, ConnectionError) as e:
                logger.error(
                    f"API operation failed: {operation} - "
                    f"{self._sanitize_credentials(str(e))}"
                )
                raise APIUnreachableError(endpoint=self._base_url) from e

            if not response.ok:
                raise self._translate_error(response, operation, object_id)

            try:
                return response.json()
            except ValueError as e:
                raise APIAccessError(
                    f"Invalid JSON in response to {operation}",
                    status_code=response.status_code,
                ) from e

        logger.debug(f"{method} {path} ({operation})")
        return retry_on_rate_limit(_send)

    def test_connection(self) -> Dict[str, Any]:
        """Verify the token by fetching the integration's bot user.

        Raises:
            InvalidTokenError: If the token is invalid
            APIUnreachableError: If the API is unreachable
            APIAccessError: On any other failure
        """
        return self._request('GET', '/v1/users/me', 'test_connection')

    def _paginate(
        self,
        path: str,
        operation: str,
        body: Dict[str, Any],
        object_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """POST ``body`` repeatedly, following ``has_more``/``next_cursor``."""
        results: List[Dict[str, Any]] = []
        request_body = dict(body)
        while True:
            data = self._request('POST', path, operation, json_body=request_body, object_id=object_id)
            results.extend(data.get('results', []))
            cursor = data.get('next_cursor')
            if not data.get('has_more') or not cursor:
                return results
            request_body = dict(body, start_cursor=cursor)

    def search_pages(self, page_size: int = 100) -> List[Dict[str, Any]]:
        """Search every page shared with the integration.

        Follows ``has_more``/``next_cursor`` until all result pages are read.

        Returns:
            List of page objects
        """
        body = {
            'filter': {'value': 'page', 'property': 'object'},
            'page_size': page_size,
        }
        pages = self._paginate('/v1/search', 'search_pages', body)
        logger.debug(f"Search returned {len(pages)} page(s)")
        return pages

    def create_database(
        self,
        parent_page_id: str,
        title: str,
        properties: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Create a database under a page.

        Returns:
            Dict containing the created database (including its id)
        """
        parent_page_id = self._validate_id(parent_page_id)
        body = {
            'parent': {'type': 'page_id', 'page_id': parent_page_id},
            'title': [{'type': 'text', 'text': {'content': title}}],
            'properties': properties,
        }
        return self._request(
            'POST', '/v1/databases', f"create_database({parent_page_id})",
            json_body=body, object_id=parent_page_id,
        )

    def get_database(self, database_id: str) -> Dict[str, Any]:
        """Fetch a database object, including its column definitions.

        Raises:
            InvalidTokenError: If the token is invalid
            ObjectNotFoundError: If the database does not exist or is not shared
            APIUnreachableError: If the API is unreachable
            APIAccessError: On any other failure
        """
        database_id = self._validate_id(database_id)
        return self._request(
            'GET', f'/v1/databases/{database_id}', f"get_database({database_id})",
            object_id=database_id,
        )

    def query_database(self, database_id: str) -> List[Dict[str, Any]]:
        """Fetch every page of a database (unfiltered full scan).

        Follows ``has_more``/``next_cursor`` until all result pages are read.

        Returns:
            List of page objects
        """
        database_id = self._validate_id(database_id)
        path = f'/v1/databases/{database_id}/query'
        operation = f"query_database({database_id})"

        results = self._paginate(path, operation, {}, object_id=database_id)
        logger.debug(f"Fetched {len(results)} page(s) from database {database_id}")
        return results

    def create_page(self, database_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        """Create a page (row) in a database."""
        database_id = self._validate_id(database_id)
        body = {
            'parent': {'type': 'database_id', 'database_id': database_id},
            'properties': properties,
        }
        return self._request(
            'POST', '/v1/pages', f"create_page({database_id})",
            json_body=body, object_id=database_id,
        )

    def update_page(self, page_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        """Patch some properties of a page."""
        page_id = self._validate_id(page_id)
        return self._request(
            'PATCH', f'/v1/pages/{page_id}', f"update_page({page_id})",
            json_body={'properties': properties}, object_id=page_id,
        )

    def archive_page(self, page_id: str) -> Dict[str, Any]:
        """Soft-delete a page (moves it to Notion's trash, recoverable)."""
        page_id = self._validate_id(page_id)
        return self._request(
            'PATCH', f'/v1/pages/{page_id}', f"archive_page({page_id})",
            json_body={'archived': True}, object_id=page_id,
        )
