"""Unit tests for notion_api.errors module."""

import pytest

from src.notion_api.errors import (
    APIAccessError,
    APIUnreachableError,
    FailureKind,
    InvalidTokenError,
    NotionError,
    ObjectNotFoundError,
    RateLimitError,
    SyncError,
)


class TestErrorKinds:
    """Each error class carries the failure kind callers branch on."""

    @pytest.mark.parametrize("error, kind", [
        (InvalidTokenError(), FailureKind.AUTH),
        (ObjectNotFoundError("abc"), FailureKind.NOT_FOUND),
        (RateLimitError(), FailureKind.RATE_LIMITED),
        (APIAccessError(), FailureKind.API),
        (APIUnreachableError("https://api.notion.com"), FailureKind.UNREACHABLE),
    ])
    def test_kind(self, error, kind):
        assert error.kind == kind
        assert isinstance(error, NotionError)
        assert isinstance(error, SyncError)


class TestErrorMessages:

    def test_invalid_token_default_message(self):
        assert InvalidTokenError().message == "API token is invalid"

    def test_object_not_found_default_message(self):
        error = ObjectNotFoundError("abc123")
        assert str(error) == "Object abc123 not found"
        assert error.object_id == "abc123"

    def test_object_not_found_custom_message(self):
        error = ObjectNotFoundError("abc123", "Could not find database")
        assert error.message == "Could not find database"

    def test_rate_limit_keeps_retry_after(self):
        assert RateLimitError(retry_after=2.5).retry_after == 2.5

    def test_api_access_default_mentions_retries(self):
        assert APIAccessError().message == "Notion API failure (after 3 retries)"

    def test_api_access_status_code(self):
        assert APIAccessError("boom", status_code=500).status_code == 500

    def test_unreachable_mentions_endpoint(self):
        error = APIUnreachableError("https://api.notion.com")
        assert str(error) == "API is not available at https://api.notion.com"
        assert error.endpoint == "https://api.notion.com"
