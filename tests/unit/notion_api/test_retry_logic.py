"""Unit tests for notion_api.retry_logic module."""

import pytest
from unittest.mock import MagicMock, patch

from src.notion_api.errors import APIAccessError, ObjectNotFoundError, RateLimitError
from src.notion_api.retry_logic import (
    _backoff_seconds,
    _is_rate_limit_error,
    retry_on_rate_limit,
)


class TestIsRateLimitError:
    """Test cases for _is_rate_limit_error function."""

    def test_detects_rate_limit_error_class(self):
        assert _is_rate_limit_error(RateLimitError()) is True

    def test_detects_429_in_message(self):
        assert _is_rate_limit_error(Exception("HTTP 429 Too Many Requests")) is True

    def test_detects_rate_limited_code_in_message(self):
        assert _is_rate_limit_error(Exception("rate_limited")) is True

    def test_detects_status_code_attribute(self):
        error = Exception("API error")
        error.status_code = 429
        assert _is_rate_limit_error(error) is True

    def test_detects_response_status_code_attribute(self):
        error = Exception("API error")
        error.response = MagicMock()
        error.response.status_code = 429
        assert _is_rate_limit_error(error) is True

    def test_returns_false_for_not_found(self):
        assert _is_rate_limit_error(ObjectNotFoundError("abc")) is False

    def test_returns_false_for_other_status_code(self):
        error = Exception("Server error")
        error.status_code = 500
        assert _is_rate_limit_error(error) is False


class TestBackoff:

    @pytest.mark.parametrize("retry_num, expected", [(0, 1), (1, 2), (2, 4)])
    def test_exponential(self, retry_num, expected):
        assert _backoff_seconds(RateLimitError(), retry_num) == expected

    def test_retry_after_stretches_wait(self):
        assert _backoff_seconds(RateLimitError(retry_after=10), 0) == 10

    def test_short_retry_after_is_ignored(self):
        assert _backoff_seconds(RateLimitError(retry_after=0.5), 2) == 4


class TestRetryOnRateLimit:
    """Test cases for retry_on_rate_limit function."""

    @patch('src.notion_api.retry_logic.time.sleep')
    def test_success_on_first_attempt(self, mock_sleep):
        func = MagicMock(return_value="ok")

        assert retry_on_rate_limit(func, "a", key="b") == "ok"
        func.assert_called_once_with("a", key="b")
        mock_sleep.assert_not_called()

    @patch('src.notion_api.retry_logic.time.sleep')
    def test_retries_then_succeeds(self, mock_sleep):
        func = MagicMock(side_effect=[RateLimitError(), RateLimitError(), "ok"])

        assert retry_on_rate_limit(func) == "ok"
        assert func.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2]

    @patch('src.notion_api.retry_logic.time.sleep')
    def test_gives_up_after_three_retries(self, mock_sleep):
        func = MagicMock(side_effect=RateLimitError())

        with pytest.raises(APIAccessError) as exc_info:
            retry_on_rate_limit(func)

        assert func.call_count == 4
        assert exc_info.value.status_code == 429
        assert "after 3 retries" in str(exc_info.value)
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2, 4]

    @patch('src.notion_api.retry_logic.time.sleep')
    def test_other_errors_are_not_retried(self, mock_sleep):
        func = MagicMock(side_effect=ObjectNotFoundError("abc"))

        with pytest.raises(ObjectNotFoundError):
            retry_on_rate_limit(func)

        func.assert_called_once()
        mock_sleep.assert_not_called()
