"""Root pytest configuration for all tests."""

import logging

import pytest

from src.problems.store import LocalStore

from tests.fixtures import FakeNotionAPI


class RecordingSleep:
    """Sleep replacement that records requested delays instead of waiting."""

    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from a developer's real token and store.

    python-dotenv never overrides variables that are already set, so an
    empty NOTION_TOKEN also shields tests from a local .env file.
    """
    monkeypatch.setenv("NOTION_TOKEN", "")
    monkeypatch.setenv("PROBLEM_TRACKER_STORE", str(tmp_path / "default-store.yaml"))


@pytest.fixture
def store(tmp_path):
    return LocalStore(str(tmp_path / "store.yaml"))


@pytest.fixture
def fake_api():
    return FakeNotionAPI()


@pytest.fixture
def no_sleep():
    return RecordingSleep()


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers the CLI attaches to the 'src' logger during a test."""
    yield
    app_logger = logging.getLogger("src")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
