"""Unit tests for sync_engine.remote_problems.ProblemMirror."""

import pytest

from src.notion_api.errors import APIAccessError, APIUnreachableError
from src.problems.models import Difficulty, ProblemStatus
from src.sync_engine.remote_problems import ProblemMirror

from tests.fixtures import DATABASE_ID, FakeNotionAPI, tracker_page

URL = "https://leetcode.com/problems/two-sum/"


@pytest.fixture
def mirror_for(no_sleep):
    def build(api):
        return ProblemMirror(api, sleep=no_sleep)
    return build


class TestRemoveProblem:

    def test_archives_every_match(self, mirror_for, no_sleep):
        api = FakeNotionAPI(pages=[
            tracker_page(URL, page_id="p1"),
            tracker_page("https://leetcode.com/problems/two-sum", page_id="p2"),
            tracker_page("https://leetcode.com/problems/other/", page_id="p3"),
        ])

        result = mirror_for(api).remove_problem(URL + "description/", DATABASE_ID)

        assert result.ok
        assert api.archived == ["p1", "p2"]
        assert result.message == "Deleted 2 problem(s) from Notion"
        assert no_sleep.delays == [0.35]

    def test_no_match_is_not_an_error(self, fake_api, mirror_for):
        result = mirror_for(fake_api).remove_problem(URL, DATABASE_ID)

        assert result.ok
        assert result.message == "Problem not found in Notion database"

    def test_partial_failure(self, mirror_for):
        api = FakeNotionAPI(pages=[tracker_page(URL, page_id="p1"), tracker_page(URL, page_id="p2")])
        api.fail_archive["p1"] = APIAccessError("gone")

        result = mirror_for(api).remove_problem(URL, DATABASE_ID)

        assert not result.ok
        assert result.page_ids == ["p2"]
        assert result.message == "Deleted 1 problem(s) from Notion, 1 failed"

    def test_query_failure(self, fake_api, mirror_for):
        fake_api.query_error = APIUnreachableError("https://api.notion.com")

        result = mirror_for(fake_api).remove_problem(URL, DATABASE_ID)

        assert not result.ok
        assert "not available" in result.message


class TestUpdateProblem:

    def test_patches_first_match(self, mirror_for):
        api = FakeNotionAPI(pages=[tracker_page(URL, page_id="p1")])

        result = mirror_for(api).update_problem(
            URL, DATABASE_ID, notes="two pointers", difficulty=Difficulty.MEDIUM,
            status=ProblemStatus.SOLVED,
        )

        assert result.ok
        page_id, properties = api.updated[0]
        assert page_id == "p1"
        assert set(properties) == {"Notes", "Difficulty", "Status"}

    def test_empty_notes_cleared_remotely(self, mirror_for):
        api = FakeNotionAPI(pages=[tracker_page(URL, page_id="p1")])

        result = mirror_for(api).update_problem(URL, DATABASE_ID, notes="")

        assert result.ok
        _, properties = api.updated[0]
        assert properties == {"Notes": {"rich_text": [{"type": "text", "text": {"content": ""}}]}}

    def test_nothing_to_update(self, fake_api, mirror_for):
        result = mirror_for(fake_api).update_problem(URL, DATABASE_ID)

        assert result.ok
        assert result.message == "Nothing to update"
        assert fake_api.calls == []

    def test_missing_page(self, fake_api, mirror_for):
        result = mirror_for(fake_api).update_problem(URL, DATABASE_ID, notes="x")

        assert not result.ok
        assert result.message == "Problem not found in Notion database"
