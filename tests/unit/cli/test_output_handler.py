"""Unit tests for cli.output module."""

import logging
from unittest.mock import Mock

import pytest

from src.cli.output import OutputHandler
from src.sync_engine.database_setup import ParentPage
from src.sync_engine.models import SyncMode, SyncPhase, SyncResult

from tests.fixtures import make_problem


@pytest.fixture
def handler():
    handler = OutputHandler(no_color=True)
    handler.console = Mock()
    return handler


def printed(handler):
    return "\n".join(str(c.args[0]) for c in handler.console.print.call_args_list if c.args)


class TestOutputHandlerInit:

    def test_default_verbosity(self):
        handler = OutputHandler()

        assert handler.verbosity == 0
        assert handler.logger.name == "problem-tracker"
        assert handler.logger.level == logging.WARNING

    @pytest.mark.parametrize("verbosity, level", [(1, logging.INFO), (2, logging.DEBUG)])
    def test_verbosity_levels(self, verbosity, level):
        assert OutputHandler(verbosity=verbosity).logger.level == level


class TestVerbosityFiltering:

    def test_info_hidden_at_zero(self, handler):
        handler.info("details")

        handler.console.print.assert_not_called()

    def test_info_shown_at_one(self):
        handler = OutputHandler(verbosity=1)
        handler.console = Mock()

        handler.info("details")
        handler.debug("internals")

        assert printed(handler) == "details"


class TestSyncSummary:

    def test_bidirectional_success(self, handler):
        result = SyncResult(mode=SyncMode.BIDIRECTIONAL, phase=SyncPhase.COMPLETED, added=2, deleted=1, skipped=3)

        handler.print_sync_summary(result)

        assert "Sync completed! 2 added, 1 deleted, 3 skipped, 0 failed." in printed(handler)

    def test_push_summary_has_no_deleted_count(self, handler):
        result = SyncResult(mode=SyncMode.PUSH, phase=SyncPhase.COMPLETED, added=1)

        handler.print_sync_summary(result)

        assert "deleted" not in printed(handler)

    def test_already_in_sync(self, handler):
        result = SyncResult(mode=SyncMode.PUSH, phase=SyncPhase.COMPLETED, skipped=4)

        handler.print_sync_summary(result)

        assert "Already in sync." in printed(handler)

    def test_failures_list_first_three(self, handler):
        result = SyncResult(mode=SyncMode.PUSH, phase=SyncPhase.COMPLETED)
        for title in ("A", "B", "C", "D", "E"):
            result.record_failure(f"{title}: boom")

        handler.print_sync_summary(result)

        output = printed(handler)
        assert "5 failed" in output
        assert "A: boom" in output and "C: boom" in output
        assert "D: boom" not in output
        assert "... and 2 more" in output


class TestTables:

    def test_empty_problem_list(self, handler):
        handler.print_problems([])

        assert "No problems tracked yet" in printed(handler)

    def test_problem_table(self, handler):
        handler.print_problems([make_problem("two-sum")])

        handler.console.print.assert_called_once()
        table = handler.console.print.call_args.args[0]
        assert table.row_count == 1
        assert [c.header for c in table.columns] == ["ID", "Problem", "Slug", "Difficulty", "Status", "Added"]

    def test_parent_pages(self, handler):
        handler.print_parent_pages([ParentPage(id="p1", title="Study")])

        assert handler.console.print.call_args.args[0].row_count == 1

    def test_no_parent_pages(self, handler):
        handler.print_parent_pages([])

        assert "No pages shared" in printed(handler)
