"""Commands that edit the local problem collection.

Adds, lists, updates and deletes problems in the LocalStore. Remote effects
are secondary: a newly added problem is handed to the AutoSyncHook, and
delete/update can mirror the change to Notion, but a failing remote call
never rolls back the local edit.
"""

import logging
from typing import Callable, List, Optional
from urllib.parse import urlparse

from src.notion_api.api_wrapper import NotionAPI
from src.notion_api.auth import Authenticator
from src.problems.errors import ProblemsError, ScrapeError
from src.problems.models import Difficulty, Problem, ProblemStatus
from src.problems.scraper import ScrapedProblem, scrape_problem
from src.problems.store import LocalStore
from src.problems.url_normalizer import extract_slug, normalize_url
from src.sync_engine.auto_sync import AutoSyncHook
from src.sync_engine.models import SyncResult
from src.sync_engine.remote_problems import ProblemMirror

from .config import ConfigLoader
from .errors import CLIError, NotConfiguredError, ProblemNotFoundError
from .models import ExitCode, SyncConfig
from .output import OutputHandler
from .sync_command import build_reconciler

logger = logging.getLogger(__name__)


def build_mirror(config: SyncConfig) -> ProblemMirror:
    return ProblemMirror(NotionAPI(Authenticator(token=config.token)))


def title_from_slug(slug: str) -> str:
    """Readable fallback title, e.g. 'two-sum' -> 'Two Sum'."""
    return " ".join(word.capitalize() for word in slug.split("-") if word) or slug


class ProblemCommands:
    """Local collection commands for the CLI.

    Example:
        >>> commands = ProblemCommands(LocalStore(path), OutputHandler())
        >>> commands.add("https://leetcode.com/problems/two-sum/")
        <ExitCode.SUCCESS: 0>
    """

    def __init__(
        self,
        store: LocalStore,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        config_loader: Optional[ConfigLoader] = None,
        scraper: Callable[[str], ScrapedProblem] = scrape_problem,
        mirror_factory: Callable[[SyncConfig], ProblemMirror] = build_mirror,
        auto_sync_hook: Optional[AutoSyncHook] = None,
    ):
        self.store = store
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator or Authenticator()
        self.config_loader = config_loader or ConfigLoader(store, self.authenticator)
        self.scraper = scraper
        self.mirror_factory = mirror_factory
        self.auto_sync_hook = auto_sync_hook or AutoSyncHook(build_reconciler, self.config_loader)

    def _validate_url(self, url: str) -> None:
        if not url or not url.strip():
            raise CLIError("URL cannot be empty")
        parsed = urlparse(url.strip())
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise CLIError(f"Invalid problem URL: {url}\nURL must start with http:// or https://")

    def _resolve(self, problem_id: str) -> Problem:
        """Find a problem by full id or by an unambiguous id prefix."""
        exact = self.store.find_problem(problem_id)
        if exact:
            return exact

        problems = self.store.get_problems()
        matches = [p for p in problems if p.id.startswith(problem_id)] if problem_id else []
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            raise CLIError(f"Problem id '{problem_id}' is ambiguous ({len(matches)} matches)")
        raise ProblemNotFoundError(problem_id)

    def add(
        self,
        url: str,
        title: Optional[str] = None,
        difficulty: Optional[Difficulty] = None,
        status: Optional[ProblemStatus] = None,
        notes: Optional[str] = None,
        scrape: bool = True,
    ) -> ExitCode:
        """Store a problem, filling in title and difficulty from its page.

        The local add is the operation; auto-sync runs afterwards and its
        outcome is only reported.
        """
        output = self.output_handler
        try:
            self._validate_url(url)
        except CLIError as e:
            output.error(str(e))
            return ExitCode.GENERAL_ERROR

        url = normalize_url(url.strip())

        if scrape and (title is None or difficulty is None):
            try:
                with output.spinner("Fetching problem details..."):
                    scraped = self.scraper(url)
                title = title or scraped.title
                difficulty = difficulty or scraped.difficulty
            except ScrapeError as e:
                logger.warning(f"Scrape failed: {e}")
                output.warning(f"{e}. Saving without scraped details.")

        problem = Problem.create(
            title=title or title_from_slug(extract_slug(url)),
            url=url,
            difficulty=difficulty,
            status=status,
            notes=notes,
        )

        try:
            self.store.add_problem(problem)
        except ProblemsError as e:
            logger.error(f"Failed to save problem: {e}")
            output.error(f"Failed to save problem: {e}")
            return ExitCode.GENERAL_ERROR

        label = f" ({problem.difficulty.value})" if problem.difficulty else ""
        output.success(f"Added {problem.title}{label}")
        output.info(f"  id: {problem.id}")

        self._report_auto_sync(self.auto_sync_hook.after_add(problem))
        return ExitCode.SUCCESS

    def _report_auto_sync(self, result: Optional[SyncResult]) -> None:
        if result is None:
            return
        if result.ok and result.failed == 0:
            if result.added:
                self.output_handler.success("Synced to Notion")
            else:
                self.output_handler.info("Already in Notion")
            return
        reason = result.error or "; ".join(result.first_errors(1))
        self.output_handler.warning(f"Auto-sync failed: {reason}")

    def list(self, search: Optional[str] = None) -> ExitCode:
        try:
            problems = self.store.get_problems()
        except ProblemsError as e:
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        if search:
            needle = search.lower()
            problems = [
                p for p in problems
                if needle in p.title.lower() or needle in p.slug.lower()
            ]

        self.output_handler.print_problems(problems)
        return ExitCode.SUCCESS

    def delete(self, problem_id: str, remote: bool = False) -> ExitCode:
        """Delete a problem locally and optionally archive its Notion page."""
        output = self.output_handler
        try:
            problem = self._resolve(problem_id)
            self.store.delete_problem(problem.id)
        except (CLIError, ProblemsError) as e:
            output.error(str(e))
            return ExitCode.GENERAL_ERROR

        output.success(f"Deleted {problem.title}")
        if not remote:
            return ExitCode.SUCCESS

        try:
            config = self.config_loader.load()
        except NotConfiguredError as e:
            output.warning(f"Not removed from Notion: {e}")
            return ExitCode.PARTIAL_FAILURE

        with output.spinner("Removing from Notion..."):
            mirrored = self.mirror_factory(config).remove_problem(problem.url, config.database_id)

        if not mirrored.ok:
            output.warning(f"Notion removal failed: {mirrored.message}")
            for failure in mirrored.failures:
                output.debug(failure)
            return ExitCode.PARTIAL_FAILURE

        output.success(mirrored.message)
        return ExitCode.SUCCESS

    def update(
        self,
        problem_id: str,
        title: Optional[str] = None,
        difficulty: Optional[Difficulty] = None,
        status: Optional[ProblemStatus] = None,
        notes: Optional[str] = None,
    ) -> ExitCode:
        """Edit fields of a stored problem and push them to Notion if configured."""
        output = self.output_handler
        if title is None and difficulty is None and status is None and notes is None:
            output.warning("Nothing to update")
            return ExitCode.SUCCESS

        try:
            problem = self._resolve(problem_id)
            if title is not None:
                problem.title = title
            if difficulty is not None:
                problem.difficulty = difficulty
            if status is not None:
                problem.status = status
            if notes is not None:
                problem.notes = notes
            self.store.add_problem(problem)
        except (CLIError, ProblemsError) as e:
            output.error(str(e))
            return ExitCode.GENERAL_ERROR

        output.success(f"Updated {problem.title}")

        try:
            config = self.config_loader.load()
        except NotConfiguredError:
            logger.debug("Sync not configured, skipping remote update")
            return ExitCode.SUCCESS

        with output.spinner("Updating Notion..."):
            mirrored = self.mirror_factory(config).update_problem(
                problem.url,
                config.database_id,
                title=title,
                difficulty=difficulty,
                notes=notes,
                status=status if config.include_status else None,
            )

        if not mirrored.ok:
            output.warning(f"Notion update failed: {mirrored.message}")
            return ExitCode.PARTIAL_FAILURE
        output.info(mirrored.message)
        return ExitCode.SUCCESS

    def clear(self) -> ExitCode:
        try:
            count = len(self.store.get_problems())
            self.store.clear_all()
        except ProblemsError as e:
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR
        self.output_handler.success(f"Removed {count} problem(s)")
        return ExitCode.SUCCESS


def parse_choice(value: Optional[str], enum_cls, option: str):
    """Case-insensitive lookup of an enum member by value (e.g. 'easy', 'not started')."""
    if value is None:
        return None
    for member in enum_cls:
        if member.value.lower() == value.strip().lower():
            return member
    choices: List[str] = [member.value for member in enum_cls]
    raise CLIError(f"Invalid {option} '{value}'. Choose from: {', '.join(choices)}")
