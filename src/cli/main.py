"""Main CLI entry point for the problem-tracker command.

This module provides the Typer application that serves as the entry point
for the problem-tracker command-line tool. Global options (verbosity, log
directory, colors, store location) are handled by the app callback; each
subcommand builds its command object against the selected store.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.config import resolve_store_path
from src.cli.errors import CLIError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.cli.problem_commands import ProblemCommands, parse_choice
from src.cli.setup_command import SetupCommand
from src.cli.sync_command import SyncCommand
from src.problems.models import Difficulty, ProblemStatus
from src.problems.store import LocalStore
from src.sync_engine.database_setup import DEFAULT_DATABASE_TITLE

VERSION = "0.1.0"

app = typer.Typer(
    name="problem-tracker",
    help="""Track LeetCode problems locally and sync them to a Notion database.

QUICK START:
  problem-tracker test-connection                  # Check NOTION_TOKEN
  problem-tracker create-db                        # Create the tracker database
  problem-tracker add <problem_url>                # Track a problem
  problem-tracker sync                             # Two-way sync with Notion
  problem-tracker sync --push-only                 # Local → Notion only""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


class _State:
    verbosity: int = 0
    no_color: bool = False
    store_path: Optional[str] = None


state = _State()


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"problem-tracker_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt=date_format
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _output() -> OutputHandler:
    return OutputHandler(verbosity=state.verbosity, no_color=state.no_color)


def _store() -> LocalStore:
    return LocalStore(resolve_store_path(state.store_path))


def _finish(run) -> None:
    """Run a command body and exit with its code.

    typer.Exit passes through; anything unexpected is logged with its
    traceback and reported as a general error.
    """
    try:
        exit_code = run()
    except typer.Exit:
        raise
    except CLIError as e:
        _output().error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except Exception as e:
        logger.exception("Unexpected error")
        _output().error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    raise typer.Exit(exit_code)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"problem-tracker version {VERSION}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    store: Optional[str] = typer.Option(
        None,
        "--store",
        help="Path to the store file (default: $PROBLEM_TRACKER_STORE or ~/.problem-tracker/store.yaml)",
        metavar="PATH",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    state.verbosity = verbosity
    state.no_color = no_color
    state.store_path = store
    _configure_logging(verbosity, logdir)


@app.command()
def add(
    url: str = typer.Argument(..., help="Problem URL"),
    title: Optional[str] = typer.Option(None, "--title", help="Title (scraped when omitted)"),
    difficulty: Optional[str] = typer.Option(None, "--difficulty", help="Easy, Medium or Hard"),
    status: Optional[str] = typer.Option(None, "--status", help="Not Started, Attempted or Solved"),
    notes: Optional[str] = typer.Option(None, "--notes", help="Free-form notes"),
    no_scrape: bool = typer.Option(False, "--no-scrape", help="Do not fetch the problem page"),
) -> None:
    """Track a problem (mirrored to Notion when auto-sync is on)."""
    _finish(lambda: ProblemCommands(_store(), _output()).add(
        url,
        title=title,
        difficulty=parse_choice(difficulty, Difficulty, "difficulty"),
        status=parse_choice(status, ProblemStatus, "status"),
        notes=notes,
        scrape=not no_scrape,
    ))


@app.command("list")
def list_problems(
    search: Optional[str] = typer.Option(None, "--search", help="Filter by title or slug"),
) -> None:
    """Show tracked problems."""
    _finish(lambda: ProblemCommands(_store(), _output()).list(search))


@app.command()
def delete(
    problem_id: str = typer.Argument(..., help="Problem id (or unique prefix)"),
    remote: bool = typer.Option(False, "--remote", help="Also archive the Notion page"),
) -> None:
    """Remove a tracked problem."""
    _finish(lambda: ProblemCommands(_store(), _output()).delete(problem_id, remote=remote))


@app.command()
def update(
    problem_id: str = typer.Argument(..., help="Problem id (or unique prefix)"),
    title: Optional[str] = typer.Option(None, "--title"),
    difficulty: Optional[str] = typer.Option(None, "--difficulty", help="Easy, Medium or Hard"),
    status: Optional[str] = typer.Option(None, "--status", help="Not Started, Attempted or Solved"),
    notes: Optional[str] = typer.Option(None, "--notes"),
) -> None:
    """Edit a tracked problem and push the change to Notion if configured."""
    _finish(lambda: ProblemCommands(_store(), _output()).update(
        problem_id,
        title=title,
        difficulty=parse_choice(difficulty, Difficulty, "difficulty"),
        status=parse_choice(status, ProblemStatus, "status"),
        notes=notes,
    ))


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove every tracked problem (Notion is not touched)."""
    if not yes and not typer.confirm("Delete all locally tracked problems?"):
        raise typer.Exit(ExitCode.SUCCESS)
    _finish(lambda: ProblemCommands(_store(), _output()).clear())


@app.command()
def sync(
    push_only: bool = typer.Option(
        False,
        "--push-only",
        help="Only create missing pages (never archive remote pages)",
    ),
) -> None:
    """Reconcile the local collection with the Notion database."""
    _finish(lambda: SyncCommand(_store(), _output()).run(bidirectional=not push_only))


@app.command("test-connection")
def test_connection() -> None:
    """Check that the Notion token works."""
    _finish(lambda: SetupCommand(_store(), _output()).test_connection())


@app.command()
def pages() -> None:
    """List pages that can hold the tracker database."""
    _finish(lambda: SetupCommand(_store(), _output()).list_pages())


@app.command("create-db")
def create_db(
    parent: Optional[str] = typer.Option(None, "--parent", help="Parent page id (default: first shared page)"),
    title: str = typer.Option(DEFAULT_DATABASE_TITLE, "--title", help="Database title"),
    with_status: bool = typer.Option(False, "--with-status", help="Add a Status column"),
) -> None:
    """Create the tracker database and make it the sync target."""
    _finish(lambda: SetupCommand(_store(), _output()).create_database(
        parent, title=title, include_status=with_status
    ))


@app.command()
def configure(
    database_id: Optional[str] = typer.Option(None, "--database-id"),
    parent_id: Optional[str] = typer.Option(None, "--parent-id"),
    parent_title: Optional[str] = typer.Option(None, "--parent-title"),
    auto_sync: Optional[bool] = typer.Option(None, "--auto-sync/--no-auto-sync"),
    with_status: Optional[bool] = typer.Option(None, "--with-status/--without-status"),
) -> None:
    """Change sync settings (shows them when no option is given)."""
    _finish(lambda: SetupCommand(_store(), _output()).configure(
        database_id=database_id,
        parent_page_id=parent_id,
        parent_page_title=parent_title,
        auto_sync=auto_sync,
        include_status=with_status,
    ))


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


if __name__ == "__main__":
    main()
