"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich for spinners, tables, colored output and formatted sync summaries.
Supports verbosity levels and the --no-color flag.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.table import Table

from src.problems.models import Problem
from src.sync_engine.database_setup import ParentPage
from src.sync_engine.models import SyncMode, SyncResult

MAX_DISPLAYED_ERRORS = 3


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Logging verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output
        logger: Python logger for verbose output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        logger = logging.getLogger("problem-tracker")

        if self.verbosity >= 2:
            logger.setLevel(logging.DEBUG)
        elif self.verbosity >= 1:
            logger.setLevel(logging.INFO)
        else:
            logger.setLevel(logging.WARNING)

        logger.handlers.clear()
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(handler)

        return logger

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print(self, message: str) -> None:
        self.console.print(message)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Example:
            >>> with handler.spinner("Syncing with Notion..."):
            ...     pass
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10):
            yield

    def print_sync_summary(self, result: SyncResult) -> None:
        """Display the one-line status of a completed sync plus the first errors."""
        parts = [f"{result.added} added"]
        if result.mode == SyncMode.BIDIRECTIONAL:
            parts.append(f"{result.deleted} deleted")
        parts.append(f"{result.skipped} skipped")
        parts.append(f"{result.failed} failed")
        summary = "Sync completed! " + ", ".join(parts) + "."

        if result.failed:
            self.warning(summary)
            self.console.print("\n[bold]First errors:[/bold]")
            for message in result.first_errors(MAX_DISPLAYED_ERRORS):
                self.console.print(f"  • {message}", markup=False)
            hidden = len(result.errors) - MAX_DISPLAYED_ERRORS
            if hidden > 0:
                self.console.print(f"  [dim]... and {hidden} more[/dim]")
        elif result.added == 0 and result.deleted == 0:
            self.success(summary + " Already in sync.")
        else:
            self.success(summary)

    def print_problems(self, problems: List[Problem]) -> None:
        """Display the local collection as a table."""
        if not problems:
            self.console.print("[yellow]No problems tracked yet[/yellow]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Problem")
        table.add_column("Slug")
        table.add_column("Difficulty")
        table.add_column("Status")
        table.add_column("Added")

        for problem in problems:
            table.add_row(
                problem.id[:8],
                problem.title,
                problem.slug,
                problem.difficulty.value if problem.difficulty else "-",
                problem.status.value if problem.status else "-",
                problem.date_added.split('T')[0],
            )
        self.console.print(table)

    def print_parent_pages(self, pages: List[ParentPage]) -> None:
        if not pages:
            self.console.print(
                "[yellow]No pages shared with the integration. "
                "Share a page with it in Notion first.[/yellow]"
            )
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Page ID", no_wrap=True)
        table.add_column("Title")
        for page in pages:
            table.add_row(page.id, page.title)
        self.console.print(table)
