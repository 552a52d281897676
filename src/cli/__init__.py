"""Command-line interface for the problem tracker.

This package provides the `problem-tracker` CLI tool: local collection
commands, Notion setup commands and the sync command, with Rich output
and exit codes that distinguish schema, auth and network failures.
"""

from .config import ConfigLoader, resolve_store_path
from .errors import CLIError, NotConfiguredError, ProblemNotFoundError
from .models import ExitCode, SyncConfig
from .problem_commands import ProblemCommands
from .setup_command import SetupCommand
from .sync_command import SyncCommand

__all__ = [
    'ConfigLoader',
    'resolve_store_path',
    'CLIError',
    'NotConfiguredError',
    'ProblemNotFoundError',
    'ExitCode',
    'SyncConfig',
    'ProblemCommands',
    'SetupCommand',
    'SyncCommand',
]
