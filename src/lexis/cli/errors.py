"""CLI error reporting for Lexis commands.

Failures are shown as a Rich panel on stderr and the command exits with
status 1. The panel title names the kind of failure, found by walking the
exception's cause chain, and a hint points at the setting to check.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass

import typer
from lexis_core import (
    ConfigurationError,
    DictionaryLoadError,
    DictionaryPatternError,
    LexisError,
)
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from lexis.pipeline import FilterNotFoundError, PipelineParseError

logger = logging.getLogger(__name__)
console = Console(stderr=True)


class CLIError(LexisError):
    """A command failure with a message meant for the user.

    Raise it ``from`` the underlying error so the report can name that
    error's kind.
    """

    def __init__(self, message: str, command: str | None = None) -> None:
        """Initialise the error.

        Args:
            message: What went wrong, in user terms
            command: Name of the failing command (e.g. "run", "lookup")

        """
        super().__init__(message)
        self.command = command


@dataclass(frozen=True, slots=True)
class ErrorReport:
    """How a kind of failure is presented."""

    title: str
    hint: str | None = None


# Most specific first: DictionaryPatternError is also a ConfigurationError
_REPORTS: tuple[tuple[type[BaseException], ErrorReport], ...] = (
    (
        PipelineParseError,
        ErrorReport(
            "Invalid pipeline file",
            "Check the YAML syntax, the required fields and any ${VAR} "
            "environment variables.",
        ),
    ),
    (
        FilterNotFoundError,
        ErrorReport(
            "Unknown filter",
            "Built-in filter types: translate. Others come from installed "
            "'lexis.filters' plugins.",
        ),
    ),
    (
        DictionaryPatternError,
        ErrorReport(
            "Invalid dictionary pattern",
            "With 'regex' enabled every dictionary key must be a valid "
            "regular expression.",
        ),
    ),
    (
        DictionaryLoadError,
        ErrorReport(
            "Dictionary could not be loaded",
            "Check 'dictionary_path', the file contents and "
            "'dictionary_file_max_bytes'.",
        ),
    ),
    (
        ConfigurationError,
        ErrorReport(
            "Invalid filter configuration",
            "Check the filter properties in the pipeline file.",
        ),
    ),
)


def describe_error(error: BaseException) -> ErrorReport | None:
    """Find the report for an error.

    The deepest known error in the ``__cause__`` chain decides, so a
    dictionary load failure caused by a bad pattern reports the pattern.

    Returns:
        The matching report, or None for errors of no known kind

    """
    chain: list[BaseException] = []
    current: BaseException | None = error
    while current is not None and all(current is not seen for seen in chain):
        chain.append(current)
        current = current.__cause__

    for cause in reversed(chain):
        for error_type, report in _REPORTS:
            if isinstance(cause, error_type):
                return report
    return None


def show_error(error: BaseException, command: str, default_title: str) -> None:
    """Log an error and print it as a panel on stderr."""
    report = describe_error(error)
    title = report.title if report is not None else default_title
    body = f"[red]{escape(str(error))}[/red]"
    if report is not None and report.hint:
        body += f"\n\n[dim]{escape(report.hint)}[/dim]"

    logger.error("%s: %s", title, error)
    console.print(
        Panel(body, title=f"❌ {title}", subtitle=f"lexis {command}", border_style="red")
    )


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Report any failure inside the block and exit with status 1.

    Args:
        command: CLI command name shown with the error
        title: Panel title for errors of no known kind

    """
    try:
        yield
    except Exception as e:
        show_error(e, command, title)
        raise typer.Exit(1) from e
