"""Main entry point for the Lexis command line tool.

This module provides the command-line interface for Lexis, including
commands for:
- Running translate pipelines over JSON-lines records
- Validating pipelines and their dictionaries
- Looking up single values in a filter dictionary
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from lexis.cli import (
    execute_pipeline_command,
    lookup_value_command,
    validate_pipeline_command,
)

# Environment variables referenced as ${VAR} in pipeline files
load_dotenv()

app = typer.Typer(name="lexis", no_args_is_help=True)

PipelineArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to the pipeline YAML file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]

LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        case_sensitive=False,
    ),
]


@app.command()
def run(  # noqa: PLR0913 - CLI entry point with many options
    pipeline: PipelineArgument,
    input_path: Annotated[
        Path | None,
        typer.Option(
            "--input",
            "-i",
            help="JSON-lines file to read records from, defaults to stdin",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            rich_help_panel="Input/Output",
        ),
    ] = None,
    output_path: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="JSON-lines file to write records to, defaults to stdout",
            file_okay=True,
            dir_okay=False,
            writable=True,
            rich_help_panel="Input/Output",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-w",
            help="Number of worker threads, overrides the pipeline configuration",
            min=1,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable CLI verbose output (sets log level to DEBUG)",
        ),
    ] = False,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Translate JSON-lines records through a pipeline.

    Example:
        lexis run pipeline.yaml --input events.jsonl --output translated.jsonl
        cat events.jsonl | lexis run pipeline.yaml --workers 4

    """
    execute_pipeline_command(
        pipeline, input_path, output_path, workers, verbose, log_level
    )


@app.command()
def validate(
    pipeline: PipelineArgument,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Validate a pipeline and load its dictionaries."""
    validate_pipeline_command(pipeline, log_level)


@app.command()
def lookup(
    pipeline: PipelineArgument,
    filter_name: Annotated[
        str, typer.Argument(help="Name of the translate filter in the pipeline")
    ],
    value: Annotated[str, typer.Argument(help="Value to translate")],
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Look up a single value in a filter's dictionary."""
    lookup_value_command(pipeline, filter_name, value, log_level)


if __name__ == "__main__":
    app()
