"""CLI command implementation for running pipelines."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import ExitStack
from pathlib import Path
from typing import TextIO

from lexis.cli.errors import CLIError, cli_error_handler
from lexis.cli.formatting import OutputFormatter
from lexis.logging import setup_logging
from lexis.pipeline import Pipeline, PipelineError, parse_pipeline

logger = logging.getLogger(__name__)


def _open_input(stack: ExitStack, input_path: Path | None) -> TextIO:
    if input_path is None:
        return sys.stdin
    try:
        return stack.enter_context(input_path.open(encoding="utf-8"))
    except OSError as e:
        raise CLIError(
            f"Cannot read input file {input_path}: {e}", command="run"
        ) from e


def _open_output(stack: ExitStack, output_path: Path | None) -> TextIO:
    if output_path is None:
        return sys.stdout
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        return stack.enter_context(output_path.open("w", encoding="utf-8"))
    except OSError as e:
        raise CLIError(
            f"Cannot write output file {output_path}: {e}", command="run"
        ) from e


def _write_lines(lines: Iterator[str], output: TextIO) -> None:
    for line in lines:
        output.write(line)
        output.write("\n")
    output.flush()


def execute_pipeline_command(  # noqa: PLR0913 - Matches CLI entry point signature
    pipeline_path: Path,
    input_path: Path | None = None,
    output_path: Path | None = None,
    workers: int | None = None,
    verbose: bool = False,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for running a pipeline over JSON-lines records.

    Args:
        pipeline_path: Path to the pipeline YAML file
        input_path: JSON-lines input file, stdin when omitted
        output_path: JSON-lines output file, stdout when omitted
        workers: Overrides the worker count of the pipeline definition
        verbose: Enable verbose output
        log_level: Logging level

    """
    effective_log_level = "DEBUG" if verbose else log_level
    setup_logging(level=effective_log_level)

    formatter = OutputFormatter()

    with cli_error_handler("run", "Pipeline execution failed"):
        try:
            config = parse_pipeline(pipeline_path)
            pipeline = Pipeline.from_config(config, workers=workers)
        except PipelineError as e:
            raise CLIError(f"Failed to load pipeline: {e}", command="run") from e

        formatter.show_startup_banner(
            pipeline_path, pipeline.workers, effective_log_level
        )

        with ExitStack() as stack:
            source = _open_input(stack, input_path)
            sink = _open_output(stack, output_path)
            with pipeline:
                _write_lines(pipeline.run(source), sink)

        formatter.show_run_summary(pipeline.summary)
