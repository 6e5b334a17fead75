"""CLI command implementation for single-value dictionary lookups."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from lexis_translate import TranslateFilter
from rich.console import Console

from lexis.cli.errors import CLIError, cli_error_handler
from lexis.logging import setup_logging
from lexis.pipeline import Pipeline, parse_pipeline

logger = logging.getLogger(__name__)
console = Console(stderr=True)


def lookup_value_command(
    pipeline_path: Path, filter_name: str, value: str, log_level: str = "WARNING"
) -> None:
    """CLI command implementation for looking up one value.

    Prints the translated value as JSON on stdout. Exits with status 1 when
    nothing matched.

    Args:
        pipeline_path: Path to the pipeline YAML file
        filter_name: Name of the translate filter in the pipeline
        value: The value to translate
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("lookup", "Lookup failed"):
        config = parse_pipeline(pipeline_path)
        definition = config.get_filter(filter_name)
        if definition is None:
            raise CLIError(
                f"No filter named '{filter_name}' in {pipeline_path}", command="lookup"
            )

        single = config.model_copy(update={"filters": [definition]})
        pipeline = Pipeline.from_config(single)
        with pipeline:
            translate = pipeline.get_filter(filter_name)
            if not isinstance(translate, TranslateFilter):
                raise CLIError(
                    f"Filter '{filter_name}' is not a translate filter", command="lookup"
                )
            match = translate.store.fetch(value)

    if match is None:
        console.print(f"[yellow]No match for '{value}'[/yellow]")
        raise typer.Exit(1)
    typer.echo(json.dumps(match.value, ensure_ascii=False))
