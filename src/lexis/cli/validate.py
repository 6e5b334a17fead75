"""CLI command implementation for pipeline validation."""

from __future__ import annotations

import logging
from pathlib import Path

from lexis.cli.errors import cli_error_handler
from lexis.cli.formatting import OutputFormatter
from lexis.logging import setup_logging
from lexis.pipeline import Pipeline, parse_pipeline

logger = logging.getLogger(__name__)


def validate_pipeline_command(pipeline_path: Path, log_level: str = "INFO") -> None:
    """CLI command implementation for validating pipelines.

    Parses the pipeline, builds its filters and performs the first load of
    every dictionary, without processing any records.

    Args:
        pipeline_path: Path to the pipeline YAML file
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("validate", "Pipeline validation failed"):
        config = parse_pipeline(pipeline_path)
        with Pipeline.from_config(config) as pipeline:
            OutputFormatter().format_pipeline(config, pipeline)
        logger.info("Pipeline %s is valid", pipeline_path)
