"""Pipeline definitions and the multi-worker pipeline runner."""

from lexis.pipeline.errors import (
    FilterNotFoundError,
    PipelineError,
    PipelineParseError,
)
from lexis.pipeline.models import FilterDefinition, PipelineConfig, PipelineRunConfig
from lexis.pipeline.parser import parse_pipeline, parse_pipeline_from_dict
from lexis.pipeline.registry import FilterRegistry
from lexis.pipeline.runner import Pipeline, RunSummary

__all__ = [
    "FilterDefinition",
    "FilterNotFoundError",
    "FilterRegistry",
    "Pipeline",
    "PipelineConfig",
    "PipelineError",
    "PipelineParseError",
    "PipelineRunConfig",
    "RunSummary",
    "parse_pipeline",
    "parse_pipeline_from_dict",
]
