"""Error types for pipeline failures."""

from lexis_core import LexisError


class PipelineError(LexisError):
    """Base exception for all pipeline errors."""


class PipelineParseError(PipelineError):
    """Raised when pipeline parsing fails."""


class FilterNotFoundError(PipelineError):
    """Raised when a pipeline references an unknown filter type or name."""
