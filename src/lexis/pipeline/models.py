"""Pydantic models for pipeline definitions."""

from typing import Any, Self

from pydantic import BaseModel, Field, model_validator

DEFAULT_WORKERS = 1


class PipelineRunConfig(BaseModel):
    """Optional execution configuration for a pipeline."""

    workers: int = Field(default=DEFAULT_WORKERS, ge=1)
    """Number of worker threads records are processed on."""


class FilterDefinition(BaseModel):
    """Definition of a single filter in a pipeline."""

    name: str = Field(min_length=1)
    type: str
    properties: dict[str, Any] = Field(default_factory=dict)


class PipelineConfig(BaseModel):
    """Root model for a pipeline definition."""

    name: str
    description: str = ""
    config: PipelineRunConfig = Field(default_factory=PipelineRunConfig)
    filters: list[FilterDefinition] = Field(min_length=1)

    @model_validator(mode="after")
    def validate_unique_filter_names(self) -> Self:
        """Validate that filter names are unique within the pipeline."""
        seen: set[str] = set()
        for definition in self.filters:
            if definition.name in seen:
                raise ValueError(f"Duplicate filter name: '{definition.name}'")
            seen.add(definition.name)
        return self

    def get_filter(self, name: str) -> FilterDefinition | None:
        """Find a filter definition by name."""
        for definition in self.filters:
            if definition.name == name:
                return definition
        return None
