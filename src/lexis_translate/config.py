"""Configuration model for the translate filter."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Self

from lexis_core import BaseComponentConfiguration, FieldReferenceError, parse_reference
from lexis_dictionary import DEFAULT_MAX_BYTES, UpdateMode, supported_extensions
from pydantic import AliasChoices, Field, field_validator, model_validator

DEFAULT_TARGET = "translation"
DEFAULT_REFRESH_INTERVAL = 300


class FallbackFormat(str, Enum):
    """How a rendered fallback template is turned into a value.

    PLAIN: the rendered text is used as-is.
    JSON: the rendered text is parsed as JSON.
    YAML: the rendered text is parsed as YAML.
    """

    PLAIN = "plain"
    JSON = "json"
    YAML = "yaml"


class TranslateFilterConfig(BaseComponentConfiguration):
    """Strongly typed configuration for the translate filter.

    Field names follow the pipeline properties; ``field`` and ``destination``
    are accepted as aliases of ``source`` and ``target``.
    """

    source: str = Field(
        validation_alias=AliasChoices("source", "field"),
        description="Field holding the value to translate (e.g. 'status' or '[http][status]')",
    )
    target: str = Field(
        default=DEFAULT_TARGET,
        validation_alias=AliasChoices("target", "destination"),
        description="Field receiving the translated value",
    )
    iterate_on: str | None = Field(
        default=None,
        description=(
            "Field holding a list to translate element-wise. Equal to 'source' for a "
            "list of values, otherwise a list of objects each holding 'source'"
        ),
    )
    dictionary: dict[Any, Any] | None = Field(
        default=None,
        description="Inline dictionary, mutually exclusive with 'dictionary_path'",
    )
    dictionary_path: Path | None = Field(
        default=None,
        description="YAML, JSON or CSV dictionary file, mutually exclusive with 'dictionary'",
    )
    refresh_interval: float = Field(
        default=DEFAULT_REFRESH_INTERVAL,
        description="Seconds between dictionary file reloads, 0 or less to load once",
    )
    refresh_behaviour: UpdateMode = Field(
        default=UpdateMode.MERGE,
        description="Whether reloads merge into or replace the current dictionary",
    )
    exact: bool = Field(
        default=True,
        description="Match whole values; when false, substitute keys found inside values",
    )
    regex: bool = Field(
        default=False,
        description="Treat dictionary keys as regular expressions (exact mode only)",
    )
    override: bool = Field(
        default=False,
        description="Overwrite the target field when it already holds a value",
    )
    fallback: str | None = Field(
        default=None,
        description="Template written to the target when nothing matches; supports %{field}",
    )
    fallback_format: FallbackFormat = Field(
        default=FallbackFormat.PLAIN,
        description="Deserialisation applied to the rendered fallback",
    )
    dictionary_file_max_bytes: int | None = Field(
        default=DEFAULT_MAX_BYTES,
        ge=1,
        description="Largest accepted dictionary file size in bytes",
    )
    add_tag: list[str] = Field(
        default_factory=list,
        description="Tags added to records the filter matched",
    )

    @field_validator("source", "target", "iterate_on")
    @classmethod
    def validate_field_reference(cls, value: str | None) -> str | None:
        """Validate that field settings are well-formed field references."""
        if value is None:
            return value
        try:
            parse_reference(value)
        except FieldReferenceError as e:
            raise ValueError(str(e)) from e
        return value

    @model_validator(mode="after")
    def validate_dictionary_source(self) -> Self:
        """Validate that exactly one dictionary source is configured."""
        if self.dictionary is not None and self.dictionary_path is not None:
            raise ValueError(
                "The configuration options 'dictionary' and 'dictionary_path' "
                "are mutually exclusive"
            )
        if self.dictionary is None and self.dictionary_path is None:
            raise ValueError(
                "Either 'dictionary' or 'dictionary_path' must be configured"
            )
        if self.dictionary_path is not None:
            suffix = self.dictionary_path.suffix.lower()
            if suffix not in supported_extensions():
                raise ValueError(
                    f"Dictionary {self.dictionary_path} has a non valid format. "
                    f"Supported extensions: {', '.join(supported_extensions())}"
                )
        return self

    @property
    def same_field(self) -> bool:
        """Whether the filter translates a field in place."""
        return parse_reference(self.source) == parse_reference(self.target)
