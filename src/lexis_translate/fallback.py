"""Fallback values written when a lookup finds no match."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import yaml
from lexis_core import FilterProcessingError, Record
from lexis_dictionary import DictionaryYamlLoader

from lexis_translate.config import FallbackFormat


@dataclass(frozen=True, slots=True)
class Fallback:
    """A fallback template and the deserialisation applied after rendering.

    The template is interpolated against each record, since it may reference
    other record fields.
    """

    template: str
    format: FallbackFormat = FallbackFormat.PLAIN

    def render(self, record: Record) -> Any:  # noqa: ANN401
        """Render the fallback for a record.

        Args:
            record: Record supplying ``%{field}`` values

        Returns:
            The rendered text, or the structure it deserialises to

        Raises:
            FilterProcessingError: If the rendered text cannot be deserialised

        """
        text = record.sprintf(self.template)
        match self.format:
            case FallbackFormat.PLAIN:
                return text
            case FallbackFormat.JSON:
                try:
                    return json.loads(text)
                except ValueError as e:
                    raise FilterProcessingError(
                        f"Fallback is not valid JSON after rendering: {e}"
                    ) from e
            case FallbackFormat.YAML:
                try:
                    return yaml.load(text, Loader=DictionaryYamlLoader)  # noqa: S506
                except yaml.YAMLError as e:
                    raise FilterProcessingError(
                        f"Fallback is not valid YAML after rendering: {e}"
                    ) from e
