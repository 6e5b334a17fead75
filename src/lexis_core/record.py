"""Record handling for Lexis filters.

This module provides:
- Record: the structured event passed through filter pipelines
- field access by reference (get / set / includes)
- ``%{field}`` template interpolation used by fallback values
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Self

from lexis_core.errors import FieldReferenceError
from lexis_core.field_reference import FieldReference, parse_reference
from lexis_core.utils import as_text

_TEMPLATE_REFERENCE = re.compile(r"%\{([^{}]+)\}")

_MISSING = object()


def _as_reference(ref: str | FieldReference) -> FieldReference:
    if isinstance(ref, FieldReference):
        return ref
    return parse_reference(ref)


def _list_index(segment: str) -> int | None:
    if segment.lstrip("-").isdigit():
        return int(segment)
    return None


@dataclass(slots=True)
class Record:
    """Structured record flowing through a filter pipeline.

    Records hold an arbitrarily nested JSON-like payload. Fields are addressed
    with field references (``status`` or ``[http][codes][0]``).
    """

    data: dict[str, Any] = field(default_factory=dict)
    """The record payload."""

    tags: list[str] = field(default_factory=list)
    """Tags added by filters that matched this record."""

    # === Field access ===

    def _lookup(self, ref: FieldReference) -> Any:  # noqa: ANN401
        current: Any = self.data
        for segment in ref.segments:
            if isinstance(current, dict):
                if segment not in current:
                    return _MISSING
                current = current[segment]
            elif isinstance(current, list):
                index = _list_index(segment)
                if index is None or not -len(current) <= index < len(current):
                    return _MISSING
                current = current[index]
            else:
                return _MISSING
        return current

    def get(self, ref: str | FieldReference, default: Any = None) -> Any:  # noqa: ANN401
        """Get the value at a field reference, or ``default`` when absent."""
        value = self._lookup(_as_reference(ref))
        return default if value is _MISSING else value

    def includes(self, ref: str | FieldReference) -> bool:
        """Check whether the record holds a value at a field reference."""
        return self._lookup(_as_reference(ref)) is not _MISSING

    def set(self, ref: str | FieldReference, value: Any) -> None:  # noqa: ANN401
        """Set the value at a field reference, creating intermediate maps.

        Scalars along the path are replaced by maps. List positions beyond the
        end of an existing list are padded with ``None``.

        Raises:
            TypeError: If a list is addressed with a non-numeric segment

        """
        segments = _as_reference(ref).segments
        current: Any = self.data
        for position, segment in enumerate(segments):
            is_last = position == len(segments) - 1
            if isinstance(current, dict):
                if is_last:
                    current[segment] = value
                    return
                if not isinstance(current.get(segment), (dict, list)):
                    current[segment] = {}
                current = current[segment]
            elif isinstance(current, list):
                index = _list_index(segment)
                if index is None:
                    raise TypeError(
                        f"Cannot address list with non-numeric segment '{segment}'"
                    )
                if index >= len(current):
                    current.extend([None] * (index + 1 - len(current)))
                if is_last:
                    current[index] = value
                    return
                if not isinstance(current[index], (dict, list)):
                    current[index] = {}
                current = current[index]
            else:
                raise TypeError(
                    f"Cannot set field below scalar value at segment '{segment}'"
                )

    def add_tag(self, tag: str) -> None:
        """Add a tag to the record if it is not already present."""
        if tag not in self.tags:
            self.tags.append(tag)

    # === Templates ===

    def sprintf(self, template: str) -> str:
        """Interpolate ``%{field}`` references in a template.

        Each ``%{name}`` or ``%{[a][b]}`` is replaced by the text form of the
        field value. References to absent fields are left verbatim.

        Args:
            template: Template text

        Returns:
            The rendered text

        """
        if "%{" not in template:
            return template

        def _replace(match: re.Match[str]) -> str:
            try:
                ref = parse_reference(match.group(1).strip())
            except FieldReferenceError:
                return match.group(0)
            value = self._lookup(ref)
            if value is _MISSING:
                return match.group(0)
            return as_text(value)

        return _TEMPLATE_REFERENCE.sub(_replace, template)

    # === Serialisation ===

    def to_dict(self) -> dict[str, Any]:
        """Serialise the record, including tags when present."""
        result = dict(self.data)
        if self.tags:
            result["tags"] = list(self.tags)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build a record from a dictionary, lifting a ``tags`` list if present."""
        payload = dict(data)
        tags = payload.pop("tags", None)
        if not isinstance(tags, list):
            if tags is not None:
                payload["tags"] = tags
            tags = []
        return cls(data=payload, tags=[str(tag) for tag in tags])
