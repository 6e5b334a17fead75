"""Field references into nested records.

A field reference is either a bare top-level name (``status``) or a bracketed
path (``[http][response][0]``). Path segments that are entirely digits address
list positions when the container at that point is a list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from lexis_core.errors import FieldReferenceError

_BRACKETED_PATH = re.compile(r"^(\[[^\[\]]+\])+$")
_SEGMENT = re.compile(r"\[([^\[\]]+)\]")


@dataclass(frozen=True, slots=True)
class FieldReference:
    """Parsed, immutable field reference.

    Attributes:
        segments: Path segments from the record root to the field

    """

    segments: tuple[str, ...]

    @property
    def path(self) -> str:
        """Canonical bracketed form of the reference."""
        return "".join(f"[{segment}]" for segment in self.segments)

    def child(self, other: FieldReference) -> FieldReference:
        """Return a reference to ``other`` nested below this reference."""
        return FieldReference(self.segments + other.segments)

    def at_index(self, index: int) -> FieldReference:
        """Return a reference to list position ``index`` below this reference."""
        return FieldReference((*self.segments, str(index)))

    def __str__(self) -> str:
        return self.path


def ensure_reference_format(field: str) -> str:
    """Wrap a bare field name in brackets, leaving bracketed paths untouched."""
    if field.startswith("[") and field.endswith("]"):
        return field
    return f"[{field}]"


@lru_cache(maxsize=1024)
def parse_reference(field: str) -> FieldReference:
    """Parse a field reference string.

    Args:
        field: Bare field name or bracketed path

    Returns:
        The parsed reference

    Raises:
        FieldReferenceError: If the reference is empty or malformed

    """
    if not field or not field.strip():
        raise FieldReferenceError("Field reference must not be empty")

    if field.startswith("["):
        if not _BRACKETED_PATH.match(field):
            raise FieldReferenceError(f"Malformed field reference: '{field}'")
        return FieldReference(tuple(_SEGMENT.findall(field)))

    if "[" in field or "]" in field:
        raise FieldReferenceError(f"Malformed field reference: '{field}'")
    return FieldReference((field,))
