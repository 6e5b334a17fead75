"""Utility functions for the Lexis translation framework."""

import json
from typing import Any


def deep_copy(value: Any) -> Any:  # noqa: ANN401
    """Recursively copy a dictionary value.

    Values are drawn from a small closed set of shapes: scalars, ordered
    sequences and string-keyed maps. Scalars are immutable and returned as-is;
    containers are rebuilt level by level so the copy shares no mutable state
    with the original.

    Args:
        value: Scalar, list, tuple or dict value

    Returns:
        An unaliased copy of the value

    """
    if isinstance(value, dict):
        return {key: deep_copy(item) for key, item in value.items()}
    if isinstance(value, list):
        return [deep_copy(item) for item in value]
    if isinstance(value, tuple):
        return tuple(deep_copy(item) for item in value)
    return value


def as_text(value: Any) -> str:  # noqa: ANN401
    """Render a dictionary or record value as text.

    Strings are returned unchanged, ``None`` renders as an empty string,
    booleans as ``true``/``false`` and containers as compact JSON.

    Args:
        value: Value to render

    Returns:
        Text representation of the value

    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)
