"""Lexis Translation Framework - Core Abstractions.

This package provides the base abstractions shared by all Lexis components:
records, field references, configuration, filters and the error hierarchy.
"""

__version__ = "0.1.0"

from lexis_core.base_filter import Filter
from lexis_core.component_factory import ComponentConfig, ComponentFactory
from lexis_core.configuration import BaseComponentConfiguration
from lexis_core.errors import (
    ConfigurationError,
    DictionaryError,
    DictionaryLoadError,
    DictionaryParseError,
    DictionaryPatternError,
    DictionarySizeLimitError,
    FieldReferenceError,
    FilterError,
    FilterProcessingError,
    LexisError,
    UnsupportedDictionaryFormatError,
)
from lexis_core.field_reference import (
    FieldReference,
    ensure_reference_format,
    parse_reference,
)
from lexis_core.record import Record
from lexis_core.utils import as_text, deep_copy

__all__ = [
    # Version
    "__version__",
    # Base classes
    "Filter",
    "Record",
    # Configuration
    "BaseComponentConfiguration",
    "ComponentConfig",
    "ComponentFactory",
    # Field references
    "FieldReference",
    "ensure_reference_format",
    "parse_reference",
    # Utilities
    "as_text",
    "deep_copy",
    # Errors
    "LexisError",
    "ConfigurationError",
    "DictionaryError",
    "DictionaryLoadError",
    "DictionaryParseError",
    "DictionaryPatternError",
    "DictionarySizeLimitError",
    "FieldReferenceError",
    "FilterError",
    "FilterProcessingError",
    "UnsupportedDictionaryFormatError",
]
