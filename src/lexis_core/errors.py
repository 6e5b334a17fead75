"""Error classes for the Lexis translation framework.

This module provides:
- LexisError: Base exception class for all framework errors
- ConfigurationError, UnsupportedDictionaryFormatError: Fatal configuration exceptions
- DictionaryError, DictionaryLoadError, DictionaryParseError,
  DictionarySizeLimitError, DictionaryPatternError: Dictionary exceptions
- FieldReferenceError: Record field reference exception
- FilterError, FilterProcessingError: Filter exceptions
"""


class LexisError(Exception):
    """Base exception for all Lexis framework errors."""

    pass


class ConfigurationError(LexisError):
    """Raised when component configuration is invalid.

    Configuration errors are fatal: they are raised while a component is being
    built and abort its initialisation.
    """

    pass


class UnsupportedDictionaryFormatError(ConfigurationError):
    """Raised when a dictionary file has an extension no parser handles."""

    pass


class DictionaryError(LexisError):
    """Base exception for dictionary-related errors."""

    pass


class DictionaryLoadError(DictionaryError):
    """Raised when the initial load of a dictionary fails."""

    pass


class DictionaryParseError(DictionaryError):
    """Raised when a dictionary source cannot be parsed into key/value pairs."""

    pass


class DictionarySizeLimitError(DictionaryParseError):
    """Raised when a dictionary file is larger than the configured limit."""

    pass


class DictionaryPatternError(DictionaryError, ConfigurationError):
    """Raised when a dictionary key is not a valid regular expression."""

    pass


class FieldReferenceError(LexisError):
    """Raised when a field reference cannot be parsed."""

    pass


class FilterError(LexisError):
    """Base exception for filter-related errors."""

    pass


class FilterProcessingError(FilterError):
    """Raised when a filter fails to process a single record."""

    pass
