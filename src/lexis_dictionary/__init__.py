"""Self-refreshing translation dictionaries for Lexis filters.

Provides dictionary sources (inline, YAML, JSON, CSV), the three match
strategies, the thread-safe DictionaryStore and its RefreshScheduler.
"""

from lexis_dictionary.locking import ReadWriteLock
from lexis_dictionary.scheduler import RefreshScheduler
from lexis_dictionary.sources import (
    DEFAULT_MAX_BYTES,
    DictionaryYamlLoader,
    CsvFileSource,
    DictionarySource,
    FileSource,
    InlineSource,
    JsonFileSource,
    YamlFileSource,
    create_file_source,
    supported_extensions,
)
from lexis_dictionary.store import (
    SHORT_REFRESH_THRESHOLD_SECONDS,
    DictionaryStore,
    RefreshState,
    StoreState,
    UpdateMode,
)
from lexis_dictionary.strategies import (
    DictionaryMatch,
    ExactRegexStrategy,
    ExactStrategy,
    MatchMode,
    MatchStrategy,
    RegexUnionStrategy,
    create_strategy,
)

__all__ = [
    # Sources
    "DEFAULT_MAX_BYTES",
    "DictionaryYamlLoader",
    "CsvFileSource",
    "DictionarySource",
    "FileSource",
    "InlineSource",
    "JsonFileSource",
    "YamlFileSource",
    "create_file_source",
    "supported_extensions",
    # Strategies
    "DictionaryMatch",
    "ExactRegexStrategy",
    "ExactStrategy",
    "MatchMode",
    "MatchStrategy",
    "RegexUnionStrategy",
    "create_strategy",
    # Store
    "SHORT_REFRESH_THRESHOLD_SECONDS",
    "DictionaryStore",
    "ReadWriteLock",
    "RefreshScheduler",
    "RefreshState",
    "StoreState",
    "UpdateMode",
]
