"""Match strategies for dictionary lookups.

Three strategies are available, selected once from the ``exact`` and ``regex``
settings:

EXACT: whole-string equality against dictionary keys.

EXACT_REGEX: every key is a regular expression; the first key, in dictionary
    insertion order, whose pattern matches anywhere in the source value wins.
    Lookups scan all keys, so this mode is O(number of keys) per lookup and is
    not suited to dictionaries with more than a few thousand entries.

REGEX_UNION: keys are literal strings combined into one alternation; every
    occurrence of any key in the source value is substituted with its value.
    At each position the earliest inserted matching key wins. A substitution
    that leaves the value unchanged is reported as no match.

Strategies are not thread safe on their own; DictionaryStore serialises
``rebuild`` against ``fetch`` with its reader/writer lock.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from lexis_core import DictionaryPatternError, as_text

logger = logging.getLogger(__name__)

# Pattern used for an empty dictionary; it never matches
_NEVER_MATCHES = re.compile(r"(?!)")


@dataclass(frozen=True, slots=True)
class DictionaryMatch:
    """Result of a successful lookup.

    Dictionary values may themselves be ``None``, so a miss is reported as the
    absence of a DictionaryMatch rather than a ``None`` value.
    """

    value: Any


class MatchMode(Enum):
    """The closed set of match strategies."""

    EXACT = "exact"
    EXACT_REGEX = "exact_regex"
    REGEX_UNION = "regex_union"

    @classmethod
    def from_flags(cls, exact: bool, regex: bool) -> MatchMode:
        """Select the mode from the ``exact`` and ``regex`` settings.

        ``regex`` is ignored when ``exact`` is disabled.
        """
        if not exact:
            return cls.REGEX_UNION
        return cls.EXACT_REGEX if regex else cls.EXACT


class MatchStrategy(Protocol):
    """Interface shared by the match strategies."""

    mode: MatchMode

    def rebuild(self, mapping: dict[str, Any]) -> None:
        """Recompute derived state for a new dictionary.

        Derived state is built completely before it replaces the current
        state, so a failing rebuild leaves the strategy untouched.

        Raises:
            DictionaryPatternError: If a key is not a valid pattern

        """
        ...

    def fetch(self, source: str) -> DictionaryMatch | None:
        """Look up a source value, returning the raw (uncopied) match."""
        ...


class ExactStrategy:
    """Whole-string equality lookup."""

    mode = MatchMode.EXACT

    def __init__(self) -> None:
        """Initialise with an empty dictionary."""
        self._mapping: dict[str, Any] = {}

    def rebuild(self, mapping: dict[str, Any]) -> None:
        self._mapping = mapping

    def fetch(self, source: str) -> DictionaryMatch | None:
        if source in self._mapping:
            return DictionaryMatch(self._mapping[source])
        return None


class ExactRegexStrategy:
    """First-match-wins lookup with every key compiled as a pattern."""

    mode = MatchMode.EXACT_REGEX

    def __init__(self) -> None:
        """Initialise with no compiled patterns."""
        self._mapping: dict[str, Any] = {}
        self._patterns: tuple[tuple[re.Pattern[str], str], ...] = ()

    def rebuild(self, mapping: dict[str, Any]) -> None:
        # compiling is the expensive part of a reload, once per key
        patterns: list[tuple[re.Pattern[str], str]] = []
        for key in mapping:
            try:
                patterns.append((re.compile(key), key))
            except re.error as e:
                raise DictionaryPatternError(
                    f"Dictionary key '{key}' is not a valid regular expression: {e}"
                ) from e
        self._patterns = tuple(patterns)
        self._mapping = mapping
        logger.debug("Compiled %d dictionary key patterns", len(patterns))

    def fetch(self, source: str) -> DictionaryMatch | None:
        for pattern, key in self._patterns:
            if pattern.search(source):
                return DictionaryMatch(self._mapping[key])
        return None


class RegexUnionStrategy:
    """Substring substitution over a single alternation of literal keys."""

    mode = MatchMode.REGEX_UNION

    def __init__(self) -> None:
        """Initialise with a pattern that never matches."""
        self._mapping: dict[str, Any] = {}
        self._union: re.Pattern[str] = _NEVER_MATCHES

    def rebuild(self, mapping: dict[str, Any]) -> None:
        if mapping:
            union = re.compile("|".join(re.escape(key) for key in mapping))
        else:
            union = _NEVER_MATCHES
        self._union = union
        self._mapping = mapping

    def fetch(self, source: str) -> DictionaryMatch | None:
        mapping = self._mapping
        translated = self._union.sub(
            lambda match: as_text(mapping[match.group(0)]), source
        )
        # an identity substitution is indistinguishable from no match
        if translated == source:
            return None
        return DictionaryMatch(translated)


def create_strategy(mode: MatchMode) -> MatchStrategy:
    """Create an empty strategy for a match mode.

    Args:
        mode: The selected match mode

    Returns:
        A strategy that must be rebuilt before use

    """
    match mode:
        case MatchMode.EXACT:
            return ExactStrategy()
        case MatchMode.EXACT_REGEX:
            return ExactRegexStrategy()
        case MatchMode.REGEX_UNION:
            return RegexUnionStrategy()
