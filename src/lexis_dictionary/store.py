"""Dictionary store: the authoritative holder of a translation dictionary.

The store owns the key/value mapping, its refresh state and the active match
strategy. Lookups take the read side of a reader/writer lock; loads take the
write side for the whole parse, rebuild and swap sequence, so readers only
ever observe a complete dictionary together with its matching derived state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from lexis_core import DictionaryLoadError, LexisError, deep_copy

from lexis_dictionary.locking import ReadWriteLock
from lexis_dictionary.scheduler import RefreshScheduler
from lexis_dictionary.sources import DictionarySource
from lexis_dictionary.strategies import (
    DictionaryMatch,
    MatchMode,
    MatchStrategy,
    create_strategy,
)

logger = logging.getLogger(__name__)

# Intervals at or below this many seconds check the source mtime before reloading
SHORT_REFRESH_THRESHOLD_SECONDS = 300.0


class UpdateMode(str, Enum):
    """How a reload combines new entries with the current dictionary."""

    MERGE = "merge"
    """Overlay new entries; keys absent from the source are kept."""

    REPLACE = "replace"
    """Discard the current entries, then load the source."""


class StoreState(str, Enum):
    """Lifecycle state of a DictionaryStore."""

    UNINITIALISED = "uninitialised"
    LOADED = "loaded"
    STOPPED = "stopped"


@dataclass(slots=True)
class RefreshState:
    """Bookkeeping that decides whether a scheduled reload must run.

    Attributes:
        refresh_interval: Seconds between scheduled reloads (<= 0 disables them)
        short_refresh: When set, reloads are skipped unless the source mtime changed
        last_modified: Source mtime recorded by the most recent load attempt

    """

    refresh_interval: float
    short_refresh: bool
    last_modified: float | None = None

    @classmethod
    def for_interval(cls, refresh_interval: float) -> RefreshState:
        """Build the refresh state for a configured interval."""
        return cls(
            refresh_interval=refresh_interval,
            short_refresh=refresh_interval <= SHORT_REFRESH_THRESHOLD_SECONDS,
        )


class DictionaryStore:
    """Thread-safe, self-refreshing translation dictionary.

    The first load happens during construction and is fatal on invalid input.
    File-backed stores with a positive refresh interval own a RefreshScheduler
    that calls reload() in the background once start() has been called.

    Example:
        ```python
        store = DictionaryStore(
            create_file_source("codes.yml"),
            MatchMode.EXACT,
            refresh_interval=60,
        )
        store.start()
        match = store.fetch("200")
        store.stop()
        ```

    """

    def __init__(
        self,
        source: DictionarySource,
        mode: MatchMode = MatchMode.EXACT,
        refresh_interval: float = 0,
        update_mode: UpdateMode = UpdateMode.MERGE,
    ) -> None:
        """Initialise the store and perform the first load.

        Args:
            source: Where dictionary entries come from
            mode: Match strategy used by fetch()
            refresh_interval: Seconds between scheduled reloads, <= 0 for load-once
            update_mode: Merge or replace semantics for reloads

        Raises:
            DictionaryLoadError: If the source exists but cannot be loaded

        """
        self._source = source
        self._lock = ReadWriteLock()
        self._mapping: dict[str, Any] = {}
        self._strategy: MatchStrategy = create_strategy(mode)
        self._strategy.rebuild(self._mapping)
        self._update_mode = update_mode
        self._refresh = RefreshState.for_interval(refresh_interval)
        self._state = StoreState.UNINITIALISED

        self._scheduler: RefreshScheduler | None = None
        if refresh_interval > 0 and source.refreshable:
            self._scheduler = RefreshScheduler(
                self.reload, refresh_interval, name=source.description
            )

        self.load(raise_on_error=True)

    # === Introspection ===

    @property
    def state(self) -> StoreState:
        """Current lifecycle state."""
        return self._state

    @property
    def mode(self) -> MatchMode:
        """Match mode of the active strategy."""
        return self._strategy.mode

    @property
    def update_mode(self) -> UpdateMode:
        """Reload semantics currently in effect."""
        return self._update_mode

    @property
    def refresh_state(self) -> RefreshState:
        """Refresh bookkeeping (interval, short-refresh flag, last mtime)."""
        return self._refresh

    @property
    def source(self) -> DictionarySource:
        """The source this store loads from."""
        return self._source

    @property
    def scheduler(self) -> RefreshScheduler | None:
        """The owned refresh scheduler, if periodic refresh is enabled."""
        return self._scheduler

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._mapping)

    def keys(self) -> list[str]:
        """Dictionary keys in insertion order."""
        with self._lock.read_locked():
            return list(self._mapping)

    def snapshot(self) -> dict[str, Any]:
        """Deep copy of the current dictionary."""
        with self._lock.read_locked():
            return deep_copy(self._mapping)

    # === Lookup ===

    def fetch(self, source_value: str) -> DictionaryMatch | None:
        """Look up a value with the active match strategy.

        Only the read lock is held, so any number of lookups run concurrently.
        The returned value is a deep copy the caller may mutate freely.

        Args:
            source_value: The value to translate

        Returns:
            The match, or None when nothing matched

        """
        with self._lock.read_locked():
            match = self._strategy.fetch(source_value)
            if match is None:
                return None
            return DictionaryMatch(deep_copy(match.value))

    # === Loading ===

    def set_update_mode(self, update_mode: UpdateMode) -> None:
        """Select merge or replace semantics for subsequent loads."""
        self._update_mode = update_mode

    def load(self, raise_on_error: bool = False) -> bool:
        """Load the source into the dictionary.

        The next mapping is built from a copy of the current one (merge) or from
        scratch (replace), the strategy is rebuilt against it, and only then is
        it installed. Any failure leaves the previous mapping and strategy in
        effect.

        A missing source file is always tolerated with a warning, even on the
        first load, so the file can appear later.

        Args:
            raise_on_error: Raise DictionaryLoadError instead of logging failures

        Returns:
            True if a new dictionary was installed

        Raises:
            DictionaryLoadError: If loading fails and raise_on_error is set

        """
        with self._lock.write_locked():
            try:
                installed = self._load_locked()
            except FileNotFoundError:
                logger.warning(
                    "Dictionary file read failure, continuing with old dictionary: %s",
                    self._source.description,
                )
                installed = False
            except (LexisError, OSError) as e:
                message = f"{e} when loading {self._source.description}"
                if raise_on_error:
                    raise DictionaryLoadError(message) from e
                logger.warning("%s, continuing with old dictionary", message)
                installed = False

            if self._state is StoreState.UNINITIALISED:
                self._state = StoreState.LOADED
            return installed

    def _load_locked(self) -> bool:
        self._refresh.last_modified = self._source.modified_time()
        pairs = self._source.read()

        if self._update_mode is UpdateMode.REPLACE:
            mapping: dict[str, Any] = {}
        else:
            mapping = dict(self._mapping)
        mapping.update(pairs)

        self._strategy.rebuild(mapping)
        self._mapping = mapping
        logger.debug(
            "Loaded %d entries from %s (%s)",
            len(mapping),
            self._source.description,
            self._update_mode.value,
        )
        return True

    def needs_refresh(self) -> bool:
        """Check whether the source changed since the last load attempt.

        Raises:
            FileNotFoundError: If the source file is missing

        """
        modified = self._source.modified_time()
        with self._lock.read_locked():
            return modified != self._refresh.last_modified

    def reload(self) -> bool:
        """Reload the dictionary; the entry point of the refresh scheduler.

        Behaves like load(raise_on_error=False). With a short refresh interval
        the reload is skipped unless the source modification time changed.

        Returns:
            True if a new dictionary was installed

        """
        if not self._source.refreshable:
            return False
        if self._refresh.short_refresh:
            try:
                if not self.needs_refresh():
                    return False
            except FileNotFoundError:
                logger.warning(
                    "Dictionary file read failure, continuing with old dictionary: %s",
                    self._source.description,
                )
                return False
        logger.info("Refreshing %s", self._source.description)
        return self.load(raise_on_error=False)

    # === Lifecycle ===

    def start(self) -> None:
        """Start periodic refreshing, if enabled for this store."""
        if self._scheduler is not None and self._state is not StoreState.STOPPED:
            self._scheduler.start()

    def stop(self) -> None:
        """Stop periodic refreshing.

        Blocks until an in-flight reload finishes. Idempotent. The store stays
        queryable with its last dictionary.
        """
        if self._scheduler is not None:
            self._scheduler.stop()
        self._state = StoreState.STOPPED
