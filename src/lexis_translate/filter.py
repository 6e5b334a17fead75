"""Translate filter: dictionary lookups applied to record fields."""

from __future__ import annotations

import logging
from typing import override

from lexis_core import Filter, FilterError, Record
from lexis_dictionary import (
    DictionarySource,
    DictionaryStore,
    InlineSource,
    MatchMode,
    create_file_source,
)

from lexis_translate.config import TranslateFilterConfig
from lexis_translate.fallback import Fallback
from lexis_translate.updaters import FieldUpdater, create_updater

logger = logging.getLogger(__name__)

# Resource exhaustion is never contained by the per-record error boundary
FATAL_ERRORS: tuple[type[BaseException], ...] = (MemoryError, RecursionError)


class TranslateFilter(Filter):
    """Translate a record field using a dictionary.

    The dictionary is given inline or loaded from a YAML, JSON or CSV file
    that is periodically reloaded. Matching is exact, exact against regular
    expression keys, or substitution of every key found in the value.

    Example pipeline entry:
        ```yaml
        - name: http_status
          type: translate
          properties:
            source: "[http][status]"
            target: "[http][status_text]"
            dictionary_path: ./dictionaries/http.yml
            refresh_interval: 60
            fallback: "unknown"
        ```

    """

    def __init__(self, config: TranslateFilterConfig) -> None:
        """Initialise the filter with a validated configuration.

        Args:
            config: Translate filter configuration

        """
        self._config = config
        self._store: DictionaryStore | None = None
        self._updater: FieldUpdater | None = None

    @classmethod
    @override
    def get_name(cls) -> str:
        """Return the filter type name."""
        return "translate"

    @property
    def config(self) -> TranslateFilterConfig:
        """The filter configuration."""
        return self._config

    @property
    def store(self) -> DictionaryStore:
        """The dictionary store backing this filter.

        Raises:
            FilterError: If the filter has not been registered

        """
        if self._store is None:
            raise FilterError("Translate filter used before register()")
        return self._store

    @override
    def register(self) -> None:
        """Load the dictionary and start refreshing it.

        Raises:
            DictionaryLoadError: If the dictionary exists but cannot be loaded

        """
        config = self._config
        source = self._create_source()
        refresh_interval = (
            config.refresh_interval if config.dictionary_path is not None else 0
        )

        self._store = DictionaryStore(
            source,
            MatchMode.from_flags(exact=config.exact, regex=config.regex),
            refresh_interval=refresh_interval,
            update_mode=config.refresh_behaviour,
        )

        fallback = (
            Fallback(config.fallback, config.fallback_format)
            if config.fallback is not None
            else None
        )
        self._updater = create_updater(config, self._store, fallback)
        self._store.start()

        logger.info(
            "Registered translate filter on %s -> %s (%s, %d entries)",
            config.source,
            config.target,
            self._store.mode.value,
            len(self._store),
        )

    def _create_source(self) -> DictionarySource:
        config = self._config
        if config.dictionary is not None:
            return InlineSource(config.dictionary)
        if config.dictionary_path is None:
            raise FilterError("No dictionary configured")
        return create_file_source(
            config.dictionary_path, config.dictionary_file_max_bytes
        )

    @override
    def filter(self, record: Record) -> bool:
        """Translate the configured field of a record in place.

        Errors raised while translating a single record are logged and the
        record passes through unchanged, except for resource exhaustion.

        Args:
            record: The record to translate

        Returns:
            True if the record was marked as matched

        Raises:
            FilterError: If the filter has not been registered

        """
        if self._updater is None:
            raise FilterError("Translate filter used before register()")

        if not self._updater.test_for_inclusion(record):
            return False

        try:
            written = self._updater.update(record)
        except FATAL_ERRORS:
            raise
        except Exception as e:
            logger.error(
                "Something went wrong when attempting to translate from dictionary: "
                "%s (source=%s, record=%s)",
                e,
                self._config.source,
                record.to_dict(),
            )
            return False

        if written or self._config.same_field:
            self._mark_matched(record)
            return True
        return False

    def _mark_matched(self, record: Record) -> None:
        for tag in self._config.add_tag:
            record.add_tag(tag)

    @override
    def close(self) -> None:
        """Stop refreshing the dictionary."""
        if self._store is not None:
            self._store.stop()
