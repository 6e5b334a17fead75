"""Field updaters: how a lookup result is written back into a record.

Three shapes exist, chosen once from the filter configuration:

- SingleValueUpdate: translate one field into one target field
- ArrayOfValuesUpdate: translate every element of a list field into a list
- ArrayOfMapsValueUpdate: translate a field inside every object of a list

Updaters are immutable after construction and safe to share across worker
threads; all shared mutable state lives in the DictionaryStore.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, override

from lexis_core import FieldReference, Record, as_text, deep_copy, parse_reference
from lexis_dictionary import DictionaryStore

from lexis_translate.config import TranslateFilterConfig
from lexis_translate.fallback import Fallback


def _lookup_text(value: Any) -> str:  # noqa: ANN401
    """Text used as lookup key: only the first element of a list counts."""
    if isinstance(value, list):
        return as_text(value[0]) if value else ""
    return as_text(value)


@dataclass(frozen=True, slots=True)
class FieldUpdater(abc.ABC):
    """Common state and inclusion test of the updater shapes.

    Attributes:
        source: Field holding the value to translate
        target: Field receiving the translation
        lookup: Shared dictionary store
        fallback: Value used when nothing matches, if configured
        override: Whether an existing target value may be overwritten

    """

    source: FieldReference
    target: FieldReference
    lookup: DictionaryStore
    fallback: Fallback | None = None
    override: bool = False

    def test_for_inclusion(
        self, record: Record, override: bool | None = None
    ) -> bool:
        """Decide whether the record should be translated at all.

        Args:
            record: The record to test
            override: Overrides the configured override flag when given

        Returns:
            False when the source field is absent, or when the target already
            holds a value and override is disabled

        """
        return record.includes(self.source) and self._may_write(
            record, self.target, override
        )

    def _may_write(
        self, record: Record, target: FieldReference, override: bool | None
    ) -> bool:
        if override is None:
            override = self.override
        return override or not record.includes(target)

    @abc.abstractmethod
    def update(self, record: Record, override: bool | None = None) -> bool:
        """Translate the record in place.

        Args:
            record: The record to translate
            override: Overrides the configured override flag when given

        Returns:
            True if any target value was written

        """


@dataclass(frozen=True, slots=True)
class SingleValueUpdate(FieldUpdater):
    """Translate a single field value into a single target field."""

    @override
    def update(self, record: Record, override: bool | None = None) -> bool:
        if not self._may_write(record, self.target, override):
            return False
        match = self.lookup.fetch(_lookup_text(record.get(self.source)))
        if match is not None:
            record.set(self.target, match.value)
            return True
        if self.fallback is not None:
            record.set(self.target, self.fallback.render(record))
            return True
        return False


@dataclass(frozen=True, slots=True)
class ArrayOfValuesUpdate(FieldUpdater):
    """Translate each element of a list field into a target list of equal length.

    Unmatched positions receive the fallback when one is configured and are
    left as None otherwise.
    """

    @override
    def update(self, record: Record, override: bool | None = None) -> bool:
        if not self._may_write(record, self.target, override):
            return False
        value = record.get(self.source)
        if value is None:
            values: list[Any] = []
        elif isinstance(value, list):
            values = value
        else:
            values = [value]

        fallback_value = (
            self.fallback.render(record) if self.fallback is not None else None
        )

        translated: list[Any] = []
        written = False
        for item in values:
            match = self.lookup.fetch(as_text(item))
            if match is not None:
                translated.append(match.value)
                written = True
            elif self.fallback is not None:
                translated.append(deep_copy(fallback_value))
                written = True
            else:
                translated.append(None)

        record.set(self.target, translated)
        return written


@dataclass(frozen=True, slots=True)
class ArrayOfMapsValueUpdate(FieldUpdater):
    """Translate a nested field inside every object of a list.

    ``source`` and ``target`` are relative to each object of the
    ``iterate_on`` list; results are written back into the same object.
    """

    iterate_on: FieldReference | None = None

    @override
    def test_for_inclusion(
        self, record: Record, override: bool | None = None
    ) -> bool:
        """Include the record when the ``iterate_on`` field is present.

        Existing nested targets are checked per object by update(), which
        takes the same override flag.
        """
        return self.iterate_on is not None and record.includes(self.iterate_on)

    @override
    def update(self, record: Record, override: bool | None = None) -> bool:
        if self.iterate_on is None:
            return False
        items = record.get(self.iterate_on)
        if not isinstance(items, list):
            return False

        fallback_value = (
            self.fallback.render(record) if self.fallback is not None else None
        )

        written = False
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                continue
            base = self.iterate_on.at_index(index)
            nested_source = base.child(self.source)
            nested_target = base.child(self.target)

            if not record.includes(nested_source):
                continue
            if not self._may_write(record, nested_target, override):
                continue

            match = self.lookup.fetch(_lookup_text(record.get(nested_source)))
            if match is not None:
                record.set(nested_target, match.value)
                written = True
            elif self.fallback is not None:
                record.set(nested_target, deep_copy(fallback_value))
                written = True
        return written


def create_updater(
    config: TranslateFilterConfig,
    lookup: DictionaryStore,
    fallback: Fallback | None = None,
) -> FieldUpdater:
    """Select and build the updater shape for a filter configuration.

    - no ``iterate_on``: SingleValueUpdate
    - ``iterate_on`` equal to ``source``: ArrayOfValuesUpdate
    - otherwise: ArrayOfMapsValueUpdate, with ``source`` and ``target``
      relative to each object of ``iterate_on``

    Args:
        config: Validated filter configuration
        lookup: Dictionary store shared by all records
        fallback: Fallback value, if configured

    Returns:
        The updater for this configuration

    """
    source = parse_reference(config.source)
    target = parse_reference(config.target)

    if config.iterate_on is None:
        return SingleValueUpdate(source, target, lookup, fallback, config.override)

    iterate_on = parse_reference(config.iterate_on)
    if iterate_on == source:
        return ArrayOfValuesUpdate(source, target, lookup, fallback, config.override)
    return ArrayOfMapsValueUpdate(
        source, target, lookup, fallback, config.override, iterate_on
    )
