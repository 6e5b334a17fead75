"""Pipeline runner: streams JSON-lines records through configured filters."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from itertools import islice
from types import TracebackType
from typing import Any, Self

from lexis_core import Filter, Record

from lexis.pipeline.errors import FilterNotFoundError
from lexis.pipeline.models import PipelineConfig
from lexis.pipeline.registry import FilterRegistry

logger = logging.getLogger(__name__)

# Records submitted to the worker pool per worker and batch
_BATCH_SIZE_PER_WORKER = 64


@dataclass
class RunSummary:
    """Counters collected while running a pipeline."""

    records: int = 0
    skipped_lines: int = 0
    matched: dict[str, int] = field(default_factory=dict)


class Pipeline:
    """A sequence of registered filters applied to every record.

    Use as a context manager so filters are closed, and their dictionary
    refreshing stopped, when processing ends.

    Example:
        ```python
        with Pipeline.from_config(parse_pipeline(path)) as pipeline:
            for line in pipeline.run(sys.stdin):
                print(line)
        ```

    """

    def __init__(
        self, filters: list[tuple[str, Filter]], workers: int = 1
    ) -> None:
        """Initialise the pipeline with named, unregistered filters.

        Args:
            filters: ``(name, filter)`` pairs in application order
            workers: Number of worker threads

        """
        self._filters = filters
        self._workers = max(1, workers)
        self._registered: list[Filter] = []
        self.summary = RunSummary(matched={name: 0 for name, _ in filters})

    @classmethod
    def from_config(
        cls,
        config: PipelineConfig,
        registry: FilterRegistry | None = None,
        workers: int | None = None,
    ) -> Self:
        """Build the filters of a pipeline definition.

        Args:
            config: Parsed pipeline definition
            registry: Filter factory registry, defaults to the built-in one
            workers: Overrides the worker count from the definition

        Raises:
            FilterNotFoundError: If a filter type is unknown
            ConfigurationError: If a filter configuration is invalid

        """
        registry = registry or FilterRegistry()
        filters: list[tuple[str, Filter]] = []
        for definition in config.filters:
            factory = registry.get(definition.type)
            filters.append((definition.name, factory.create(definition.properties)))
        return cls(filters, workers or config.config.workers)

    @property
    def filters(self) -> list[tuple[str, Filter]]:
        """Named filters in application order."""
        return list(self._filters)

    @property
    def workers(self) -> int:
        """Number of worker threads."""
        return self._workers

    def get_filter(self, name: str) -> Filter:
        """Get a filter by its pipeline name.

        Raises:
            FilterNotFoundError: If no filter has that name

        """
        for filter_name, pipeline_filter in self._filters:
            if filter_name == name:
                return pipeline_filter
        raise FilterNotFoundError(f"No filter named '{name}' in pipeline")

    def register(self) -> None:
        """Register every filter, closing those already registered on failure."""
        for name, pipeline_filter in self._filters:
            try:
                pipeline_filter.register()
            except Exception:
                logger.error("Failed to register filter '%s'", name)
                self.close()
                raise
            self._registered.append(pipeline_filter)

    def close(self) -> None:
        """Close every registered filter."""
        while self._registered:
            self._registered.pop().close()

    def __enter__(self) -> Self:
        self.register()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def process(self, record: Record) -> list[str]:
        """Apply every filter to a record in place.

        Returns:
            Names of the filters that matched

        """
        return [
            name
            for name, pipeline_filter in self._filters
            if pipeline_filter.filter(record)
        ]

    def _process_data(self, data: dict[str, Any]) -> tuple[dict[str, Any], list[str]]:
        record = Record.from_dict(data)
        matched = self.process(record)
        return record.to_dict(), matched

    def _decode(self, lines: Iterable[str]) -> Iterator[dict[str, Any]]:
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                data = json.loads(line)
            except ValueError as e:
                logger.warning("Skipping line %d: invalid JSON (%s)", line_number, e)
                self.summary.skipped_lines += 1
                continue
            if not isinstance(data, dict):
                logger.warning("Skipping line %d: not a JSON object", line_number)
                self.summary.skipped_lines += 1
                continue
            yield data

    def run(self, lines: Iterable[str]) -> Iterator[str]:
        """Translate JSON-lines input, yielding JSON-lines output in input order.

        Records are processed on the worker pool in batches so that input is
        consumed lazily.

        Args:
            lines: Input lines, one JSON object each; blank lines are ignored

        Yields:
            One JSON document per processed record

        """
        records = self._decode(lines)
        batch_size = self._workers * _BATCH_SIZE_PER_WORKER

        with ThreadPoolExecutor(
            max_workers=self._workers, thread_name_prefix="lexis-worker"
        ) as executor:
            while batch := list(islice(records, batch_size)):
                for data, matched in executor.map(self._process_data, batch):
                    self.summary.records += 1
                    for name in matched:
                        self.summary.matched[name] += 1
                    yield json.dumps(data, ensure_ascii=False)

        logger.info(
            "Processed %d records (%d lines skipped)",
            self.summary.records,
            self.summary.skipped_lines,
        )
