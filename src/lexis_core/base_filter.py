"""Framework-level Filter base class.

Filter is the base abstraction for all record transformation components.
"""

from __future__ import annotations

import abc

from lexis_core.record import Record


class Filter(abc.ABC):
    """Base class for all record filters in the Lexis framework.

    Filters are long-lived components that mutate records in place. A filter is
    registered once, then invoked for every record (possibly from several
    worker threads at once), and finally closed when the pipeline shuts down.

    Lifecycle:
        register() -> filter(record) * N -> close()

    """

    @classmethod
    @abc.abstractmethod
    def get_name(cls) -> str:
        """Get the name of the filter type.

        This is used to identify the filter type in pipeline definitions.
        """

    def register(self) -> None:  # noqa: B027 - optional lifecycle hook
        """Prepare the filter for use.

        Called once before the first record. Errors raised here are fatal and
        abort pipeline start-up.
        """

    @abc.abstractmethod
    def filter(self, record: Record) -> bool:
        """Process a single record in place.

        Args:
            record: The record to process

        Returns:
            True if the filter matched the record

        """

    def close(self) -> None:  # noqa: B027 - optional lifecycle hook
        """Release resources held by the filter.

        Called once when the pipeline shuts down.
        """
