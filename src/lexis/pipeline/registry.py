"""Filter factory registry.

Built-in factories are always available; additional filter types are
discovered from the ``lexis.filters`` entry point group.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from importlib.metadata import entry_points

from lexis_core import ComponentFactory, Filter
from lexis_translate import TranslateFilterFactory

from lexis.pipeline.errors import FilterNotFoundError

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "lexis.filters"


class FilterRegistry:
    """Maps filter type names to the factories that create them.

    Discovery is lazy: entry points are only loaded on first access.
    """

    def __init__(self) -> None:
        """Initialise an empty registry."""
        self._factories: dict[str, ComponentFactory[Filter]] | None = None

    @property
    def factories(self) -> Mapping[str, ComponentFactory[Filter]]:
        """Get the known filter factories (lazy discovery)."""
        if self._factories is None:
            self._factories = self._discover()
        return self._factories

    def _discover(self) -> dict[str, ComponentFactory[Filter]]:
        builtin: ComponentFactory[Filter] = TranslateFilterFactory()
        factories = {builtin.get_component_name(): builtin}

        for ep in entry_points(group=ENTRY_POINT_GROUP):
            if ep.name in factories:
                continue
            try:
                factories[ep.name] = ep.load()()
                logger.debug("Discovered filter type '%s'", ep.name)
            except Exception as e:
                logger.warning("Failed to load filter type '%s': %s", ep.name, e)
        return factories

    def get(self, filter_type: str) -> ComponentFactory[Filter]:
        """Get the factory for a filter type.

        Raises:
            FilterNotFoundError: If no factory handles the type

        """
        try:
            return self.factories[filter_type]
        except KeyError:
            available = ", ".join(sorted(self.factories))
            raise FilterNotFoundError(
                f"Unknown filter type '{filter_type}'. Available: {available}"
            ) from None
