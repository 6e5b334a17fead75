"""Component factory abstraction for filter creation.

ComponentFactory instances are long-lived objects that create configured
filter instances from the ``properties`` section of a pipeline definition.

Example:
    >>> factory = TranslateFilterFactory()
    >>> config = {"source": "status", "dictionary": {"200": "OK"}}
    >>> translate = factory.create(config)

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

type ComponentConfig = dict[str, Any]


class ComponentFactory[T](ABC):
    """Abstract base class for factories that create Lexis components.

    Type Parameters:
        T: The component type this factory creates

    """

    @abstractmethod
    def create(self, config: ComponentConfig) -> T:
        """Create a component instance with the given configuration.

        Args:
            config: Configuration dict from pipeline properties.
                   Factory validates and converts to typed config internally.

        Returns:
            Configured component instance ready for registration.

        Raises:
            ConfigurationError: If configuration is invalid

        """
        ...

    @abstractmethod
    def get_component_name(self) -> str:
        """Get the component type name used in pipeline definitions.

        Returns:
            Component type name (e.g., "translate")

        """
        ...

    @abstractmethod
    def can_create(self, config: ComponentConfig) -> bool:
        """Check whether this factory can create a component from the config.

        Args:
            config: Configuration dict from pipeline properties

        Returns:
            True if the configuration is valid for this factory

        """
        ...
