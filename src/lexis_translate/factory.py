"""Factory for creating TranslateFilter instances."""

from typing import override

from lexis_core import ComponentConfig, ComponentFactory, ConfigurationError
from pydantic import ValidationError

from lexis_translate.config import TranslateFilterConfig
from lexis_translate.filter import TranslateFilter


class TranslateFilterFactory(ComponentFactory[TranslateFilter]):
    """Factory for creating TranslateFilter instances.

    The factory only validates configuration; dictionaries are loaded when the
    created filter is registered.
    """

    @override
    def create(self, config: ComponentConfig) -> TranslateFilter:
        """Create a TranslateFilter instance from configuration.

        Args:
            config: Configuration dict from pipeline properties

        Returns:
            Configured TranslateFilter instance

        Raises:
            ConfigurationError: If configuration is invalid

        """
        try:
            filter_config = TranslateFilterConfig.from_properties(config)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid translate filter configuration: {e}"
            ) from e

        return TranslateFilter(filter_config)

    @override
    def can_create(self, config: ComponentConfig) -> bool:
        """Check if this factory can create a filter with the given config.

        Args:
            config: Configuration dict to validate

        Returns:
            True if factory can create the filter, False otherwise

        """
        try:
            TranslateFilterConfig.from_properties(config)
        except ValidationError:
            return False

        return True

    @override
    def get_component_name(self) -> str:
        """Get the component type name for filter registration."""
        return TranslateFilter.get_name()
