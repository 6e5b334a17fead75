"""Base configuration class for filter components.

All component configurations inherit from this class. It provides consistent
validation, immutability and a dictionary-based factory method across the
framework.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class BaseComponentConfiguration(BaseModel):
    """Base class for all component configurations.

    Features:
        - Pydantic validation for type safety
        - Immutable by default (frozen) so a configuration can be shared
          read-only across worker threads
        - from_properties() factory method for dictionary-based creation
        - Strict validation (no extra fields allowed)

    Example:
        ```python
        class TranslateFilterConfig(BaseComponentConfiguration):
            source: str
            dictionary_path: str | None = None

        # Create from properties dictionary (from a pipeline file)
        config = TranslateFilterConfig.from_properties({"source": "status"})
        ```

    """

    model_config = ConfigDict(
        # Immutable - configuration cannot be modified after creation
        frozen=True,
        # Strict - extra fields not in the model are rejected
        extra="forbid",
        # Accept both field names and aliases
        populate_by_name=True,
    )

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from properties dictionary with validation.

        Subclasses may override this method to add preprocessing logic specific
        to the component.

        Args:
            properties: Dictionary containing configuration properties

        Returns:
            Validated configuration instance

        Raises:
            ValidationError: If properties are invalid or missing required fields

        """
        return cls.model_validate(properties)
