"""Tests for TranslateFilterConfig validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from lexis_dictionary import UpdateMode
from lexis_translate import FallbackFormat, TranslateFilterConfig


class TestTranslateFilterConfigDefaults:
    """Tests for default values and aliases."""

    def test_defaults(self) -> None:
        """Only a source and a dictionary are required."""
        config = TranslateFilterConfig.from_properties(
            {"source": "status", "dictionary": {"200": "OK"}}
        )

        assert config.target == "translation"
        assert config.refresh_interval == 300
        assert config.refresh_behaviour is UpdateMode.MERGE
        assert config.exact is True
        assert config.regex is False
        assert config.override is False
        assert config.fallback is None
        assert config.fallback_format is FallbackFormat.PLAIN
        assert config.add_tag == []

    def test_field_and_destination_aliases(self) -> None:
        """'field' and 'destination' are accepted for source and target."""
        config = TranslateFilterConfig.from_properties(
            {"field": "status", "destination": "text", "dictionary": {}}
        )

        assert config.source == "status"
        assert config.target == "text"

    def test_refresh_behaviour_values(self) -> None:
        """refresh_behaviour accepts merge and replace."""
        config = TranslateFilterConfig.from_properties(
            {"source": "s", "dictionary": {}, "refresh_behaviour": "replace"}
        )

        assert config.refresh_behaviour is UpdateMode.REPLACE

    def test_unknown_refresh_behaviour_is_rejected(self) -> None:
        """Any other refresh behaviour fails validation."""
        with pytest.raises(ValidationError):
            TranslateFilterConfig.from_properties(
                {"source": "s", "dictionary": {}, "refresh_behaviour": "append"}
            )

    def test_same_field(self) -> None:
        """Bare and bracketed forms of one field are the same field."""
        config = TranslateFilterConfig.from_properties(
            {"source": "status", "target": "[status]", "dictionary": {}}
        )

        assert config.same_field


class TestTranslateFilterConfigValidation:
    """Tests for cross-field validation."""

    def test_dictionary_and_path_are_mutually_exclusive(self) -> None:
        """Configuring both dictionary sources is an error."""
        with pytest.raises(ValidationError, match="mutually exclusive"):
            TranslateFilterConfig.from_properties(
                {
                    "source": "s",
                    "dictionary": {"a": 1},
                    "dictionary_path": "dict.yml",
                }
            )

    def test_one_dictionary_source_is_required(self) -> None:
        """Configuring neither dictionary source is an error."""
        with pytest.raises(ValidationError, match="must be configured"):
            TranslateFilterConfig.from_properties({"source": "s"})

    def test_dictionary_path_extension_is_checked(self) -> None:
        """Unsupported dictionary formats fail at configuration time."""
        with pytest.raises(ValidationError, match="non valid format"):
            TranslateFilterConfig.from_properties(
                {"source": "s", "dictionary_path": "dict.txt"}
            )

    @pytest.mark.parametrize("name", ["d.yml", "d.yaml", "d.json", "d.csv"])
    def test_supported_dictionary_paths(self, name: str) -> None:
        """YAML, JSON and CSV paths are accepted."""
        config = TranslateFilterConfig.from_properties(
            {"source": "s", "dictionary_path": name}
        )

        assert config.dictionary_path == Path(name)

    @pytest.mark.parametrize("field", ["source", "target", "iterate_on"])
    def test_malformed_field_references_are_rejected(self, field: str) -> None:
        """Field settings must be well-formed references."""
        properties = {"source": "s", "dictionary": {}, field: "[broken"}

        with pytest.raises(ValidationError, match="Malformed field reference"):
            TranslateFilterConfig.from_properties(properties)

    def test_unknown_properties_are_rejected(self) -> None:
        """Typos in property names are not silently ignored."""
        with pytest.raises(ValidationError):
            TranslateFilterConfig.from_properties(
                {"source": "s", "dictionary": {}, "dictonary_path": "d.yml"}
            )

    def test_max_bytes_must_be_positive(self) -> None:
        """A zero size limit is rejected."""
        with pytest.raises(ValidationError):
            TranslateFilterConfig.from_properties(
                {"source": "s", "dictionary": {}, "dictionary_file_max_bytes": 0}
            )
