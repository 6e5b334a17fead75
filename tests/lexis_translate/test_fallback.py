"""Tests for fallback rendering."""

import pytest

from lexis_core import FilterProcessingError, Record
from lexis_translate import Fallback, FallbackFormat


class TestFallback:
    """Tests for Fallback.render()."""

    def test_plain_fallback_is_interpolated(self) -> None:
        """Field references in the template are substituted."""
        fallback = Fallback("unknown code %{code}")

        assert fallback.render(Record({"code": "E42"})) == "unknown code E42"

    def test_json_fallback_is_deserialised(self) -> None:
        """JSON fallbacks produce structures."""
        fallback = Fallback('{"code": "%{code}", "known": false}', FallbackFormat.JSON)

        assert fallback.render(Record({"code": "E42"})) == {
            "code": "E42",
            "known": False,
        }

    def test_yaml_fallback_is_deserialised(self) -> None:
        """YAML fallbacks produce structures."""
        fallback = Fallback("[unknown, '%{code}']", FallbackFormat.YAML)

        assert fallback.render(Record({"code": "E42"})) == ["unknown", "E42"]

    def test_yaml_fallback_keeps_dates_as_text(self) -> None:
        """Date-like YAML scalars are not turned into date objects."""
        fallback = Fallback("{since: 2020-01-01}", FallbackFormat.YAML)

        assert fallback.render(Record({})) == {"since": "2020-01-01"}

    def test_invalid_json_after_rendering_is_processing_error(self) -> None:
        """A fallback that does not parse fails the record, not the filter."""
        fallback = Fallback("{not json", FallbackFormat.JSON)

        with pytest.raises(FilterProcessingError, match="JSON"):
            fallback.render(Record())

    def test_invalid_yaml_after_rendering_is_processing_error(self) -> None:
        """YAML syntax errors are reported the same way."""
        fallback = Fallback("a: [unclosed", FallbackFormat.YAML)

        with pytest.raises(FilterProcessingError, match="YAML"):
            fallback.render(Record())
