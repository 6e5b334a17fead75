"""Tests for TranslateFilter and its factory."""

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from lexis_core import ConfigurationError, DictionaryLoadError, FilterError, Record
from lexis_dictionary import DictionaryMatch, MatchMode, StoreState, UpdateMode
from lexis_translate import TranslateFilter, TranslateFilterConfig, TranslateFilterFactory

type WriteDictionary = Callable[[str, str], Path]


def _registered(**properties: Any) -> TranslateFilter:  # noqa: ANN401
    translate = TranslateFilterFactory().create(properties)
    translate.register()
    return translate


class TestTranslateFilterRegistration:
    """Tests for register() and close()."""

    def test_inline_dictionary_is_loaded_without_scheduler(self) -> None:
        """Inline dictionaries are never refreshed."""
        translate = _registered(source="status", dictionary={"200": "OK"})

        assert translate.store.scheduler is None
        assert translate.store.fetch("200") == DictionaryMatch("OK")

    def test_dictionary_file_is_loaded_and_refreshed(
        self, write_dictionary: WriteDictionary
    ) -> None:
        """File dictionaries get a running scheduler until closed."""
        path = write_dictionary("codes.csv", "200,OK\n")
        translate = _registered(
            source="status",
            dictionary_path=str(path),
            refresh_interval=60,
            refresh_behaviour="replace",
        )

        try:
            assert translate.store.fetch("200") == DictionaryMatch("OK")
            assert translate.store.update_mode is UpdateMode.REPLACE
            assert translate.store.scheduler is not None
            assert translate.store.scheduler.running
        finally:
            translate.close()

        assert translate.store.state is StoreState.STOPPED

    def test_flags_select_match_mode(self) -> None:
        """exact and regex choose the store's strategy."""
        translate = _registered(source="s", dictionary={}, exact=True, regex=True)

        assert translate.store.mode is MatchMode.EXACT_REGEX

    def test_malformed_dictionary_file_fails_registration(
        self, write_dictionary: WriteDictionary
    ) -> None:
        """The first load is fatal."""
        path = write_dictionary("codes.json", "{broken")
        translate = TranslateFilterFactory().create(
            {"source": "s", "dictionary_path": str(path)}
        )

        with pytest.raises(DictionaryLoadError):
            translate.register()

    def test_filter_before_register_is_an_error(self) -> None:
        """Using an unregistered filter fails loudly."""
        translate = TranslateFilterFactory().create({"source": "s", "dictionary": {}})

        with pytest.raises(FilterError):
            translate.filter(Record({"s": "a"}))

    def test_close_before_register_is_safe(self) -> None:
        """close() does nothing when nothing was started."""
        translate = TranslateFilterFactory().create({"source": "s", "dictionary": {}})

        translate.close()


class TestTranslateFilterProcessing:
    """Tests for filter()."""

    def test_match_writes_target_and_adds_tags(self) -> None:
        """Matched records receive the translation and the configured tags."""
        translate = _registered(
            source="status", dictionary={"200": "OK"}, add_tag=["translated"]
        )
        record = Record({"status": "200"})

        assert translate.filter(record)
        assert record.get("translation") == "OK"
        assert record.tags == ["translated"]

    def test_no_match_leaves_record_untagged(self) -> None:
        """Unmatched records are not marked."""
        translate = _registered(
            source="status", dictionary={"200": "OK"}, add_tag=["translated"]
        )
        record = Record({"status": "500"})

        assert not translate.filter(record)
        assert record.tags == []

    def test_fallback_counts_as_match(self) -> None:
        """Writing the fallback marks the record."""
        translate = _registered(
            source="status",
            dictionary={"foo": "bar"},
            fallback="no match",
            add_tag=["translated"],
        )
        record = Record({"status": "baz"})

        assert translate.filter(record)
        assert record.get("translation") == "no match"
        assert record.tags == ["translated"]

    def test_same_field_is_always_marked(self) -> None:
        """Translating a field in place marks the record even without a match."""
        translate = _registered(
            source="status",
            target="status",
            override=True,
            dictionary={"200": "OK"},
            add_tag=["seen"],
        )
        record = Record({"status": "500"})

        assert translate.filter(record)
        assert record.get("status") == "500"
        assert record.tags == ["seen"]

    def test_existing_target_is_not_overwritten(self) -> None:
        """Without override the record passes through unchanged."""
        translate = _registered(source="status", dictionary={"200": "OK"})
        record = Record({"status": "200", "translation": "custom"})

        assert not translate.filter(record)
        assert record.get("translation") == "custom"

    def test_regex_union_translation(self) -> None:
        """Non-exact mode substitutes keys inside the value."""
        translate = _registered(
            source="message",
            dictionary={"200": "OK", "500": "Server Error"},
            exact=False,
        )
        record = Record({"message": "200 & 500"})

        translate.filter(record)

        assert record.get("translation") == "OK & Server Error"

    def test_record_errors_are_logged_and_contained(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A failing fallback is logged and the record continues untouched."""
        translate = _registered(
            source="status",
            dictionary={},
            fallback="{broken",
            fallback_format="json",
            add_tag=["translated"],
        )
        record = Record({"status": "x"})

        assert not translate.filter(record)
        assert record.tags == []
        assert not record.includes("translation")
        assert "Something went wrong when attempting to translate" in caplog.text

    @pytest.mark.parametrize("error", [MemoryError(), RecursionError()])
    def test_resource_exhaustion_propagates(self, error: BaseException) -> None:
        """MemoryError and RecursionError are never swallowed."""
        translate = _registered(source="status", dictionary={"200": "OK"})

        with (
            patch.object(translate.store, "fetch", side_effect=error),
            pytest.raises(type(error)),
        ):
            translate.filter(Record({"status": "200"}))


class TestTranslateFilterFactory:
    """Tests for TranslateFilterFactory."""

    def test_component_name(self) -> None:
        """The factory creates 'translate' filters."""
        assert TranslateFilterFactory().get_component_name() == "translate"
        assert TranslateFilter.get_name() == "translate"

    def test_create_returns_unregistered_filter(self) -> None:
        """Creating a filter validates but does not load the dictionary."""
        translate = TranslateFilterFactory().create(
            {"source": "s", "dictionary_path": "/does/not/exist.yml"}
        )

        assert isinstance(translate.config, TranslateFilterConfig)
        with pytest.raises(FilterError):
            _ = translate.store

    def test_invalid_config_raises_configuration_error(self) -> None:
        """Validation errors are reported as ConfigurationError."""
        with pytest.raises(ConfigurationError, match="translate filter configuration"):
            TranslateFilterFactory().create({"source": "s"})

    def test_can_create(self) -> None:
        """can_create() reflects configuration validity."""
        factory = TranslateFilterFactory()

        assert factory.can_create({"source": "s", "dictionary": {}})
        assert not factory.can_create({"source": "s"})
