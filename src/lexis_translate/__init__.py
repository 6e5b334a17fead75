"""Translate filter for Lexis pipelines."""

from lexis_translate.config import (
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_TARGET,
    FallbackFormat,
    TranslateFilterConfig,
)
from lexis_translate.factory import TranslateFilterFactory
from lexis_translate.fallback import Fallback
from lexis_translate.filter import FATAL_ERRORS, TranslateFilter
from lexis_translate.updaters import (
    ArrayOfMapsValueUpdate,
    ArrayOfValuesUpdate,
    FieldUpdater,
    SingleValueUpdate,
    create_updater,
)

__all__ = [
    "DEFAULT_REFRESH_INTERVAL",
    "DEFAULT_TARGET",
    "FATAL_ERRORS",
    "ArrayOfMapsValueUpdate",
    "ArrayOfValuesUpdate",
    "Fallback",
    "FallbackFormat",
    "FieldUpdater",
    "SingleValueUpdate",
    "TranslateFilter",
    "TranslateFilterConfig",
    "TranslateFilterFactory",
    "create_updater",
]
