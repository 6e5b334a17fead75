"""Fixtures for application-level tests."""

import logging
from collections.abc import Generator

import pytest

_LEXIS_LOGGERS = ("lexis", "lexis_dictionary", "lexis_translate", "apscheduler")


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None]:
    """Undo logging configuration applied by setup_logging().

    CLI commands replace the root handlers with console handlers bound to the
    CLI runner's streams, which are closed after each invocation.
    """
    root = logging.getLogger()
    saved_level = root.level
    saved_levels = {name: logging.getLogger(name).level for name in _LEXIS_LOGGERS}

    yield

    for handler in list(root.handlers):
        # pytest's capture handlers are StreamHandler subclasses
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(saved_level)
    for name, level in saved_levels.items():
        logging.getLogger(name).setLevel(level)
