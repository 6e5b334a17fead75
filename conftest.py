"""Workspace-level pytest configuration and fixtures.

This file provides shared fixtures for all tests across the repository.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

type DictionaryFileWriter = Callable[[str, str], Path]


@pytest.fixture
def write_dictionary(tmp_path: Path) -> DictionaryFileWriter:
    """Write dictionary file content to a temporary file.

    Returns:
        Function taking a file name and its content, returning the file path

    """

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
