"""Dictionary sources: where key/value pairs come from.

A source turns its backing data into an ordered list of ``(key, value)``
pairs. File sources parse YAML, JSON or CSV files chosen by extension; the
inline source wraps a mapping given directly in the filter configuration.
"""

from __future__ import annotations

import abc
import csv
import json
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, ClassVar, override

import yaml
from lexis_core import (
    DictionaryParseError,
    DictionarySizeLimitError,
    UnsupportedDictionaryFormatError,
    as_text,
)

logger = logging.getLogger(__name__)

type DictionaryPairs = list[tuple[str, Any]]

# 128 MiB, the default ceiling for a dictionary file
DEFAULT_MAX_BYTES = 134_217_728


class DictionaryYamlLoader(yaml.SafeLoader):
    """Safe YAML loader producing only JSON-compatible values.

    Timestamps and binary scalars stay as their text and sets become lists,
    so every loaded value can be written into a record and serialised.
    """


def _construct_text(loader: yaml.SafeLoader, node: yaml.Node) -> str:
    return loader.construct_scalar(node)  # type: ignore[arg-type]


def _construct_set_as_list(loader: yaml.SafeLoader, node: yaml.Node) -> list[Any]:
    return list(loader.construct_mapping(node))  # type: ignore[arg-type]


DictionaryYamlLoader.add_constructor("tag:yaml.org,2002:timestamp", _construct_text)
DictionaryYamlLoader.add_constructor("tag:yaml.org,2002:binary", _construct_text)
DictionaryYamlLoader.add_constructor("tag:yaml.org,2002:set", _construct_set_as_list)


def _coerce_pairs(pairs: Iterable[tuple[Any, Any]]) -> DictionaryPairs:
    return [(as_text(key), value) for key, value in pairs]


class DictionarySource(abc.ABC):
    """Base class for dictionary sources."""

    refreshable: ClassVar[bool] = True
    """Whether the backing data can change after the first load."""

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """Human readable description used in log messages."""

    @abc.abstractmethod
    def read(self) -> DictionaryPairs:
        """Read the source into ordered key/value pairs.

        Returns:
            Pairs in source order, keys coerced to strings

        Raises:
            FileNotFoundError: If a file-backed source is missing
            DictionaryParseError: If the source content is invalid

        """

    @abc.abstractmethod
    def modified_time(self) -> float | None:
        """Modification time of the backing data, or None if it never changes.

        Raises:
            FileNotFoundError: If a file-backed source is missing

        """


class InlineSource(DictionarySource):
    """Source backed by a mapping given in the filter configuration."""

    refreshable = False

    def __init__(self, mapping: Mapping[Any, Any]) -> None:
        """Initialise the source with a mapping.

        Args:
            mapping: Key/value pairs, iterated in insertion order

        """
        self._pairs = _coerce_pairs(mapping.items())

    @property
    @override
    def description(self) -> str:
        return "inline dictionary"

    @override
    def read(self) -> DictionaryPairs:
        return list(self._pairs)

    @override
    def modified_time(self) -> float | None:
        return None


class FileSource(DictionarySource):
    """Base class for file-backed sources.

    Subclasses declare the file extensions they handle and implement
    ``_parse``. Size checking, error wrapping and key coercion are shared.
    """

    extensions: ClassVar[tuple[str, ...]]
    format_name: ClassVar[str]

    def __init__(self, path: Path, max_bytes: int | None = DEFAULT_MAX_BYTES) -> None:
        """Initialise the source.

        Args:
            path: Path to the dictionary file
            max_bytes: Largest accepted file size, or None for no limit

        """
        self.path = path
        self.max_bytes = max_bytes

    @property
    @override
    def description(self) -> str:
        return f"{self.format_name} dictionary file {self.path}"

    @override
    def modified_time(self) -> float | None:
        return os.stat(self.path).st_mtime

    @override
    def read(self) -> DictionaryPairs:
        size = os.stat(self.path).st_size
        if self.max_bytes is not None and size > self.max_bytes:
            raise DictionarySizeLimitError(
                f"Dictionary file {self.path} is {size} bytes, "
                f"exceeding the limit of {self.max_bytes} bytes"
            )

        try:
            pairs = _coerce_pairs(self._parse())
        except DictionaryParseError:
            raise
        except FileNotFoundError:
            raise
        except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError, csv.Error) as e:
            raise DictionaryParseError(
                f"Failed to parse {self.format_name} dictionary {self.path}: {e}"
            ) from e

        logger.debug("Read %d entries from %s", len(pairs), self.description)
        return pairs

    @abc.abstractmethod
    def _parse(self) -> Iterable[tuple[Any, Any]]:
        """Parse the file into raw pairs."""


class YamlFileSource(FileSource):
    """YAML dictionary file: a top-level mapping with arbitrarily nested values."""

    extensions = (".yml", ".yaml")
    format_name = "YAML"

    @override
    def _parse(self) -> Iterable[tuple[Any, Any]]:
        with open(self.path, encoding="utf-8-sig") as f:
            data = yaml.load(f, Loader=DictionaryYamlLoader)  # noqa: S506
        if data is None:
            return []
        if not isinstance(data, dict):
            raise DictionaryParseError(
                f"YAML dictionary {self.path} must contain a mapping at the top level"
            )
        return data.items()


class JsonFileSource(FileSource):
    """JSON dictionary file: a single top-level object."""

    extensions = (".json",)
    format_name = "JSON"

    @override
    def _parse(self) -> Iterable[tuple[Any, Any]]:
        with open(self.path, encoding="utf-8-sig") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise DictionaryParseError(
                f"JSON dictionary {self.path} must contain an object at the top level"
            )
        return data.items()


class CsvFileSource(FileSource):
    """CSV dictionary file: exactly two columns, key then value."""

    extensions = (".csv",)
    format_name = "CSV"

    @override
    def _parse(self) -> Iterable[tuple[Any, Any]]:
        pairs: list[tuple[Any, Any]] = []
        with open(self.path, encoding="utf-8-sig", newline="") as f:
            for line_number, row in enumerate(csv.reader(f), start=1):
                if not row:
                    continue
                if len(row) != 2:
                    raise DictionaryParseError(
                        f"CSV dictionary {self.path} line {line_number}: "
                        f"expected 2 columns, found {len(row)}"
                    )
                pairs.append((row[0], row[1]))
        return pairs


_FILE_SOURCES: tuple[type[FileSource], ...] = (
    YamlFileSource,
    JsonFileSource,
    CsvFileSource,
)


def supported_extensions() -> tuple[str, ...]:
    """List the dictionary file extensions that have a parser."""
    return tuple(ext for source in _FILE_SOURCES for ext in source.extensions)


def create_file_source(
    path: str | Path, max_bytes: int | None = DEFAULT_MAX_BYTES
) -> FileSource:
    """Create the file source matching a dictionary file's extension.

    Args:
        path: Path to the dictionary file
        max_bytes: Largest accepted file size, or None for no limit

    Returns:
        A file source for the path

    Raises:
        UnsupportedDictionaryFormatError: If no parser handles the extension

    """
    path = Path(path)
    suffix = path.suffix.lower()
    for source_class in _FILE_SOURCES:
        if suffix in source_class.extensions:
            return source_class(path, max_bytes)
    raise UnsupportedDictionaryFormatError(
        f"Dictionary {path} has a non valid format. "
        f"Supported extensions: {', '.join(supported_extensions())}"
    )
