"""Lexis: dictionary-based translation of structured records."""

from lexis_core import __version__

__all__ = ["__version__"]
