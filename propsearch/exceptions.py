"""Exceptions raised while loading the property dataset."""
from __future__ import annotations


class PropertySearchError(Exception):
    """Base exception for the application"""


class LoadError(PropertySearchError):
    """A source table could not be turned into rows."""

    def __init__(self, table: str, message: str):
        self.table = table
        self.message = message
        super().__init__(f"{table}: {message}")


class SourceUnavailable(LoadError):
    """The table's file is missing or unreadable."""


class TableParseError(LoadError):
    """The table's file was read but is not well-formed CSV for that table."""
