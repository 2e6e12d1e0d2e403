"""Pydantic domain models for the Budget Tracker."""

from .constants import (
    CURRENCIES,
    CURRENCY_SYMBOLS,
    CATEGORIES,
    ENTRY_TYPES,
    FILTERS,
)  # re-export
from .entry import Entry, EntryFormUpdate, EntryFormValues, EntryRow
from .rates import RateTable
from .summary import Summary

__all__ = [
    "CURRENCIES",
    "CURRENCY_SYMBOLS",
    "CATEGORIES",
    "ENTRY_TYPES",
    "FILTERS",
    "Entry",
    "EntryFormUpdate",
    "EntryFormValues",
    "EntryRow",
    "RateTable",
    "Summary",
]
