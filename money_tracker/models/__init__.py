"""
Data Models Package

This package contains the Pydantic models used by Money Tracker.
Everything the ledger stores or returns conforms to these schemas.
"""

from money_tracker.models.entry import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    Entry,
    EntryFilter,
    EntryKind,
    Totals,
    categories_for,
    deserialize_entries,
    serialize_entries,
    utc_now,
)

__all__ = [
    # Entry models
    "Entry",
    "EntryFilter",
    "EntryKind",
    "Totals",
    # Category table
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "categories_for",
    # Serialization
    "deserialize_entries",
    "serialize_entries",
    "utc_now",
]
