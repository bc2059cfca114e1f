"""Ledger engine package."""

from money_tracker.ledger.ledger import (
    EntryNotFoundError,
    InvalidInputError,
    Ledger,
    LedgerError,
)

__all__ = [
    "EntryNotFoundError",
    "InvalidInputError",
    "Ledger",
    "LedgerError",
]
