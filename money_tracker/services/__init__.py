"""
Services Package

Storage backends the ledger persists through.
"""

from money_tracker.services.storage import (
    EntryStoreInterface,
    InMemoryEntryStore,
    JsonFileEntryStore,
    PersistenceUnavailableError,
    StorageError,
)

__all__ = [
    "EntryStoreInterface",
    "InMemoryEntryStore",
    "JsonFileEntryStore",
    "PersistenceUnavailableError",
    "StorageError",
]
