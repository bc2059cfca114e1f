"""
Storage Services Package

Provides the abstract entry store interface and its implementations:
a local JSON key-value file and an in-memory store.
"""

from money_tracker.services.storage.interface import (
    BlobEntryStore,
    EntryStoreInterface,
    PersistenceUnavailableError,
    StorageError,
)
from money_tracker.services.storage.json_file import JsonFileEntryStore
from money_tracker.services.storage.memory import InMemoryEntryStore

__all__ = [
    # Interfaces
    "BlobEntryStore",
    "EntryStoreInterface",
    # Exceptions
    "PersistenceUnavailableError",
    "StorageError",
    # Implementations
    "InMemoryEntryStore",
    "JsonFileEntryStore",
]
