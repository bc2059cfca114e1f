"""
Abstract Storage Interface

DESIGN DECISION: The ledger is persisted as ONE serialized blob under ONE
key, rewritten in full after every change. There is no incremental log and
no partial write to reconcile.

Backends only move the blob in and out (_read_blob / _write_blob).
Serialization and the fail-soft load live here, so every backend:
1. Returns an empty collection for a missing or unreadable blob
2. Never raises on load
3. Produces byte-identical blobs for identical collections
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from money_tracker.log import get_logger
from money_tracker.models.entry import (
    Entry,
    deserialize_entries,
    serialize_entries,
)


logger = get_logger(__name__)


class EntryStoreInterface(ABC):
    """
    Abstract interface for entry storage.

    Any storage implementation (JSON file, in-memory, ...)
    must implement these methods.
    """

    @abstractmethod
    def load(self) -> list[Entry]:
        """
        Load the full entry collection.

        Returns:
            The stored entries in stored order, or an empty list if
            nothing is stored or the stored data cannot be read
        """
        pass

    @abstractmethod
    def save(self, entries: Sequence[Entry]) -> None:
        """
        Replace the stored collection with entries.

        Args:
            entries: The complete collection, in ledger order

        Raises:
            StorageError: If the collection could not be written
        """
        pass


class BlobEntryStore(EntryStoreInterface):
    """
    Base for stores that keep the collection as a JSON string under a key.

    Subclasses provide raw blob access; this class handles serialization.
    """

    def __init__(self, key: str):
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @abstractmethod
    def _read_blob(self) -> Optional[str]:
        """
        Return the raw blob stored under the key, or None if absent.

        Raises:
            PersistenceUnavailableError: If the backing storage is unreadable
        """
        pass

    @abstractmethod
    def _write_blob(self, blob: str) -> None:
        """
        Store blob under the key, replacing any previous value.

        Raises:
            StorageError: If the write fails
        """
        pass

    def load(self) -> list[Entry]:
        try:
            blob = self._read_blob()
            if blob is None:
                return []
            entries = deserialize_entries(blob)
        except (PersistenceUnavailableError, OSError, ValueError) as e:
            # An empty ledger is a valid start state
            logger.warning(
                "store_load_failed",
                key=self._key,
                error=str(e),
            )
            return []

        logger.debug("store_loaded", key=self._key, count=len(entries))
        return entries

    def save(self, entries: Sequence[Entry]) -> None:
        self._write_blob(serialize_entries(entries))
        logger.debug("store_saved", key=self._key, count=len(entries))


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class PersistenceUnavailableError(StorageError):
    """Stored data could not be read or parsed."""
    pass
