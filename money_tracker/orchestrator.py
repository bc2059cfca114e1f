"""
Application Wiring for Money Tracker

Builds a Ledger on top of the store backend chosen in settings.
The presentation layer calls create_ledger() once and talks only to the
Ledger it gets back.
"""

from typing import Optional

from money_tracker.config import Settings, get_settings
from money_tracker.ledger import Ledger
from money_tracker.log import get_logger
from money_tracker.services.storage import (
    EntryStoreInterface,
    InMemoryEntryStore,
    JsonFileEntryStore,
)


logger = get_logger(__name__)


def create_store(settings: Optional[Settings] = None) -> EntryStoreInterface:
    """
    Create the configured entry store.

    Args:
        settings: Settings to use. Defaults to the cached application settings.
    """
    storage = (settings or get_settings()).storage

    if storage.backend == "memory":
        logger.info("store_selected", backend="memory", key=storage.key)
        return InMemoryEntryStore(key=storage.key)

    logger.info(
        "store_selected",
        backend="json",
        path=str(storage.path),
        key=storage.key,
    )
    return JsonFileEntryStore(storage.path, key=storage.key)


def create_ledger(
    settings: Optional[Settings] = None,
    store: Optional[EntryStoreInterface] = None,
) -> Ledger:
    """
    Factory function for the application's ledger.

    Args:
        settings: Settings used to pick the store backend
        store: Use this store instead of the configured one

    Returns:
        A Ledger loaded from the store
    """
    return Ledger(store or create_store(settings))
