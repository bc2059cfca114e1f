"""In-memory entry store. Nothing survives the process."""

from typing import Optional

from money_tracker.services.storage.interface import BlobEntryStore


class InMemoryEntryStore(BlobEntryStore):
    """
    Keeps blobs in a plain dict, serialized exactly as the file store does.

    Pass blobs to start from existing content; the dict is shared, not
    copied, so tests can inspect or corrupt it directly.
    """

    def __init__(
        self,
        key: str = "transactions",
        blobs: Optional[dict[str, str]] = None,
    ):
        super().__init__(key)
        self.blobs = blobs if blobs is not None else {}

    def _read_blob(self) -> Optional[str]:
        return self.blobs.get(self._key)

    def _write_blob(self, blob: str) -> None:
        self.blobs[self._key] = blob
