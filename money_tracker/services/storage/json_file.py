"""
JSON File Storage Implementation

DESIGN DECISION: The file is a flat key-value document, one JSON object
mapping key names to string blobs:

    {"transactions": "[{\"id\": 1729..., \"amount\": \"1000\", ...}]"}

The entry collection is one value in that object. Other keys written by
other tools are left untouched on save.

TRADEOFFS:
- Every save rewrites the whole file (fine for a personal ledger)
- Writes go to a temporary file first and are swapped in with os.replace,
  so a crash mid-write leaves the previous file intact
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from money_tracker.log import get_logger
from money_tracker.services.storage.interface import (
    BlobEntryStore,
    PersistenceUnavailableError,
    StorageError,
)


logger = get_logger(__name__)


class JsonFileEntryStore(BlobEntryStore):
    """
    Stores the entry collection in a local JSON key-value file.

    The file and its parent directories are created on the first save.
    """

    def __init__(self, path: str | Path, key: str = "transactions"):
        super().__init__(key)
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict[str, str]:
        """Read the whole key-value document ({} if the file doesn't exist)."""
        if not self._path.exists():
            return {}
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise PersistenceUnavailableError(
                f"Cannot read store file {self._path}: {e}"
            ) from e
        if not isinstance(document, dict):
            raise PersistenceUnavailableError(
                f"Store file {self._path} is not a JSON object"
            )
        return document

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write_document(self, document: dict[str, str]) -> None:
        """Atomically replace the file with document."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _read_blob(self) -> Optional[str]:
        blob = self._read_document().get(self._key)
        if blob is not None and not isinstance(blob, str):
            raise PersistenceUnavailableError(
                f"Value under key {self._key!r} is not a string"
            )
        return blob

    def _write_blob(self, blob: str) -> None:
        try:
            document = self._read_document()
        except PersistenceUnavailableError as e:
            logger.warning(
                "store_file_unreadable_overwriting",
                path=str(self._path),
                error=str(e),
            )
            document = {}

        document[self._key] = blob
        try:
            self._write_document(document)
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e
