"""
Ledger Engine

The in-memory entry collection and everything derived from it.

GUARANTEES:
- Every mutation is written through to the store before it returns
- A failed mutation (bad input, unknown id, store write error) leaves
  the collection exactly as it was
- totals() is recomputed from the current entries on every call

Ordering: newest first. create() prepends, update() keeps position,
delete() removes without reordering the rest.

Every public call holds the ledger's lock, so one instance can be shared
by concurrent callers (Streamlit sessions share the cached ledger).
"""

import threading
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Iterator, Optional

from pydantic import ValidationError

from money_tracker.log import get_logger
from money_tracker.models.entry import (
    Entry,
    EntryFilter,
    EntryKind,
    Totals,
    utc_now,
)
from money_tracker.services.storage import EntryStoreInterface


logger = get_logger(__name__)


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class InvalidInputError(LedgerError, ValueError):
    """Rejected input on create/update. Nothing was changed."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class EntryNotFoundError(LedgerError, KeyError):
    """No entry with the given id exists."""

    def __init__(self, entry_id: int):
        super().__init__(entry_id)
        self.entry_id = entry_id

    def __str__(self) -> str:
        return f"Entry not found: {self.entry_id}"


class Ledger:
    """
    Personal income/expense ledger backed by an entry store.

    The collection is loaded once, at construction. After that the store
    is only written to.
    """

    def __init__(
        self,
        store: EntryStoreInterface,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the ledger from store.

        Args:
            store: Where entries are loaded from and saved to
            clock: Returns the current UTC time. Used for timestamps and
                   id generation; defaults to the system clock.
        """
        self._store = store
        self._clock = clock or utc_now
        self._lock = threading.RLock()
        self._entries = self._dedupe(store.load())
        self._last_id = max((e.id for e in self._entries), default=0)

        logger.info("ledger_loaded", entry_count=len(self._entries))

    @staticmethod
    def _dedupe(entries: list[Entry]) -> list[Entry]:
        """Keep the first entry per id; a stored collection may be hand-edited."""
        seen: set[int] = set()
        unique = []
        for entry in entries:
            if entry.id in seen:
                logger.warning("duplicate_entry_dropped", entry_id=entry.id)
                continue
            seen.add(entry.id)
            unique.append(entry)
        return unique

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # ------------------------------------------------------------------
    # Validation and identity
    # ------------------------------------------------------------------

    def _validate(
        self,
        kind: EntryKind | str,
        amount: Decimal | float | int | str | None,
        category: Optional[str],
    ) -> tuple[EntryKind, Decimal, str]:
        """
        Check create/update input.

        Strict regardless of how the caller obtained the amount:
        it must be a finite number greater than zero.
        """
        try:
            kind = EntryKind(kind)
        except ValueError:
            raise InvalidInputError("kind", f"Unknown entry kind: {kind!r}")

        if amount is None or isinstance(amount, bool) or amount == "":
            raise InvalidInputError("amount", "Amount is required")
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        except InvalidOperation:
            raise InvalidInputError("amount", f"Amount is not a number: {amount!r}")
        if not value.is_finite() or value <= 0:
            raise InvalidInputError("amount", "Amount must be greater than zero")

        if category is not None and not isinstance(category, str):
            raise InvalidInputError("category", f"Category must be text: {category!r}")
        label = (category or "").strip()
        if not label:
            raise InvalidInputError("category", "Category is required")

        return kind, value, label

    def _draft(
        self,
        entry_id: Optional[int],
        kind: EntryKind | str,
        amount: Decimal | float | int | str | None,
        category: Optional[str],
        note: Optional[str],
    ) -> Entry:
        """
        Validate input and build the resulting Entry, stamped now.

        A fresh id is assigned only when entry_id is None and the input
        has passed validation.
        """
        kind, value, label = self._validate(kind, amount, category)
        try:
            return Entry(
                id=entry_id if entry_id is not None else self._next_id(),
                kind=kind,
                amount=value,
                category=label,
                note=note,
                timestamp=self._clock(),
            )
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "entry"
            raise InvalidInputError(field, error["msg"]) from e

    def _next_id(self) -> int:
        """
        Wall-clock milliseconds, bumped past the largest id seen so far.

        Two creates in the same millisecond (or a clock that went
        backwards) still get distinct, increasing ids.
        """
        candidate = int(self._clock().timestamp() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def _index_of(self, entry_id: int) -> Optional[int]:
        for idx, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return idx
        return None

    def _commit(self, entries: list[Entry]) -> None:
        """Persist entries, then make them the current collection."""
        self._store.save(entries)
        self._entries = entries

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(
        self,
        kind: EntryKind | str,
        amount: Decimal | float | int | str | None,
        category: Optional[str],
        note: Optional[str] = None,
    ) -> Entry:
        """
        Record a new entry at the top of the ledger.

        Returns:
            The new entry, already persisted

        Raises:
            InvalidInputError: If amount is missing/non-positive or
                category is empty or not text
            StorageError: If the store write fails
        """
        with self._lock:
            try:
                entry = self._draft(None, kind, amount, category, note)
            except InvalidInputError as e:
                logger.warning(
                    "entry_rejected",
                    operation="create",
                    field=e.field,
                    reason=e.message,
                )
                raise

            self._commit([entry, *self._entries])

        logger.info(
            "entry_created",
            entry_id=entry.id,
            kind=entry.kind.value,
            amount=str(entry.amount),
            category=entry.category,
        )
        return entry

    def update(
        self,
        entry_id: int,
        kind: EntryKind | str,
        amount: Decimal | float | int | str | None,
        category: Optional[str],
        note: Optional[str] = None,
    ) -> Entry:
        """
        Replace kind, amount, category and note of an existing entry.

        The entry keeps its id, its timestamp and its position.

        Raises:
            InvalidInputError: Same rules as create()
            EntryNotFoundError: If no entry has entry_id
            StorageError: If the store write fails
        """
        with self._lock:
            try:
                draft = self._draft(entry_id, kind, amount, category, note)
            except InvalidInputError as e:
                logger.warning(
                    "entry_rejected",
                    operation="update",
                    entry_id=entry_id,
                    field=e.field,
                    reason=e.message,
                )
                raise

            idx = self._index_of(entry_id)
            if idx is None:
                logger.warning("entry_not_found", operation="update", entry_id=entry_id)
                raise EntryNotFoundError(entry_id)

            updated = draft.model_copy(
                update={"timestamp": self._entries[idx].timestamp}
            )
            entries = list(self._entries)
            entries[idx] = updated
            self._commit(entries)

        logger.info(
            "entry_updated",
            entry_id=updated.id,
            kind=updated.kind.value,
            amount=str(updated.amount),
            category=updated.category,
        )
        return updated

    def delete(self, entry_id: int) -> bool:
        """
        Permanently remove an entry.

        Deleting an id that isn't present is a no-op.

        Returns:
            True if an entry was removed, False if there was none

        Raises:
            StorageError: If the store write fails
        """
        with self._lock:
            remaining = [e for e in self._entries if e.id != entry_id]
            if len(remaining) == len(self._entries):
                logger.debug("entry_delete_noop", entry_id=entry_id)
                return False

            self._commit(remaining)
        logger.info("entry_deleted", entry_id=entry_id)
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, entry_id: int) -> Optional[Entry]:
        """Look up an entry by id (None if absent)."""
        with self._lock:
            idx = self._index_of(entry_id)
            return None if idx is None else self._entries[idx]

    def list_entries(
        self,
        entry_filter: EntryFilter | str = EntryFilter.ALL,
    ) -> Iterator[Entry]:
        """
        Iterate entries in ledger order (newest first) that pass the filter.

        Lazy over a snapshot taken at call time: later mutations do not
        affect an iterator already handed out.

        Raises:
            ValueError: If entry_filter is not a known EntryFilter
        """
        entry_filter = EntryFilter(entry_filter)
        with self._lock:
            snapshot = self._entries
        return (e for e in snapshot if entry_filter.matches(e))

    def totals(self) -> Totals:
        """Sum income and expense over the current entries."""
        with self._lock:
            snapshot = self._entries
        income = Decimal("0")
        expense = Decimal("0")
        for entry in snapshot:
            if entry.kind is EntryKind.INCOME:
                income += entry.amount
            else:
                expense += entry.amount
        return Totals(income=income, expense=expense)
