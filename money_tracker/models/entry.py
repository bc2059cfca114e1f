"""
Core Data Models for Money Tracker

An Entry is the only thing the ledger stores: one income or one expense.
These models:
1. Enforce the entry invariants at runtime (positive amount, non-empty category)
2. Define the persisted JSON layout
3. Carry the static category table the UI offers

DESIGN DECISION: The category table is a suggestion list, not a closed enum.
Any non-empty label is accepted so that entries written with a category
the table no longer lists still load.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    computed_field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class EntryKind(str, Enum):
    """Direction of money flow. The sign of an amount is implied by this."""
    INCOME = "income"
    EXPENSE = "expense"


class EntryFilter(str, Enum):
    """Which entries a listing should include."""
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"

    def matches(self, entry: "Entry") -> bool:
        """Check whether an entry passes this filter."""
        if self is EntryFilter.ALL:
            return True
        return entry.kind.value == self.value


# =============================================================================
# CATEGORY TABLE
# =============================================================================

INCOME_CATEGORIES: tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Investment",
    "Gift",
    "Other",
)

EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Food",
    "Transport",
    "Shopping",
    "Bills",
    "Entertainment",
    "Health",
    "Other",
)


def categories_for(kind: EntryKind | str) -> tuple[str, ...]:
    """
    Get the suggested categories for an entry kind, in display order.

    Raises:
        ValueError: If kind is not a known EntryKind
    """
    if EntryKind(kind) is EntryKind.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# =============================================================================
# CORE ENTRY MODEL
# =============================================================================

class Entry(BaseModel):
    """
    A single ledger entry.

    CRITICAL: id and timestamp are assigned once by the ledger and never
    change. Edits produce a new Entry carrying the same id and timestamp.
    """
    model_config = ConfigDict(frozen=True)

    # Identity
    id: int = Field(
        ...,
        description="Unique entry ID (millisecond-derived integer)"
    )

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Positive magnitude; sign is implied by kind"
    )
    kind: EntryKind = Field(
        ...,
        description="Income or expense"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category label"
    )
    note: str = Field(
        default="",
        description="Optional free-text note, stored verbatim"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the entry was created (UTC)"
    )

    @field_validator('category', mode='before')
    @classmethod
    def strip_category(cls, v):
        """Surrounding whitespace is not part of a label."""
        return v.strip() if isinstance(v, str) else v

    @field_validator('note', mode='before')
    @classmethod
    def none_note_is_empty(cls, v: Optional[str]) -> str:
        """A missing note is stored as an empty string."""
        return "" if v is None else v

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by kind (expenses negative)."""
        if self.kind is EntryKind.EXPENSE:
            return -self.amount
        return self.amount


class Totals(BaseModel):
    """
    Aggregates over the whole ledger.

    balance is derived from income and expense, never stored separately,
    so it cannot drift out of step with them.
    """
    model_config = ConfigDict(frozen=True)

    income: Decimal = Field(default=Decimal("0"), ge=0)
    expense: Decimal = Field(default=Decimal("0"), ge=0)

    @computed_field
    @property
    def balance(self) -> Decimal:
        return self.income - self.expense


# =============================================================================
# SERIALIZATION
# =============================================================================

_ENTRY_LIST = TypeAdapter(list[Entry])


def serialize_entries(entries: Sequence[Entry]) -> str:
    """Serialize a collection of entries to the persisted JSON array."""
    return _ENTRY_LIST.dump_json(list(entries)).decode("utf-8")


def deserialize_entries(blob: str | bytes) -> list[Entry]:
    """
    Parse a persisted JSON array back into entries.

    Raises:
        pydantic.ValidationError: If the blob is not valid JSON or any
            record breaks the Entry schema
    """
    return _ENTRY_LIST.validate_json(blob)
