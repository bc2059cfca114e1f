"""
Tests for Money Tracker models

Test strategy:
1. Unit tests for individual components (models, store, ledger, formatting)
2. Stores are exercised against tmp_path, never real user data
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from pydantic import ValidationError

from money_tracker.models import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    Entry,
    EntryFilter,
    EntryKind,
    Totals,
    categories_for,
    deserialize_entries,
    serialize_entries,
)


def make_entry(**overrides) -> Entry:
    fields = dict(
        id=1736933400000,
        amount=Decimal("1000"),
        kind=EntryKind.INCOME,
        category="Salary",
        timestamp=datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return Entry(**fields)


class TestEntryModel:
    """Tests for the Entry Pydantic model."""

    def test_entry_creation(self):
        """Test Entry model creation."""
        entry = make_entry(note="January")
        assert entry.amount == Decimal("1000")
        assert entry.kind == EntryKind.INCOME
        assert entry.note == "January"

    def test_note_defaults_to_empty(self):
        """A missing or None note is stored as empty string."""
        assert make_entry().note == ""
        assert make_entry(note=None).note == ""

    def test_category_strips_whitespace(self):
        """Test that whitespace is stripped from category."""
        assert make_entry(category="  Food  ").category == "Food"

    def test_note_is_not_stripped(self):
        """Test that the note keeps its surrounding whitespace."""
        assert make_entry(note="  spaced  ").note == "  spaced  "

    def test_long_fields_accepted(self):
        """Test that category and note have no length limit."""
        entry = make_entry(category="c" * 500, note="n" * 10000)
        assert len(entry.category) == 500
        assert len(entry.note) == 10000

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
    def test_rejects_non_positive_amount(self, amount):
        """Test that zero and negative amounts are rejected."""
        with pytest.raises(ValidationError):
            make_entry(amount=amount)

    def test_rejects_empty_category(self):
        with pytest.raises(ValidationError):
            make_entry(category="   ")

    def test_rejects_unknown_kind(self):
        with pytest.raises(ValidationError):
            make_entry(kind="transfer")

    def test_entry_is_immutable(self):
        """Entries are replaced on edit, never mutated."""
        entry = make_entry()
        with pytest.raises(ValidationError):
            entry.amount = Decimal("5")

    def test_signed_amount(self):
        assert make_entry().signed_amount == Decimal("1000")
        assert make_entry(kind=EntryKind.EXPENSE).signed_amount == Decimal("-1000")


class TestEntryFilter:
    """Tests for EntryFilter matching."""

    def test_all_matches_everything(self):
        assert EntryFilter.ALL.matches(make_entry())
        assert EntryFilter.ALL.matches(make_entry(kind=EntryKind.EXPENSE))

    def test_kind_filters(self):
        income = make_entry()
        expense = make_entry(kind=EntryKind.EXPENSE, category="Food")
        assert EntryFilter.INCOME.matches(income)
        assert not EntryFilter.INCOME.matches(expense)
        assert EntryFilter.EXPENSE.matches(expense)
        assert not EntryFilter.EXPENSE.matches(income)


class TestTotals:
    """Tests for the Totals model."""

    def test_balance_is_derived(self):
        totals = Totals(income=Decimal("1000"), expense=Decimal("300"))
        assert totals.balance == Decimal("700")

    def test_balance_can_be_negative(self):
        totals = Totals(income=Decimal("100"), expense=Decimal("250.50"))
        assert totals.balance == Decimal("-150.50")

    def test_empty_totals(self):
        totals = Totals()
        assert totals.income == totals.expense == totals.balance == Decimal("0")

    def test_dump_includes_balance(self):
        dumped = Totals(income=Decimal("10"), expense=Decimal("4")).model_dump()
        assert dumped == {
            "income": Decimal("10"),
            "expense": Decimal("4"),
            "balance": Decimal("6"),
        }


class TestCategories:
    """Tests for the category table."""

    def test_income_categories(self):
        assert categories_for(EntryKind.INCOME) == (
            "Salary", "Freelance", "Investment", "Gift", "Other",
        )

    def test_expense_categories(self):
        assert categories_for("expense") == (
            "Food", "Transport", "Shopping", "Bills",
            "Entertainment", "Health", "Other",
        )

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            categories_for("transfer")

    def test_any_label_is_accepted_by_model(self):
        """The table is a suggestion list, not a constraint."""
        entry = make_entry(category="Lottery")
        assert entry.category not in INCOME_CATEGORIES
        assert entry.category not in EXPENSE_CATEGORIES


class TestSerialization:
    """Tests for the persisted JSON layout."""

    def test_serialized_fields(self):
        blob = serialize_entries([make_entry(note="pay")])
        assert '"id":1736933400000' in blob
        assert '"kind":"income"' in blob
        assert '"category":"Salary"' in blob
        assert '"note":"pay"' in blob
        assert '"timestamp":"2025-01-15T09:30:00Z"' in blob

    def test_reserialize_is_stable(self):
        blob = serialize_entries([
            make_entry(id=2, amount=Decimal("1000.5")),
            make_entry(id=1, kind=EntryKind.EXPENSE, category="Food", note="lunch"),
        ])
        assert serialize_entries(deserialize_entries(blob)) == blob

    def test_accepts_numeric_amount_and_missing_note(self):
        """Records with plain JSON numbers and no note still load."""
        blob = (
            '[{"id": 7, "amount": 250, "kind": "expense", '
            '"category": "Food", "timestamp": "2025-01-15T09:30:00.000Z"}]'
        )
        [entry] = deserialize_entries(blob)
        assert entry.amount == Decimal("250")
        assert entry.note == ""

    def test_rejects_malformed_blob(self):
        with pytest.raises(ValueError):
            deserialize_entries("not json")
