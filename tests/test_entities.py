"""Tests for domain entities."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from loanledger.domain.entities import (
    Account,
    AccountType,
    EntryKind,
    LoanTransaction,
    LoanTransactionEntry,
    LoanTransactionPayload,
    LoanType,
    Milestone,
)


class TestEntryKind:
    """Tests for mapping raw type tags to entry kinds."""

    @pytest.mark.parametrize(
        "tag,kind",
        [
            ("static", EntryKind.STATIC),
            ("deduction", EntryKind.DEDUCTION),
            ("automatic-deduction", EntryKind.AUTOMATIC_DEDUCTION),
            ("add-on", EntryKind.ADD_ON),
            ("previous", EntryKind.PREVIOUS),
            ("loan-deduction", EntryKind.DEDUCTION),
            (" deduction ", EntryKind.DEDUCTION),
        ],
    )
    def test_known_tags(self, tag, kind):
        assert EntryKind.from_tag(tag) == kind

    @pytest.mark.parametrize("tag", ["", "garbage", "Deduction", " DEDUCTION ", "Static", None, 42, ["deduction"]])
    def test_unknown_tags(self, tag):
        """Unknown or malformed tags never raise and are never deduction-like."""
        assert EntryKind.from_tag(tag) == EntryKind.UNKNOWN
        assert not EntryKind.from_tag(tag).is_deduction_like


class TestLoanTransactionEntry:
    """Tests for LoanTransactionEntry entity."""

    def test_kind_computed_at_construction(self):
        entry = LoanTransactionEntry(id=1, loan_transaction_id=1, type="automatic-deduction")
        assert entry.kind == EntryKind.AUTOMATIC_DEDUCTION
        assert entry.is_deduction_like is True

    def test_static_entry_not_deduction_like(self):
        entry = LoanTransactionEntry(id=1, loan_transaction_id=1, type="static")
        assert entry.is_deduction_like is False

    def test_entry_immutability(self):
        """Test that entries are immutable."""
        entry = LoanTransactionEntry(id=1, loan_transaction_id=1, type="deduction")
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            entry.credit = Decimal("10")


class TestLoanTransaction:
    """Tests for LoanTransaction aggregate."""

    def test_get_entry(self):
        entries = (
            LoanTransactionEntry(id=10, loan_transaction_id=1, type="static"),
            LoanTransactionEntry(id=11, loan_transaction_id=1, type="deduction"),
        )
        loan = LoanTransaction(id=1, account_id=2, entries=entries)
        assert loan.get_entry(11) is entries[1]
        assert loan.get_entry(99) is None

    def test_dates(self):
        loan = LoanTransaction(id=1, account_id=2, printed_date=date(2024, 1, 1))
        assert loan.dates.printed_date == date(2024, 1, 1)
        assert loan.dates.approved_date is None

    def test_payload_from_loan(self):
        loan = LoanTransaction(
            id=1,
            account_id=2,
            loan_type=LoanType.RENEWAL,
            applied_1=Decimal("5000"),
            terms=6,
            is_add_on=True,
            previous_loan_id=3,
            previous_balance=Decimal("1200"),
        )
        payload = LoanTransactionPayload.from_loan(loan)
        assert payload.account_id == 2
        assert payload.loan_type == LoanType.RENEWAL
        assert payload.applied_1 == Decimal("5000")
        assert payload.is_add_on is True
        assert payload.previous_loan_id == 3
        assert payload.previous_balance == Decimal("1200")

        # Form values are mutable, the snapshot is not
        payload.terms = 12
        assert loan.terms == 6


def test_account_cash_equivalence():
    created_at = datetime.now(UTC)
    assert Account(id=1, name="Cash", account_type=AccountType.CASH, created_at=created_at).is_cash_equivalent
    assert not Account(id=2, name="Fees", account_type=AccountType.DEDUCTION, created_at=created_at).is_cash_equivalent


def test_milestone_field_names():
    assert [m.field_name for m in Milestone] == ["printed_date", "approved_date", "released_date"]
