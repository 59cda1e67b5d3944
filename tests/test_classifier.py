"""Tests for entry classification."""

import pytest
from types import SimpleNamespace

from loanledger.domain.classifier import (
    entry_labels,
    is_deduction_like,
    is_editable,
    is_removable,
    is_soft_deleted,
)
from loanledger.domain.entities import LoanTransactionEntry


def make_entry(type, **kwargs):
    return LoanTransactionEntry(id=1, loan_transaction_id=1, type=type, **kwargs)


@pytest.mark.parametrize(
    "tag,expected",
    [
        ("deduction", True),
        ("automatic-deduction", True),
        ("static", False),
        ("add-on", False),
        ("previous", False),
        ("", False),
        ("%%garbage%%", False),
        ("deductions", True),
        ("loan-deduction", True),
        ("manual-deduction", True),
        ("Deduction", False),
        (" DEDUCTION ", False),
        ("Automatic-Deduction", False),
    ],
)
def test_is_deduction_like(tag, expected):
    entry = make_entry(tag)
    assert is_deduction_like(entry) is expected
    assert is_editable(entry) is expected
    assert is_removable(entry) is expected


def test_predicates_accept_plain_objects():
    """Anything shaped like an entry is classified from its raw tag."""
    assert is_deduction_like(SimpleNamespace(type="deduction")) is True
    assert is_deduction_like(SimpleNamespace(type=None)) is False
    assert is_deduction_like(SimpleNamespace()) is False


def test_soft_deleted_requires_true():
    assert is_soft_deleted(make_entry("automatic-deduction", is_automatic_loan_deduction_deleted=True))
    assert not is_soft_deleted(make_entry("automatic-deduction"))
    assert not is_soft_deleted(SimpleNamespace(is_automatic_loan_deduction_deleted="yes"))
    assert not is_soft_deleted(SimpleNamespace())


class TestEntryLabels:
    """Tests for ledger badges."""

    def test_deleted_automatic_deduction(self):
        entry = make_entry("automatic-deduction", is_automatic_loan_deduction_deleted=True)
        assert entry_labels(entry) == ["Deleted", "Automatic Deduction"]

    def test_add_on_deduction(self):
        assert entry_labels(make_entry("deduction", is_add_on=True)) == ["Deduction", "Add-On"]

    def test_previous_loan(self):
        assert entry_labels(make_entry("previous")) == ["Previous Loan"]

    def test_static_has_no_badge(self):
        assert entry_labels(make_entry("static")) == []


def test_deduction_like_matches_lowercase_substring_only():
    """Deduction-like holds exactly when the raw tag contains "deduction"."""
    for tag in ["deduction", "automatic-deduction", "deductions", "x-deduction-y", "static", "Deduction", "DEDUCTION", "deductio"]:
        assert is_deduction_like(make_entry(tag)) is ("deduction" in tag)


def test_other_deduction_tags_show_deduction_badge():
    assert entry_labels(make_entry("manual-deduction")) == ["Deduction"]
