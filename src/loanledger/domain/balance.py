"""Ledger balance calculation over a loan transaction's entries."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from loanledger.domain.classifier import is_deduction_like, is_soft_deleted
from loanledger.domain.entities import LoanTransactionEntry

ZERO = Decimal("0")


@dataclass(frozen=True)
class LedgerTotals:
    """Balance indicator values for a loan transaction."""

    total_debit: Decimal
    total_credit: Decimal
    deductions_total: Decimal
    is_balanced: bool
    difference: Decimal


def to_amount(value: Any) -> Decimal:
    """Coerce a numeric field to Decimal, treating anything invalid as zero."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not amount.is_finite():
        return ZERO
    return amount


def compute_totals(
    entries: Optional[Iterable[LoanTransactionEntry]],
    total_debit: Any = None,
    total_credit: Any = None,
) -> LedgerTotals:
    """Compute the balance indicator for a set of entries.

    Debit and credit totals are summed from the entries unless the caller
    passes server-supplied totals explicitly. Soft-deleted automatic
    deductions are left out of the derived sums but still count towards
    deductions_total, like any deduction that is not an add-on. The result
    is advisory and does not gate saving.

    Args:
        entries: Loan transaction entries (None is treated as empty)
        total_debit: Optional server-supplied debit total
        total_credit: Optional server-supplied credit total

    Returns:
        LedgerTotals for the entries
    """
    entries = list(entries or ())
    active = [entry for entry in entries if not is_soft_deleted(entry)]

    deductions_total = sum(
        (
            to_amount(getattr(entry, "credit", None))
            for entry in entries
            if is_deduction_like(entry) and not getattr(entry, "is_add_on", False)
        ),
        ZERO,
    )

    if total_debit is None:
        debit = sum((to_amount(getattr(e, "debit", None)) for e in active), ZERO)
    else:
        debit = to_amount(total_debit)
    if total_credit is None:
        credit = sum((to_amount(getattr(e, "credit", None)) for e in active), ZERO)
    else:
        credit = to_amount(total_credit)

    return LedgerTotals(
        total_debit=debit,
        total_credit=credit,
        deductions_total=deductions_total,
        is_balanced=debit == credit,
        difference=abs(debit - credit),
    )
