"""Server-side entry generation and totals recomputation.

The database is the system of record for loan transactions: it creates the
static cash and loan entries, carries over previous loan balances, applies
automatic deduction rules and recomputes the running totals after every
mutation. The engine only ever displays what comes back from here.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.orm import Session

from loanledger.database.models import (
    Account,
    AutomaticLoanDeduction,
    LoanTransaction,
    LoanTransactionEntry,
)
from loanledger.domain.entities import EntryKind, LoanType, PREVIOUS_LOAN_TYPES
from loanledger.domain.errors import ValidationError

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")

CASH_ENTRY_POSITION = 0
LOAN_ENTRY_POSITION = 1
DEDUCTION_TYPES = (EntryKind.DEDUCTION.value, EntryKind.AUTOMATIC_DEDUCTION.value)


def _money(value) -> Decimal:
    return (Decimal(value) if value is not None else ZERO).quantize(CENT, rounding=ROUND_HALF_UP)


def rule_amount(rule: AutomaticLoanDeduction, applied: Decimal) -> Decimal:
    """Return the deduction a rule charges on the applied amount."""
    if rule.amount is not None:
        return _money(rule.amount)
    return _money(Decimal(rule.rate or 0) * _money(applied))


def create_static_entries(
    loan: LoanTransaction, cash_account: Account, loan_account: Account
) -> None:
    """Create the cash-equivalence entry and the loan receivable entry."""
    loan.entries.append(
        LoanTransactionEntry(
            position=CASH_ENTRY_POSITION,
            type=EntryKind.STATIC.value,
            name=cash_account.name,
            account=cash_account,
            debit=ZERO,
            credit=ZERO,
        )
    )
    loan.entries.append(
        LoanTransactionEntry(
            position=LOAN_ENTRY_POSITION,
            type=EntryKind.STATIC.value,
            name=loan_account.name,
            account=loan_account,
            debit=ZERO,
            credit=ZERO,
        )
    )


def regenerate_entries(session: Session, loan: LoanTransaction) -> None:
    """Replace every non-static entry according to the loan type.

    Changing the loan type invalidates existing deductions, so they are
    dropped and rebuilt from the previous loan and the automatic deduction
    rules.
    """
    for entry in list(loan.entries):
        if entry.type != EntryKind.STATIC.value:
            loan.entries.remove(entry)

    position = LOAN_ENTRY_POSITION + 1
    if LoanType(loan.loan_type) in PREVIOUS_LOAN_TYPES and loan.previous_loan is not None:
        previous = loan.previous_loan
        loan.entries.append(
            LoanTransactionEntry(
                position=position,
                type=EntryKind.PREVIOUS.value,
                name=f"Previous Loan #{previous.id}",
                account=previous.account,
                debit=ZERO,
                credit=_money(loan.previous_balance),
            )
        )
        position += 1

    if LoanType(loan.loan_type) == LoanType.RENEWAL_WITHOUT_DEDUCTION:
        return

    rules = session.query(AutomaticLoanDeduction).order_by(AutomaticLoanDeduction.id).all()
    for rule in rules:
        loan.entries.append(
            LoanTransactionEntry(
                position=position,
                type=EntryKind.AUTOMATIC_DEDUCTION.value,
                name=rule.name,
                account=rule.account,
                automatic_loan_deduction=rule,
                debit=ZERO,
                credit=rule_amount(rule, loan.applied_1),
            )
        )
        position += 1
    logger.debug("Generated %d automatic deductions for loan %s", len(rules), loan.id)


def refresh_automatic_deductions(loan: LoanTransaction) -> None:
    """Re-derive automatic deduction amounts after the applied amount changed."""
    for entry in loan.entries:
        rule = entry.automatic_loan_deduction
        if entry.type == EntryKind.AUTOMATIC_DEDUCTION.value and rule is not None:
            entry.credit = rule_amount(rule, loan.applied_1)


def next_position(loan: LoanTransaction) -> int:
    """Return the display position for a newly appended entry."""
    return max((entry.position for entry in loan.entries), default=-1) + 1


def recompute_totals(loan: LoanTransaction) -> None:
    """Recompute the static entries and the running totals of a loan.

    Add-on deductions are added to the loan receivable while the loan's
    add-on toggle is active; every other deduction and the previous loan
    balance are taken out of the cash release.

    Raises:
        ValidationError: If the static entries are missing or deductions
            exceed the applied amount
    """
    entries = sorted(loan.entries, key=lambda e: e.position)
    if len(entries) < 2 or any(e.type != EntryKind.STATIC.value for e in entries[:2]):
        raise ValidationError("Loan transaction is missing its cash or loan entry")
    cash_entry, loan_entry = entries[0], entries[1]

    applied = _money(loan.applied_1)
    add_ons = ZERO
    deducted = ZERO
    previous = ZERO
    for entry in entries[2:]:
        if entry.type == EntryKind.PREVIOUS.value:
            previous += _money(entry.credit)
        elif entry.type in DEDUCTION_TYPES and not entry.is_automatic_loan_deduction_deleted:
            if entry.is_add_on and loan.is_add_on:
                add_ons += _money(entry.credit)
            else:
                deducted += _money(entry.credit)

    cash_release = applied - deducted - previous
    if cash_release < 0:
        raise ValidationError(
            f"Deductions of {deducted + previous} exceed the loan amount of {applied}"
        )

    loan_entry.debit = applied + add_ons
    loan_entry.credit = ZERO
    cash_entry.debit = ZERO
    cash_entry.credit = cash_release

    active = [e for e in entries if not e.is_automatic_loan_deduction_deleted]
    loan.total_debit = sum((_money(e.debit) for e in active), ZERO)
    loan.total_credit = sum((_money(e.credit) for e in active), ZERO)
    loan.total_add_on = add_ons
    loan.total_deduction = deducted
