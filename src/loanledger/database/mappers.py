"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain snapshot handed to the
engine never carries a live ORM session.
"""

from decimal import Decimal
from typing import Optional

from loanledger.domain import entities as domain
from loanledger.database.models import (
    Account as ORMAccount,
    AutomaticLoanDeduction as ORMAutomaticLoanDeduction,
    LoanTransaction as ORMLoanTransaction,
    LoanTransactionEntry as ORMLoanTransactionEntry,
)


def _decimal(value) -> Decimal:
    return Decimal("0") if value is None else Decimal(value)


def account_to_domain(orm_account: Optional[ORMAccount]) -> Optional[domain.Account]:
    """Convert SQLAlchemy Account model to domain Account entity."""
    if orm_account is None:
        return None
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        created_at=orm_account.created_at,
        currency=orm_account.currency,
    )


def automatic_deduction_to_domain(
    orm_rule: ORMAutomaticLoanDeduction,
) -> domain.AutomaticDeductionRule:
    """Convert SQLAlchemy AutomaticLoanDeduction model to domain rule."""
    return domain.AutomaticDeductionRule(
        id=orm_rule.id,
        name=orm_rule.name,
        account_id=orm_rule.account_id,
        rate=orm_rule.rate,
        amount=orm_rule.amount,
        created_at=orm_rule.created_at,
    )


def entry_to_domain(orm_entry: ORMLoanTransactionEntry) -> domain.LoanTransactionEntry:
    """Convert SQLAlchemy LoanTransactionEntry model to domain entry."""
    return domain.LoanTransactionEntry(
        id=orm_entry.id,
        loan_transaction_id=orm_entry.loan_transaction_id,
        type=orm_entry.type,
        name=orm_entry.name,
        description=orm_entry.description,
        is_add_on=bool(orm_entry.is_add_on),
        debit=_decimal(orm_entry.debit),
        credit=_decimal(orm_entry.credit),
        account_id=orm_entry.account_id,
        account=account_to_domain(orm_entry.account),
        is_automatic_loan_deduction_deleted=bool(orm_entry.is_automatic_loan_deduction_deleted),
    )


def loan_transaction_to_domain(orm_loan: ORMLoanTransaction) -> domain.LoanTransaction:
    """Convert SQLAlchemy LoanTransaction model to the full domain aggregate."""
    return domain.LoanTransaction(
        id=orm_loan.id,
        account_id=orm_loan.account_id,
        loan_type=domain.LoanType(orm_loan.loan_type),
        mode_of_payment=domain.ModeOfPayment(orm_loan.mode_of_payment),
        mode_of_payment_fixed_days=orm_loan.mode_of_payment_fixed_days,
        mode_of_payment_weekly=orm_loan.mode_of_payment_weekly,
        mode_of_payment_semi_monthly_pay_1=orm_loan.mode_of_payment_semi_monthly_pay_1,
        mode_of_payment_semi_monthly_pay_2=orm_loan.mode_of_payment_semi_monthly_pay_2,
        mode_of_payment_monthly_exact_day=bool(orm_loan.mode_of_payment_monthly_exact_day),
        terms=orm_loan.terms,
        applied_1=_decimal(orm_loan.applied_1),
        is_add_on=bool(orm_loan.is_add_on),
        previous_loan_id=orm_loan.previous_loan_id,
        previous_balance=_decimal(orm_loan.previous_balance),
        account=account_to_domain(orm_loan.account),
        printed_date=orm_loan.printed_date,
        approved_date=orm_loan.approved_date,
        released_date=orm_loan.released_date,
        entries=tuple(entry_to_domain(entry) for entry in orm_loan.entries),
        total_debit=_decimal(orm_loan.total_debit),
        total_credit=_decimal(orm_loan.total_credit),
        total_add_on=_decimal(orm_loan.total_add_on),
        total_deduction=_decimal(orm_loan.total_deduction),
        created_at=orm_loan.created_at,
    )
