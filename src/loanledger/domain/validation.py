"""Validation of loan transaction form values before they are submitted."""

from decimal import Decimal

from loanledger.domain.entities import (
    WEEKDAYS,
    LoanTransactionPayload,
    LoanType,
    ModeOfPayment,
    EntryPayload,
)
from loanledger.domain.errors import ValidationError


def validate_mode_of_payment(payload: LoanTransactionPayload) -> None:
    """Validate the parameters required by the selected mode of payment.

    Raises:
        ValidationError: If a required parameter is missing or out of range
    """
    mode = payload.mode_of_payment
    if mode == ModeOfPayment.DAY:
        days = payload.mode_of_payment_fixed_days
        if days is None or days < 1:
            raise ValidationError("Minimum of 1 day")
    elif mode == ModeOfPayment.WEEKLY:
        if payload.mode_of_payment_weekly not in WEEKDAYS:
            raise ValidationError("Please provide valid weekdays")
    elif mode == ModeOfPayment.SEMI_MONTHLY:
        pay_1 = payload.mode_of_payment_semi_monthly_pay_1
        pay_2 = payload.mode_of_payment_semi_monthly_pay_2
        for pay_day in (pay_1, pay_2):
            if pay_day is None or not 1 <= pay_day <= 31:
                raise ValidationError("Choose a valid day 1 - 31")
        if pay_1 >= pay_2:
            raise ValidationError("First payment date must be less than second payment date")


def validate_loan_payload(payload: LoanTransactionPayload) -> None:
    """Validate loan transaction form values.

    Args:
        payload: Form values to validate

    Raises:
        ValidationError: If any field is invalid
    """
    if payload.account_id is None:
        raise ValidationError("Loan Account is required")
    if payload.applied_1 is None or payload.applied_1 < 1:
        raise ValidationError("Loan amount must not be 0")
    if payload.terms is None or payload.terms < 1:
        raise ValidationError("Minimum 1 term (Month)")
    if payload.loan_type == LoanType.RENEWAL and payload.previous_loan_id is None:
        raise ValidationError("Previous loan is required for renewal loan")
    if payload.previous_balance is not None and payload.previous_balance < 0:
        raise ValidationError("Previous loan balance must not be negative")
    validate_mode_of_payment(payload)


def validate_entry_payload(payload: EntryPayload) -> None:
    """Validate deduction entry form values.

    Raises:
        ValidationError: If the amount is not positive
    """
    if payload.amount is None or payload.amount <= Decimal("0"):
        raise ValidationError("Deduction amount must be greater than 0")
