"""Tests for loan and entry form validation."""

import pytest
from decimal import Decimal

from loanledger.domain.entities import EntryPayload, LoanTransactionPayload, LoanType, ModeOfPayment
from loanledger.domain.errors import ValidationError
from loanledger.domain.validation import validate_entry_payload, validate_loan_payload


def make_payload(**kwargs):
    values = dict(account_id=1, applied_1=Decimal("10000"), terms=12)
    values.update(kwargs)
    return LoanTransactionPayload(**values)


def test_valid_payload():
    validate_loan_payload(make_payload())


@pytest.mark.parametrize(
    "kwargs,message",
    [
        ({"account_id": None}, "Loan Account is required"),
        ({"applied_1": Decimal("0")}, "Loan amount must not be 0"),
        ({"terms": 0}, "Minimum 1 term"),
        ({"loan_type": LoanType.RENEWAL}, "Previous loan is required"),
        ({"previous_balance": Decimal("-1")}, "must not be negative"),
        ({"mode_of_payment": ModeOfPayment.DAY}, "Minimum of 1 day"),
        ({"mode_of_payment": ModeOfPayment.DAY, "mode_of_payment_fixed_days": 0}, "Minimum of 1 day"),
        ({"mode_of_payment": ModeOfPayment.WEEKLY, "mode_of_payment_weekly": "someday"}, "valid weekdays"),
        (
            {
                "mode_of_payment": ModeOfPayment.SEMI_MONTHLY,
                "mode_of_payment_semi_monthly_pay_1": 0,
                "mode_of_payment_semi_monthly_pay_2": 15,
            },
            "valid day",
        ),
        (
            {
                "mode_of_payment": ModeOfPayment.SEMI_MONTHLY,
                "mode_of_payment_semi_monthly_pay_1": 20,
                "mode_of_payment_semi_monthly_pay_2": 5,
            },
            "must be less than",
        ),
    ],
)
def test_invalid_payload(kwargs, message):
    with pytest.raises(ValidationError, match=message):
        validate_loan_payload(make_payload(**kwargs))


def test_valid_modes_of_payment():
    validate_loan_payload(make_payload(mode_of_payment=ModeOfPayment.DAY, mode_of_payment_fixed_days=15))
    validate_loan_payload(make_payload(mode_of_payment=ModeOfPayment.WEEKLY, mode_of_payment_weekly="friday"))
    validate_loan_payload(
        make_payload(
            mode_of_payment=ModeOfPayment.SEMI_MONTHLY,
            mode_of_payment_semi_monthly_pay_1=15,
            mode_of_payment_semi_monthly_pay_2=30,
        )
    )


def test_renewal_with_previous_loan():
    validate_loan_payload(make_payload(loan_type=LoanType.RENEWAL, previous_loan_id=4))


def test_entry_amount_must_be_positive():
    validate_entry_payload(EntryPayload(account_id=1, amount=Decimal("0.01")))
    with pytest.raises(ValidationError):
        validate_entry_payload(EntryPayload(account_id=1, amount=Decimal("0")))
    with pytest.raises(ValidationError):
        validate_entry_payload(EntryPayload(account_id=1, amount=Decimal("-5")))
