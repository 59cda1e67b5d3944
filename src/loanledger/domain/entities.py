"""Domain model entities for loanledger.

These are pure data classes representing loan transactions and their ledger
entries, independent of database schema. The server side (see
loanledger.database) is the system of record; the engine only ever holds an
immutable snapshot of a loan transaction and replaces it wholesale.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Kind of account an entry can post to."""

    CASH = "cash"
    LOAN = "loan"
    DEDUCTION = "deduction"
    OTHER = "other"


class LoanType(str, Enum):
    """Loan type; changing it invalidates the existing entry set."""

    STANDARD = "standard"
    RESTRUCTURED = "restructured"
    STANDARD_PREVIOUS = "standard previous"
    RENEWAL = "renewal"
    RENEWAL_WITHOUT_DEDUCTION = "renewal without deduction"


# Loan types that carry a previous loan balance over into the new loan
PREVIOUS_LOAN_TYPES = (
    LoanType.RENEWAL,
    LoanType.RESTRUCTURED,
    LoanType.RENEWAL_WITHOUT_DEDUCTION,
)


class ModeOfPayment(str, Enum):
    """Payment schedule of a loan."""

    DAILY = "daily"
    WEEKLY = "weekly"
    SEMI_MONTHLY = "semi-monthly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi-annual"
    LUMPSUM = "lumpsum"
    DAY = "day"


WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class EntryKind(str, Enum):
    """Closed set of ledger entry kinds.

    Tags are matched exactly. Any other tag containing "deduction" is a
    DEDUCTION; everything else maps to UNKNOWN, which is never deduction-like.
    """

    STATIC = "static"
    DEDUCTION = "deduction"
    AUTOMATIC_DEDUCTION = "automatic-deduction"
    ADD_ON = "add-on"
    PREVIOUS = "previous"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: object) -> "EntryKind":
        """Map a raw type tag to an entry kind without raising."""
        if not isinstance(tag, str):
            return cls.UNKNOWN
        try:
            return cls(tag)
        except ValueError:
            pass
        if "deduction" in tag:
            return cls.DEDUCTION
        return cls.UNKNOWN

    @property
    def is_deduction_like(self) -> bool:
        return self in (EntryKind.DEDUCTION, EntryKind.AUTOMATIC_DEDUCTION)


class LifecycleStatus(str, Enum):
    """Derived lifecycle position of a loan transaction."""

    DRAFT = "draft"
    PRINTED = "printed"
    APPROVED = "approved"
    RELEASED = "released"


class Milestone(str, Enum):
    """Milestone date fields, in lifecycle order."""

    PRINTED = "printed"
    APPROVED = "approved"
    RELEASED = "released"

    @property
    def field_name(self) -> str:
        return f"{self.value}_date"


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: int
    name: str
    account_type: AccountType
    created_at: datetime
    currency: Optional[str] = None

    @property
    def is_cash_equivalent(self) -> bool:
        return self.account_type == AccountType.CASH


@dataclass(frozen=True)
class AutomaticDeductionRule:
    """Rule the server uses to generate automatic deduction entries.

    A rule either charges a fraction of the applied amount (rate) or a fixed
    amount.
    """

    id: int
    name: str
    account_id: int
    rate: Optional[Decimal]
    amount: Optional[Decimal]
    created_at: datetime


@dataclass(frozen=True)
class MilestoneDates:
    """The three optional milestone dates of a loan transaction."""

    printed_date: Optional[date] = None
    approved_date: Optional[date] = None
    released_date: Optional[date] = None


@dataclass(frozen=True)
class LoanTransactionEntry:
    """One debit/credit line of a loan transaction."""

    id: Optional[int]
    loan_transaction_id: Optional[int]
    type: str
    name: str = ""
    description: Optional[str] = None
    is_add_on: bool = False
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    account_id: Optional[int] = None
    account: Optional[Account] = None
    is_automatic_loan_deduction_deleted: bool = False
    kind: EntryKind = field(init=False)
    is_deduction_like: bool = field(init=False)

    def __post_init__(self):
        kind = EntryKind.from_tag(self.type)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "is_deduction_like", kind.is_deduction_like)


@dataclass(frozen=True)
class LoanTransaction:
    """Loan transaction aggregate: metadata, milestone dates and entries.

    An id of None means the loan transaction has not been created yet.
    """

    id: Optional[int]
    account_id: Optional[int]
    loan_type: LoanType = LoanType.STANDARD
    mode_of_payment: ModeOfPayment = ModeOfPayment.MONTHLY
    mode_of_payment_fixed_days: Optional[int] = None
    mode_of_payment_weekly: Optional[str] = None
    mode_of_payment_semi_monthly_pay_1: Optional[int] = None
    mode_of_payment_semi_monthly_pay_2: Optional[int] = None
    mode_of_payment_monthly_exact_day: bool = False
    terms: int = 1
    applied_1: Decimal = Decimal("0")
    is_add_on: bool = False
    previous_loan_id: Optional[int] = None
    previous_balance: Decimal = Decimal("0")
    account: Optional[Account] = None
    printed_date: Optional[date] = None
    approved_date: Optional[date] = None
    released_date: Optional[date] = None
    entries: tuple[LoanTransactionEntry, ...] = ()
    total_debit: Decimal = Decimal("0")
    total_credit: Decimal = Decimal("0")
    total_add_on: Decimal = Decimal("0")
    total_deduction: Decimal = Decimal("0")
    created_at: Optional[datetime] = None

    @property
    def dates(self) -> MilestoneDates:
        return MilestoneDates(
            printed_date=self.printed_date,
            approved_date=self.approved_date,
            released_date=self.released_date,
        )

    def get_entry(self, entry_id: int) -> Optional[LoanTransactionEntry]:
        """Return the entry with the given id, or None."""
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None


@dataclass
class LoanTransactionPayload:
    """Form values submitted to create or update a loan transaction.

    This is the only mutable model: it mirrors what the loan form holds
    between save cycles.
    """

    account_id: Optional[int]
    applied_1: Decimal
    terms: int
    cash_account_id: Optional[int] = None
    loan_type: LoanType = LoanType.STANDARD
    mode_of_payment: ModeOfPayment = ModeOfPayment.MONTHLY
    mode_of_payment_fixed_days: Optional[int] = None
    mode_of_payment_weekly: Optional[str] = None
    mode_of_payment_semi_monthly_pay_1: Optional[int] = None
    mode_of_payment_semi_monthly_pay_2: Optional[int] = None
    mode_of_payment_monthly_exact_day: bool = False
    is_add_on: bool = False
    previous_loan_id: Optional[int] = None
    previous_balance: Decimal = Decimal("0")

    @classmethod
    def from_loan(cls, loan: LoanTransaction) -> "LoanTransactionPayload":
        """Build form values from a server snapshot."""
        return cls(
            account_id=loan.account_id,
            applied_1=loan.applied_1,
            terms=loan.terms,
            loan_type=loan.loan_type,
            mode_of_payment=loan.mode_of_payment,
            mode_of_payment_fixed_days=loan.mode_of_payment_fixed_days,
            mode_of_payment_weekly=loan.mode_of_payment_weekly,
            mode_of_payment_semi_monthly_pay_1=loan.mode_of_payment_semi_monthly_pay_1,
            mode_of_payment_semi_monthly_pay_2=loan.mode_of_payment_semi_monthly_pay_2,
            mode_of_payment_monthly_exact_day=loan.mode_of_payment_monthly_exact_day,
            is_add_on=loan.is_add_on,
            previous_loan_id=loan.previous_loan_id,
            previous_balance=loan.previous_balance,
        )


@dataclass(frozen=True)
class EntryPayload:
    """Values of the deduction entry sub-form."""

    account_id: int
    amount: Decimal
    name: Optional[str] = None
    description: Optional[str] = None
    is_add_on: bool = False
