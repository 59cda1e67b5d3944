"""SQLAlchemy models for loanledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    account_type = Column(String, nullable=False, default="other")
    currency = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class AutomaticLoanDeduction(Base):
    """Automatic deduction rule applied to newly generated entry sets."""

    __tablename__ = "automatic_loan_deductions"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    rate = Column(Numeric(10, 6), nullable=True)
    amount = Column(Numeric(14, 2), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account")


class LoanTransaction(Base):
    """Loan transaction model."""

    __tablename__ = "loan_transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    loan_type = Column(String, nullable=False, default="standard")
    mode_of_payment = Column(String, nullable=False, default="monthly")
    mode_of_payment_fixed_days = Column(Integer, nullable=True)
    mode_of_payment_weekly = Column(String, nullable=True)
    mode_of_payment_semi_monthly_pay_1 = Column(Integer, nullable=True)
    mode_of_payment_semi_monthly_pay_2 = Column(Integer, nullable=True)
    mode_of_payment_monthly_exact_day = Column(Boolean, default=False, nullable=False)
    terms = Column(Integer, nullable=False)
    applied_1 = Column(Numeric(14, 2), nullable=False)
    is_add_on = Column(Boolean, default=False, nullable=False)
    previous_loan_id = Column(Integer, ForeignKey("loan_transactions.id"), nullable=True)
    previous_balance = Column(Numeric(14, 2), default=0, nullable=False)
    printed_date = Column(Date, nullable=True)
    approved_date = Column(Date, nullable=True)
    released_date = Column(Date, nullable=True)
    total_debit = Column(Numeric(14, 2), default=0, nullable=False)
    total_credit = Column(Numeric(14, 2), default=0, nullable=False)
    total_add_on = Column(Numeric(14, 2), default=0, nullable=False)
    total_deduction = Column(Numeric(14, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account")
    previous_loan = relationship("LoanTransaction", remote_side=[id])
    entries = relationship(
        "LoanTransactionEntry",
        back_populates="loan_transaction",
        cascade="all, delete-orphan",
        order_by="LoanTransactionEntry.position",
    )


class LoanTransactionEntry(Base):
    """Loan transaction entry model."""

    __tablename__ = "loan_transaction_entries"

    id = Column(Integer, primary_key=True)
    loan_transaction_id = Column(Integer, ForeignKey("loan_transactions.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    type = Column(String, nullable=False)
    name = Column(String, nullable=False, default="")
    description = Column(String, nullable=True)
    is_add_on = Column(Boolean, default=False, nullable=False)
    debit = Column(Numeric(14, 2), default=0, nullable=False)
    credit = Column(Numeric(14, 2), default=0, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    automatic_loan_deduction_id = Column(
        Integer, ForeignKey("automatic_loan_deductions.id"), nullable=True
    )
    is_automatic_loan_deduction_deleted = Column(Boolean, default=False, nullable=False)

    # Relationships
    loan_transaction = relationship("LoanTransaction", back_populates="entries")
    account = relationship("Account")
    automatic_loan_deduction = relationship("AutomaticLoanDeduction")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
