"""Abstract database interface.

This is the persistence/API client contract the ledger engine talks to. Every
loan transaction mutation returns the full aggregate (never a delta), except
delete_entry, after which the caller refetches.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from loanledger.domain.entities import (
    Account,
    AccountType,
    AutomaticDeductionRule,
    EntryPayload,
    LoanTransaction,
    LoanTransactionPayload,
    Milestone,
)


class Database(ABC):
    """Abstract database interface for loanledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self, name: str, account_type: AccountType, currency: Optional[str] = None
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, account_type: Optional[AccountType] = None) -> list[Account]:
        """List accounts, optionally filtered by type."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account that nothing references."""
        pass

    # Automatic deduction rule operations
    @abstractmethod
    def create_automatic_deduction(
        self,
        name: str,
        account_id: int,
        rate: Optional[Decimal] = None,
        amount: Optional[Decimal] = None,
    ) -> int:
        """Create an automatic deduction rule. Returns rule ID."""
        pass

    @abstractmethod
    def list_automatic_deductions(self) -> list[AutomaticDeductionRule]:
        """List automatic deduction rules."""
        pass

    # Loan transaction operations
    @abstractmethod
    def fetch_loan_transaction(self, loan_transaction_id: int) -> LoanTransaction:
        """Get the full loan transaction aggregate."""
        pass

    @abstractmethod
    def list_loan_transactions(self) -> list[LoanTransaction]:
        """List loan transactions."""
        pass

    @abstractmethod
    def create_loan_transaction(self, payload: LoanTransactionPayload) -> LoanTransaction:
        """Create a loan transaction with its generated entries."""
        pass

    @abstractmethod
    def update_loan_transaction(
        self, loan_transaction_id: int, payload: LoanTransactionPayload
    ) -> LoanTransaction:
        """Update a draft loan transaction."""
        pass

    @abstractmethod
    def change_cash_equivalence_account(
        self, loan_transaction_id: int, account_id: int
    ) -> LoanTransaction:
        """Replace the account of the cash-equivalence entry."""
        pass

    @abstractmethod
    def advance_milestone(
        self, loan_transaction_id: int, milestone: Milestone, on_date: date
    ) -> LoanTransaction:
        """Set a milestone date (print, approval or release workflow)."""
        pass

    # Entry operations
    @abstractmethod
    def create_entry(self, loan_transaction_id: int, payload: EntryPayload) -> LoanTransaction:
        """Add a deduction entry."""
        pass

    @abstractmethod
    def update_entry(self, entry_id: int, payload: EntryPayload) -> LoanTransaction:
        """Update a deduction entry."""
        pass

    @abstractmethod
    def delete_entry(self, entry_id: int) -> None:
        """Delete a deduction entry; automatic deductions are soft-deleted."""
        pass

    @abstractmethod
    def restore_entry(self, entry_id: int) -> LoanTransaction:
        """Restore a soft-deleted automatic deduction."""
        pass
