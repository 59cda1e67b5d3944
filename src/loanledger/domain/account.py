"""Account domain service."""

from decimal import Decimal
from typing import Optional

from loanledger.database.base import Database
from loanledger.domain.entities import (
    Account as AccountEntity,
    AccountType,
    AutomaticDeductionRule,
)
from loanledger.domain.errors import ConflictError, NotFoundError, ValidationError, account_not_found


class AccountService:
    """Service for managing accounts and automatic deduction rules."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        name: str,
        account_type: AccountType = AccountType.OTHER,
        currency: Optional[str] = None,
    ) -> int:
        """Create a new account.

        Args:
            name: Account name
            account_type: Account type; only cash accounts can back the
                cash-equivalence entry
            currency: Optional currency code

        Returns:
            Account ID

        Raises:
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name must not be empty")

        # Check if account with same name exists
        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")

        return self.db.create_account(
            name=name,
            account_type=AccountType(account_type),
            currency=currency.upper() if currency else None,
        )

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self, account_type: Optional[AccountType] = None) -> list[AccountEntity]:
        """List accounts.

        Args:
            account_type: Optional filter, e.g. AccountType.CASH for the
                accounts eligible as cash equivalence

        Returns:
            List of account entities
        """
        return self.db.list_accounts(account_type=account_type)

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If account not found
            DependencyError: If loans or entries still reference the account
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        self.db.delete_account(account_id)

    def create_automatic_deduction(
        self,
        name: str,
        account_id: int,
        rate: Optional[Decimal] = None,
        amount: Optional[Decimal] = None,
    ) -> int:
        """Create an automatic deduction rule.

        Args:
            name: Name shown on generated entries
            account_id: Account credited by generated entries
            rate: Fraction of the applied amount (e.g. Decimal("0.02"))
            amount: Fixed amount, used instead of rate

        Returns:
            Rule ID

        Raises:
            NotFoundError: If account not found
            ValidationError: If neither or both of rate and amount are given
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        return self.db.create_automatic_deduction(
            name=name, account_id=account_id, rate=rate, amount=amount
        )

    def list_automatic_deductions(self) -> list[AutomaticDeductionRule]:
        """List automatic deduction rules."""
        return self.db.list_automatic_deductions()
