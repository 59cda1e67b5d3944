"""Utility for resolving account names to IDs."""

from loanledger.domain.account import AccountService
from loanledger.domain.entities import AccountType


def resolve_account(
    account_service: AccountService,
    account: str | int,
    account_type: AccountType | None = None,
) -> int:
    """Resolve account name or ID to account ID.

    Args:
        account_service: AccountService instance
        account: Account name (str) or ID (int or string representation of int)
        account_type: Optional required account type

    Returns:
        Account ID

    Raises:
        ValueError: If account is not found or has the wrong type
    """
    account_obj = None
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        # Not a number, treat as name
        for acc in account_service.list_accounts():
            if acc.name == account:
                account_obj = acc
                break
        if account_obj is None:
            raise ValueError(f"Account '{account}' not found")
    else:
        account_obj = account_service.get_account(account_id)
        if account_obj is None:
            raise ValueError(f"Account ID {account_id} not found")

    if account_type is not None and account_obj.account_type != account_type:
        raise ValueError(
            f"Account '{account_obj.name}' is not a {AccountType(account_type).value} account"
        )
    return account_obj.id
