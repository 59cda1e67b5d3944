"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as mutating a non-draft loan transaction."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class RemoteError(DomainError):
    """The system of record could not complete a request."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def loan_transaction_not_found(loan_transaction_id: int) -> str:
    """Return message for missing loan transaction."""
    return f"Loan transaction {loan_transaction_id} not found"


def entry_not_found(entry_id: int) -> str:
    """Return message for missing loan transaction entry."""
    return f"Loan transaction entry {entry_id} not found"


def loan_not_draft(loan_transaction_id: int, status: str) -> str:
    """Return message when a mutation targets a loan past draft."""
    return f"Loan transaction {loan_transaction_id} is {status} and can no longer be modified"


def entry_not_removable(entry_name: str) -> str:
    """Return message for an entry that cannot be removed."""
    return f"Entry {entry_name or 'Unknown'} not removable"


def entry_not_editable(entry_name: str) -> str:
    """Return message for an entry that cannot be edited."""
    return f"Entry {entry_name or 'Unknown'} not editable"


def account_delete_blocked(account_id: int, entry_count: int, loan_count: int) -> str:
    """Return message when an account is still referenced by loans or entries."""
    parts = []
    if loan_count > 0:
        parts.append(f"{loan_count} loan transaction{'s' if loan_count != 1 else ''}")
    if entry_count > 0:
        parts.append(f"{entry_count} entr{'ies' if entry_count != 1 else 'y'}")
    return (
        f"Cannot delete account {account_id}: it has {', '.join(parts)}. "
        "Please reassign or delete them first."
    )
