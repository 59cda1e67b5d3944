"""Per-entry mutation guards."""

from dataclasses import dataclass
from typing import Optional

from loanledger.domain.classifier import is_editable, is_removable, is_soft_deleted
from loanledger.domain.entities import LoanTransaction, LoanTransactionEntry, LoanType
from loanledger.domain.status import is_read_only


@dataclass(frozen=True)
class MutationContext:
    """Aggregate disable flag for every entry mutation control."""

    global_disabled: bool = False


def resolve_global_disabled(
    loan: Optional[LoanTransaction],
    read_only: bool = False,
    busy: bool = False,
) -> bool:
    """Return True if no entry of the loan may currently be mutated.

    The flag is set when the loan is past draft or locked by the caller, when
    it has not been persisted yet, when its static cash and loan entries are
    missing, when its type suppresses deductions, or while a previous request
    is still outstanding.

    Args:
        loan: Current loan transaction snapshot, or None if nothing is loaded
        read_only: Caller-imposed lock (e.g. missing permission)
        busy: True while a mutation request is in flight

    Returns:
        The global disable flag
    """
    if loan is None or loan.id is None:
        return True
    if busy or is_read_only(loan, read_only):
        return True
    if len(loan.entries) < 2:
        return True
    return loan.loan_type == LoanType.RENEWAL_WITHOUT_DEDUCTION


def context_for(
    loan: Optional[LoanTransaction], read_only: bool = False, busy: bool = False
) -> MutationContext:
    """Build the mutation context for a loan snapshot."""
    return MutationContext(global_disabled=resolve_global_disabled(loan, read_only, busy))


def can_edit(entry: LoanTransactionEntry, context: MutationContext) -> bool:
    return is_editable(entry) and not is_soft_deleted(entry) and not context.global_disabled


def can_remove(entry: LoanTransactionEntry, context: MutationContext) -> bool:
    return is_removable(entry) and not is_soft_deleted(entry) and not context.global_disabled


def can_restore(entry: LoanTransactionEntry) -> bool:
    """Return True if the entry can be restored.

    Restoring is the recovery path for an over-eager deletion, so it ignores
    the global disable flag.
    """
    return is_soft_deleted(entry)


def can_add(loan_type: Optional[LoanType], context: MutationContext) -> bool:
    """Return True if a new deduction entry may be added."""
    if loan_type == LoanType.RENEWAL_WITHOUT_DEDUCTION:
        return False
    return not context.global_disabled
