"""Ledger reconciliation coordinator.

The coordinator holds the current snapshot of one loan transaction and
mediates every mutation of its entry set. Local precondition violations are
reported through the notifier and never reach the database; remote failures
are reported as errors and leave the snapshot untouched. Every successful
response replaces the snapshot wholesale.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional

from loanledger.database.base import Database
from loanledger.domain.balance import LedgerTotals, compute_totals
from loanledger.domain.classifier import is_editable, is_removable, is_soft_deleted
from loanledger.domain.entities import (
    Account,
    EntryKind,
    EntryPayload,
    LifecycleStatus,
    LoanTransaction,
    LoanTransactionEntry,
    LoanTransactionPayload,
    LoanType,
)
from loanledger.domain.errors import (
    DomainError,
    ValidationError,
    entry_not_editable,
    entry_not_removable,
)
from loanledger.domain.guard import (
    MutationContext,
    can_add,
    can_edit,
    can_remove,
    can_restore,
    context_for,
)
from loanledger.domain.ports import ConfirmationPort, ConfirmationRequest, Notifier
from loanledger.domain.status import is_read_only, resolve_status
from loanledger.domain.validation import validate_entry_payload, validate_loan_payload

logger = logging.getLogger(__name__)


class CashReplacementState(str, Enum):
    """States of the cash-equivalence account replacement."""

    IDLE = "idle"
    ACCOUNT_SELECTED = "account-selected"
    CONFIRMATION_PENDING = "confirmation-pending"
    APPLIED = "applied"
    CANCELLED = "cancelled"


CASH_ENTRY_MISSING = "Sorry cash account entry does not exist in loan transaction."
ACCOUNT_ALREADY_SELECTED = "Invalid : Account is already selected"
RENEWAL_WITHOUT_DEDUCTION_LOCKED = "Deductions are not allowed for renewal without deduction loans"


class LoanLedgerCoordinator:
    """Coordinates entry mutations of one loan transaction.

    Args:
        db: System of record
        confirmation: Confirmation gate for destructive actions
        notifier: Notification surface
        read_only: Caller-imposed lock, OR'd with the lifecycle status
    """

    def __init__(
        self,
        db: Database,
        confirmation: ConfirmationPort,
        notifier: Notifier,
        read_only: bool = False,
    ):
        self.db = db
        self.confirmation = confirmation
        self.notifier = notifier
        self.read_only = read_only
        self.loan: Optional[LoanTransaction] = None
        self.busy = False
        self.cash_state = CashReplacementState.IDLE

    # Derived state
    @property
    def status(self) -> LifecycleStatus:
        if self.loan is None:
            return LifecycleStatus.DRAFT
        return resolve_status(self.loan)

    @property
    def is_read_only(self) -> bool:
        if self.loan is None:
            return bool(self.read_only)
        return is_read_only(self.loan, self.read_only)

    @property
    def context(self) -> MutationContext:
        return context_for(self.loan, read_only=self.read_only, busy=self.busy)

    @property
    def totals(self) -> LedgerTotals:
        return compute_totals(self.loan.entries if self.loan is not None else ())

    @property
    def can_add(self) -> bool:
        loan_type = self.loan.loan_type if self.loan is not None else None
        return can_add(loan_type, self.context)

    def visible_entries(self, show_deleted: bool = False) -> list[LoanTransactionEntry]:
        """Return the entries to display; deleted automatic deductions are hidden by default."""
        if self.loan is None:
            return []
        return [e for e in self.loan.entries if show_deleted or not is_soft_deleted(e)]

    def disabled_reason(self) -> Optional[str]:
        """Explain why entry mutations are disabled, or None if they are not."""
        reason = self._lock_reason()
        if reason is not None:
            return reason
        loan = self.loan
        if len(loan.entries) < 2:
            return "Loan transaction has no cash and loan entries yet"
        if loan.loan_type == LoanType.RENEWAL_WITHOUT_DEDUCTION:
            return RENEWAL_WITHOUT_DEDUCTION_LOCKED
        return None

    def _lock_reason(self) -> Optional[str]:
        """Reason the loan as a whole cannot be mutated, ignoring entry rules."""
        if self.loan is None or self.loan.id is None:
            return "Save the loan transaction first"
        if self.busy:
            return "Another request is still in progress"
        if self.is_read_only:
            if self.status != LifecycleStatus.DRAFT:
                return f"Loan transaction is {self.status.value} and read-only"
            return "Loan transaction is read-only"
        return None

    # Snapshot handling
    def replace(self, loan: LoanTransaction) -> None:
        """Replace the snapshot with a server response."""
        self.loan = loan
        logger.debug(
            "Loan transaction %s replaced: %d entries, debit %s, credit %s",
            loan.id,
            len(loan.entries),
            loan.total_debit,
            loan.total_credit,
        )

    def _request(self, action: str, call: Callable[[], Any]) -> tuple[bool, Any]:
        """Run one request against the database.

        Returns:
            Tuple of (succeeded, result)
        """
        if self.busy:
            self.notifier.warning("Another request is still in progress")
            return False, None
        self.busy = True
        logger.info("Request: %s", action)
        try:
            result = call()
        except DomainError as exc:
            logger.warning("Request failed: %s: %s", action, exc)
            detail = str(exc)
            self.notifier.error(f"Failed to {action}: {detail}" if detail else f"Failed to {action}")
            return False, None
        finally:
            self.busy = False
        return True, result

    def load(self, loan_transaction_id: int) -> Optional[LoanTransaction]:
        """Fetch a loan transaction and make it the current snapshot."""
        ok, loan = self._request(
            "fetch loan transaction",
            lambda: self.db.fetch_loan_transaction(loan_transaction_id),
        )
        if not ok:
            return None
        self.replace(loan)
        return loan

    def refresh(self) -> Optional[LoanTransaction]:
        """Refetch the current loan transaction."""
        if self.loan is None or self.loan.id is None:
            return None
        loan_id = self.loan.id
        ok, loan = self._request(
            "fetch latest loan transaction data",
            lambda: self.db.fetch_loan_transaction(loan_id),
        )
        if not ok:
            return None
        self.replace(loan)
        self.notifier.info("Loan transaction data updated")
        return loan

    # Loan form save cycle
    def save(self, payload: LoanTransactionPayload) -> Optional[LoanTransaction]:
        """Create or update the loan transaction from form values.

        Args:
            payload: Form values

        Returns:
            The new snapshot, or None if nothing was saved
        """
        try:
            validate_loan_payload(payload)
        except ValidationError as exc:
            self.notifier.warning(str(exc))
            return None

        loan_id = self.loan.id if self.loan is not None else None
        if loan_id is None:
            ok, loan = self._request(
                "save loan transaction", lambda: self.db.create_loan_transaction(payload)
            )
        else:
            if self.is_read_only:
                self.notifier.warning(self._lock_reason())
                return None
            ok, loan = self._request(
                "save loan transaction",
                lambda: self.db.update_loan_transaction(loan_id, payload),
            )
        if not ok:
            return None
        self.replace(loan)
        self.notifier.success("Saved")
        return loan

    def request_loan_type_change(
        self, payload: LoanTransactionPayload, loan_type: LoanType | str
    ) -> bool:
        """Change the loan type on the form values after confirmation.

        The change is only persisted by the next save cycle.

        Returns:
            True if the form values were changed
        """
        try:
            loan_type = LoanType(loan_type)
        except ValueError:
            self.notifier.warning(f"Invalid loan type '{loan_type}'")
            return False
        if self.is_read_only:
            self.notifier.warning(self._lock_reason())
            return False
        if loan_type == payload.loan_type:
            return False

        confirmed = self.confirmation.confirm(
            ConfirmationRequest(
                title="Change Loan Type",
                description=(
                    "Are you sure you want to change loan type? "
                    "This action will affect loan entries."
                ),
                content=(f"Loan type: {LoanType(payload.loan_type).value} -> {loan_type.value}",),
                confirm_string="Change",
            )
        )
        if not confirmed:
            return False
        payload.loan_type = loan_type
        logger.info("Loan type changed to %s on form values", loan_type.value)
        return True

    def set_add_on(self, payload: LoanTransactionPayload, enabled: bool) -> Optional[LoanTransaction]:
        """Toggle the add-on switch; a persisted loan is saved right away."""
        if self.loan is not None and self.loan.id is not None and self.context.global_disabled:
            self.notifier.warning(self.disabled_reason())
            return None
        payload.is_add_on = enabled
        if self.loan is None or self.loan.id is None:
            return None
        return self.save(payload)

    # Cash-equivalence account replacement
    def _transition(self, state: CashReplacementState) -> None:
        logger.debug("Cash equivalence replacement: %s -> %s", self.cash_state.value, state.value)
        self.cash_state = state

    def change_cash_equivalence_account(self, account: Account) -> CashReplacementState:
        """Replace the account of the cash-equivalence entry.

        Walks IDLE -> ACCOUNT_SELECTED -> CONFIRMATION_PENDING -> APPLIED or
        CANCELLED and always ends back in IDLE.

        Args:
            account: Newly selected cash or cash equivalent account

        Returns:
            APPLIED or CANCELLED when the flow reached a decision, IDLE when it
            was rejected or the request failed
        """
        self._transition(CashReplacementState.IDLE)
        entries = self.loan.entries if self.loan is not None else ()
        if not entries or entries[0].kind != EntryKind.STATIC:
            self.notifier.warning(CASH_ENTRY_MISSING)
            return CashReplacementState.IDLE
        reason = self._lock_reason()
        if reason is not None:
            self.notifier.warning(reason)
            return CashReplacementState.IDLE

        original = entries[0]
        self._transition(CashReplacementState.ACCOUNT_SELECTED)
        if original.account_id == account.id:
            self.notifier.warning(ACCOUNT_ALREADY_SELECTED)
            self._transition(CashReplacementState.IDLE)
            return CashReplacementState.IDLE
        if not account.is_cash_equivalent:
            self.notifier.warning(f"Account {account.name} is not a cash equivalent account")
            self._transition(CashReplacementState.IDLE)
            return CashReplacementState.IDLE

        self._transition(CashReplacementState.CONFIRMATION_PENDING)
        current_name = original.account.name if original.account is not None else original.name
        confirmed = self.confirmation.confirm(
            ConfirmationRequest(
                title="Replace cash account",
                description=(
                    "The cash source for this loan entry will be updated to use "
                    "a different account"
                ),
                content=(
                    f"Current: {current_name} (ID: {original.account_id})",
                    f"New: {account.name} (ID: {account.id})",
                ),
                confirm_string="Replace",
            )
        )
        if not confirmed:
            self._transition(CashReplacementState.CANCELLED)
            self._transition(CashReplacementState.IDLE)
            return CashReplacementState.CANCELLED

        loan_id = self.loan.id
        ok, loan = self._request(
            "change cash equivalence account",
            lambda: self.db.change_cash_equivalence_account(loan_id, account.id),
        )
        if not ok:
            self._transition(CashReplacementState.IDLE)
            return CashReplacementState.IDLE
        self.replace(loan)
        self._transition(CashReplacementState.APPLIED)
        self.notifier.success("Cash equivalence account changed")
        self._transition(CashReplacementState.IDLE)
        return CashReplacementState.APPLIED

    # Entry mutations
    def _find_entry(self, entry_id: int) -> Optional[LoanTransactionEntry]:
        entry = self.loan.get_entry(entry_id) if self.loan is not None else None
        if entry is None:
            self.notifier.warning(f"Entry {entry_id} is not part of this loan transaction")
        return entry

    def add_entry(self, payload: EntryPayload) -> Optional[LoanTransaction]:
        """Add a deduction entry through the deduction sub-form."""
        if not self.can_add:
            loan_type = self.loan.loan_type if self.loan is not None else None
            if loan_type == LoanType.RENEWAL_WITHOUT_DEDUCTION:
                self.notifier.warning(RENEWAL_WITHOUT_DEDUCTION_LOCKED)
            else:
                self.notifier.warning(self.disabled_reason())
            return None
        try:
            validate_entry_payload(payload)
        except ValidationError as exc:
            self.notifier.warning(str(exc))
            return None

        loan_id = self.loan.id
        ok, loan = self._request("add entry", lambda: self.db.create_entry(loan_id, payload))
        if not ok:
            return None
        self.replace(loan)
        self.notifier.success("Entry added")
        return loan

    def edit_entry(self, entry_id: int, payload: EntryPayload) -> Optional[LoanTransaction]:
        """Update a deduction entry."""
        entry = self._find_entry(entry_id)
        if entry is None:
            return None
        if not is_editable(entry):
            self.notifier.info(entry_not_editable(entry.name))
            return None
        if not can_edit(entry, self.context):
            if is_soft_deleted(entry):
                self.notifier.warning(f"Entry {entry.name} is deleted; restore it first")
            else:
                self.notifier.warning(self.disabled_reason())
            return None
        try:
            validate_entry_payload(payload)
        except ValidationError as exc:
            self.notifier.warning(str(exc))
            return None

        ok, loan = self._request("update entry", lambda: self.db.update_entry(entry.id, payload))
        if not ok:
            return None
        self.replace(loan)
        self.notifier.success("Entry updated")
        return loan

    def remove_entry(self, entry_id: int) -> bool:
        """Remove a deduction entry after confirmation, then refetch the loan.

        Returns:
            True if the entry was removed
        """
        entry = self._find_entry(entry_id)
        if entry is None:
            return False
        if not is_removable(entry):
            self.notifier.info(entry_not_removable(entry.name))
            return False
        if not can_remove(entry, self.context):
            if is_soft_deleted(entry):
                self.notifier.warning(f"Entry {entry.name} is already deleted")
            else:
                self.notifier.warning(self.disabled_reason())
            return False

        confirmed = self.confirmation.confirm(
            ConfirmationRequest(
                title="Remove Entry",
                content=("Are you sure you want to remove entry?",),
                confirm_string="Remove",
            )
        )
        if not confirmed:
            return False

        ok, _ = self._request("remove entry", lambda: self.db.delete_entry(entry.id))
        if not ok:
            return False
        self.notifier.success("Entry removed")
        self.refresh()
        return True

    def restore_entry(self, entry_id: int) -> Optional[LoanTransaction]:
        """Restore a soft-deleted automatic deduction."""
        entry = self._find_entry(entry_id)
        if entry is None:
            return None
        if not can_restore(entry):
            self.notifier.info(f"Entry {entry.name} is not deleted")
            return None

        ok, loan = self._request("restore entry", lambda: self.db.restore_entry(entry.id))
        if not ok:
            return None
        self.replace(loan)
        self.notifier.success("Entry restored")
        return loan

    def handle_key(self, entry_id: int, key: str) -> bool:
        """Handle a keyboard shortcut on an entry row.

        "Delete" removes the entry, "F2" asks whether the edit form may open.
        Keys on a disabled ledger are swallowed.

        Returns:
            True if the shortcut led to an action
        """
        if self.context.global_disabled:
            return False
        entry = self._find_entry(entry_id)
        if entry is None:
            return False
        if key == "Delete":
            return self.remove_entry(entry_id)
        if key == "F2":
            if not is_editable(entry):
                self.notifier.info(entry_not_editable(entry.name))
                return False
            return can_edit(entry, self.context)
        return False
