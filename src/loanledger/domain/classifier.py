"""Entry classification predicates.

All predicates are pure and total: they accept anything shaped like a
LoanTransactionEntry and fall back to "not deduction-like" for unknown or
malformed type tags instead of raising.
"""

from loanledger.domain.entities import EntryKind, LoanTransactionEntry


def entry_kind(entry: LoanTransactionEntry) -> EntryKind:
    """Return the kind of an entry."""
    kind = getattr(entry, "kind", None)
    if isinstance(kind, EntryKind):
        return kind
    return EntryKind.from_tag(getattr(entry, "type", None))


def is_deduction_like(entry: LoanTransactionEntry) -> bool:
    """Return True if the entry is a manual or automatic deduction."""
    return entry_kind(entry).is_deduction_like


def is_editable(entry: LoanTransactionEntry) -> bool:
    """Return True if the entry kind can ever be edited by a user."""
    return is_deduction_like(entry)


def is_removable(entry: LoanTransactionEntry) -> bool:
    """Return True if the entry kind can ever be removed by a user."""
    return is_deduction_like(entry)


def is_soft_deleted(entry: LoanTransactionEntry) -> bool:
    """Return True if the entry is a soft-deleted automatic deduction."""
    return getattr(entry, "is_automatic_loan_deduction_deleted", False) is True


def is_effective_add_on(entry: LoanTransactionEntry) -> bool:
    """Return True if a deduction is flagged to be added to the loan instead."""
    return is_deduction_like(entry) and getattr(entry, "is_add_on", False) is True


_KIND_LABELS = {
    EntryKind.ADD_ON: "Add-on Interest",
    EntryKind.DEDUCTION: "Deduction",
    EntryKind.AUTOMATIC_DEDUCTION: "Automatic Deduction",
    EntryKind.PREVIOUS: "Previous Loan",
}


def entry_labels(entry: LoanTransactionEntry) -> list[str]:
    """Return the badges shown next to an entry in the ledger view."""
    labels = []
    if is_soft_deleted(entry):
        labels.append("Deleted")
    kind_label = _KIND_LABELS.get(entry_kind(entry))
    if kind_label is not None:
        labels.append(kind_label)
    if is_effective_add_on(entry):
        labels.append("Add-On")
    return labels
