"""Lifecycle status resolution from milestone dates."""

from typing import Any

from loanledger.domain.entities import LifecycleStatus


def _milestone(dates: Any, name: str) -> Any:
    if isinstance(dates, dict):
        return dates.get(name)
    return getattr(dates, name, None)


def resolve_status(dates: Any) -> LifecycleStatus:
    """Resolve the lifecycle status of a loan transaction.

    The most advanced milestone present wins; ordering between the dates is
    not validated.

    Args:
        dates: Object or mapping with optional printed_date, approved_date
            and released_date

    Returns:
        Derived lifecycle status
    """
    if _milestone(dates, "released_date"):
        return LifecycleStatus.RELEASED
    if _milestone(dates, "approved_date"):
        return LifecycleStatus.APPROVED
    if _milestone(dates, "printed_date"):
        return LifecycleStatus.PRINTED
    return LifecycleStatus.DRAFT


def is_read_only(dates: Any, read_only: bool = False) -> bool:
    """Return True if the loan is past draft or locked by the caller."""
    return resolve_status(dates) != LifecycleStatus.DRAFT or bool(read_only)
