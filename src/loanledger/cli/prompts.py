"""Terminal implementations of the confirmation and notification ports."""

import click

from loanledger.domain.coordinator import LoanLedgerCoordinator
from loanledger.domain.ports import (
    ConfirmationPort,
    ConfirmationRequest,
    NoticeLevel,
    Notifier,
)


class ClickConfirmation(ConfirmationPort):
    """Ask for confirmation on the terminal.

    Args:
        assume_yes: Confirm without prompting (--yes)
    """

    def __init__(self, assume_yes: bool = False):
        self.assume_yes = assume_yes

    def confirm(self, request: ConfirmationRequest) -> bool:
        click.echo(click.style(request.title, bold=True))
        if request.description:
            click.echo(request.description)
        for line in request.content:
            click.echo(f"  {line}")
        if self.assume_yes:
            return True
        return click.confirm(f"{request.confirm_string}?", default=False)


class ClickNotifier(Notifier):
    """Echo notices; warnings and errors go to stderr."""

    def __init__(self):
        self.failed = False

    def notify(self, level: NoticeLevel, message: str) -> None:
        if level == NoticeLevel.ERROR:
            self.failed = True
            click.echo(f"Error: {message}", err=True)
        elif level == NoticeLevel.WARNING:
            self.failed = True
            click.echo(f"Warning: {message}", err=True)
        else:
            click.echo(message)


def open_coordinator(
    ctx: click.Context, loan_transaction_id: int, assume_yes: bool = False
) -> LoanLedgerCoordinator:
    """Load a loan transaction into a coordinator wired to the terminal, or exit."""
    coordinator = LoanLedgerCoordinator(
        ctx.obj["db"], ClickConfirmation(assume_yes=assume_yes), ClickNotifier()
    )
    if coordinator.load(loan_transaction_id) is None:
        ctx.exit(1)
    return coordinator


def exit_on_failure(ctx: click.Context, coordinator: LoanLedgerCoordinator) -> None:
    """Exit with failure if the coordinator reported a warning or error."""
    if coordinator.notifier.failed:
        ctx.exit(1)


def open_coordinator_for_entry(
    ctx: click.Context, entry_id: int, assume_yes: bool = False
) -> LoanLedgerCoordinator:
    """Load the loan transaction an entry belongs to, or exit."""
    for loan in ctx.obj["db"].list_loan_transactions():
        if loan.get_entry(entry_id) is not None:
            return open_coordinator(ctx, loan.id, assume_yes=assume_yes)
    click.echo(f"Error: Loan transaction entry {entry_id} not found", err=True)
    ctx.exit(1)
