"""Loan transaction entry commands."""

import click
from loanledger.cli.account_resolution import resolve_account_or_exit
from loanledger.cli.prompts import exit_on_failure, open_coordinator, open_coordinator_for_entry
from loanledger.domain.account import AccountService
from loanledger.domain.classifier import is_removable
from loanledger.domain.entities import EntryPayload
from loanledger.utils.amount_parser import parse_amount


@click.group()
def entry_group():
    """Manage deduction entries of a draft loan transaction."""
    pass


@entry_group.command("add")
@click.argument("loan_id", type=int)
@click.option("--account", required=True, help="Account credited by the deduction (name or ID)")
@click.option("--amount", required=True, help="Deduction amount")
@click.option("--name", help="Entry name (defaults to the account name)")
@click.option("--description", help="Entry description")
@click.option("--add-on", is_flag=True, help="Add to the loan amount instead of deducting")
@click.pass_context
def add_entry(
    ctx,
    loan_id: int,
    account: str,
    amount: str,
    name: str | None,
    description: str | None,
    add_on: bool,
):
    """Add a deduction entry to a loan transaction.

    Examples:
        loanledger entry add 1 --account "Insurance" --amount 250
        loanledger entry add 1 --account 5 --amount 300 --name "Add-on Interest" --add-on
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)
    try:
        entry_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    coordinator = open_coordinator(ctx, loan_id)
    payload = EntryPayload(
        account_id=account_id,
        amount=entry_amount,
        name=name,
        description=description,
        is_add_on=add_on,
    )
    if coordinator.add_entry(payload) is None:
        ctx.exit(1)


@entry_group.command("edit")
@click.argument("entry_id", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--amount", help="Deduction amount")
@click.option("--name", help="Entry name")
@click.option("--description", help="Entry description")
@click.option("--add-on/--no-add-on", default=None, help="Add to the loan amount instead of deducting")
@click.pass_context
def edit_entry(
    ctx,
    entry_id: int,
    account: str | None,
    amount: str | None,
    name: str | None,
    description: str | None,
    add_on: bool | None,
):
    """Edit a deduction entry.

    Updates only the fields that are provided.

    Examples:
        loanledger entry edit 7 --amount 275
        loanledger entry edit 7 --no-add-on
    """
    db = ctx.obj["db"]
    coordinator = open_coordinator_for_entry(ctx, entry_id)
    entry = coordinator.loan.get_entry(entry_id)

    account_id = entry.account_id
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    entry_amount = entry.credit
    if amount is not None:
        try:
            entry_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    payload = EntryPayload(
        account_id=account_id,
        amount=entry_amount,
        name=name if name is not None else entry.name,
        description=description if description is not None else entry.description,
        is_add_on=add_on if add_on is not None else entry.is_add_on,
    )
    if coordinator.edit_entry(entry_id, payload) is None:
        ctx.exit(1)


@entry_group.command("remove")
@click.argument("entry_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def remove_entry(ctx, entry_id: int, yes: bool):
    """Remove a deduction entry.

    Automatic deductions are only marked deleted and can be restored.
    """
    coordinator = open_coordinator_for_entry(ctx, entry_id, assume_yes=yes)
    entry = coordinator.loan.get_entry(entry_id)
    if not coordinator.remove_entry(entry_id):
        exit_on_failure(ctx, coordinator)
        if not is_removable(entry):
            ctx.exit(1)
        click.echo("Removal cancelled.")


@entry_group.command("restore")
@click.argument("entry_id", type=int)
@click.pass_context
def restore_entry(ctx, entry_id: int):
    """Restore a deleted automatic deduction."""
    coordinator = open_coordinator_for_entry(ctx, entry_id)
    if coordinator.restore_entry(entry_id) is None:
        ctx.exit(1)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
