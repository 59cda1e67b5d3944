"""Account management commands."""

import click
from loanledger.cli.account_resolution import resolve_account_or_exit
from loanledger.domain.account import AccountService
from loanledger.domain.entities import AccountType

ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES),
    default=AccountType.OTHER.value,
    show_default=True,
    help="Account type; only cash accounts can fund a loan release",
)
@click.option("--currency", help="Currency code (e.g. PHP)")
@click.pass_context
def create_account(ctx, name: str, account_type: str, currency: str | None):
    """Create a new account.

    Examples:
        loanledger account create "Cash on Hand" --type cash
        loanledger account create "Loans Receivable" --type loan
        loanledger account create "Service Fee" --type deduction --currency PHP
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        account_id = service.create_account(
            name=name, account_type=AccountType(account_type), currency=currency
        )
        click.echo(f"Created {account_type} account '{name.strip()}' (ID: {account_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@account_group.command("list")
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPES), help="Filter by type")
@click.pass_context
def list_accounts(ctx, account_type: str | None):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(
        account_type=AccountType(account_type) if account_type else None
    )
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        currency = f" | {acc.currency}" if acc.currency else ""
        click.echo(f"ID: {acc.id:3d} | {acc.name:25s} | {acc.account_type.value:9s}{currency}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no loan transaction or entry uses it.
    Automatic deduction rules crediting the account are deleted with it.

    Examples:
        loanledger account delete "Service Fee"
        loanledger account delete 3 --yes
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
        click.echo(f"Deleted account '{account_obj.name}'")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
