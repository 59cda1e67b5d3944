"""Automatic deduction rule commands."""

import click
from loanledger.cli.account_resolution import resolve_account_or_exit
from loanledger.cli.error_handling import handle_domain_error
from loanledger.domain.account import AccountService
from loanledger.utils.amount_parser import parse_amount, parse_rate


@click.group()
def deduction_rule_group():
    """Manage automatic deduction rules.

    Every new loan transaction (except renewals without deduction) receives
    one automatic deduction entry per rule.
    """
    pass


@deduction_rule_group.command("add")
@click.argument("name")
@click.option("--account", required=True, help="Account credited by the deduction (name or ID)")
@click.option("--rate", help="Fraction of the loan amount, e.g. 0.02 or 2%")
@click.option("--amount", help="Fixed amount, e.g. 150.00")
@click.pass_context
def add_rule(ctx, name: str, account: str, rate: str | None, amount: str | None):
    """Add an automatic deduction rule.

    Examples:
        loanledger deduction-rule add "Service Fee" --account "Service Fee" --rate 2%
        loanledger deduction-rule add "Notarial Fee" --account 4 --amount 150
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)

    rule_rate = None
    rule_amount = None
    try:
        if rate is not None:
            rule_rate = parse_rate(rate)
        if amount is not None:
            rule_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        rule_id = service.create_automatic_deduction(
            name=name, account_id=account_id, rate=rule_rate, amount=rule_amount
        )
        click.echo(f"Created automatic deduction '{name}' (ID: {rule_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@deduction_rule_group.command("list")
@click.pass_context
def list_rules(ctx):
    """List automatic deduction rules."""
    db = ctx.obj["db"]
    service = AccountService(db)

    rules = service.list_automatic_deductions()
    if not rules:
        click.echo("No automatic deductions found.")
        return

    click.echo("\nAutomatic deductions:")
    click.echo("-" * 60)
    for rule in rules:
        if rule.amount is not None:
            charge = f"{rule.amount:,.2f} fixed"
        else:
            charge = f"{rule.rate * 100:.2f}% of loan amount"
        account = service.get_account(rule.account_id)
        account_name = account.name if account is not None else rule.account_id
        click.echo(f"ID: {rule.id:3d} | {rule.name:20s} | {charge:24s} | {account_name}")


def register_commands(cli):
    """Register deduction rule commands with main CLI."""
    cli.add_command(deduction_rule_group, name="deduction-rule")
