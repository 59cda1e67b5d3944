"""Loan transaction commands."""

import click
from datetime import date
from loanledger.cli.account_resolution import resolve_account_or_exit
from loanledger.cli.error_handling import handle_domain_error
from loanledger.cli.prompts import (
    ClickConfirmation,
    ClickNotifier,
    exit_on_failure,
    open_coordinator,
)
from loanledger.domain.account import AccountService
from loanledger.domain.classifier import entry_labels
from loanledger.domain.coordinator import CashReplacementState, LoanLedgerCoordinator
from loanledger.domain.entities import (
    LoanTransaction,
    LoanTransactionPayload,
    LoanType,
    Milestone,
    ModeOfPayment,
    WEEKDAYS,
)
from loanledger.domain.status import resolve_status
from loanledger.utils.amount_parser import parse_amount
from loanledger.utils.date_parser import parse_date

LOAN_TYPES = [t.value for t in LoanType]
MODES_OF_PAYMENT = [m.value for m in ModeOfPayment]


def format_amount(amount) -> str:
    return f"{amount:,.2f}"


def print_loan(coordinator: LoanLedgerCoordinator, show_deleted: bool = False) -> None:
    """Print a loan transaction with its entries and balance indicator."""
    loan = coordinator.loan
    account_name = loan.account.name if loan.account is not None else loan.account_id
    click.echo(f"\nLoan transaction {loan.id} [{coordinator.status.value}]")
    click.echo(f"Account:   {account_name}")
    click.echo(f"Type:      {loan.loan_type.value}")
    click.echo(f"Amount:    {format_amount(loan.applied_1)} over {loan.terms} term(s), "
               f"{loan.mode_of_payment.value}")
    if loan.previous_loan_id is not None:
        click.echo(f"Previous:  loan {loan.previous_loan_id}, balance "
                   f"{format_amount(loan.previous_balance)}")
    click.echo(f"Add-on:    {'on' if loan.is_add_on else 'off'}")
    for milestone in Milestone:
        reached = getattr(loan, milestone.field_name)
        if reached is not None:
            click.echo(f"{milestone.value.capitalize() + ':':10s} {reached.isoformat()}")

    entries = coordinator.visible_entries(show_deleted=show_deleted)
    click.echo("\nEntries:")
    click.echo("-" * 90)
    click.echo(f"{'ID':>4s} | {'Name':24s} | {'Account':20s} | {'Debit':>12s} | {'Credit':>12s} |")
    click.echo("-" * 90)
    for entry in entries:
        entry_account = entry.account.name if entry.account is not None else ""
        labels = ", ".join(entry_labels(entry))
        click.echo(
            f"{entry.id:4d} | {entry.name[:24]:24s} | {entry_account[:20]:20s} | "
            f"{format_amount(entry.debit):>12s} | {format_amount(entry.credit):>12s} | {labels}"
        )
    click.echo("-" * 90)

    totals = coordinator.totals
    click.echo(
        f"{'Total':>53s} | {format_amount(totals.total_debit):>12s} | "
        f"{format_amount(totals.total_credit):>12s} |"
    )
    click.echo(f"Deductions: {format_amount(totals.deductions_total)}")
    if totals.is_balanced:
        click.echo("Balanced")
    else:
        click.echo(f"Not balanced (difference {format_amount(totals.difference)})")


def _payload_from_options(
    ctx,
    service: AccountService,
    account: str,
    cash_account: str | None,
    amount: str,
    terms: int,
    loan_type: str,
    mode: str,
    fixed_days: int | None,
    weekday: str | None,
    pay_1: int | None,
    pay_2: int | None,
    exact_day: bool,
    previous_loan: int | None,
    previous_balance: str | None,
    add_on: bool,
) -> LoanTransactionPayload:
    account_id = resolve_account_or_exit(ctx, service, account)
    cash_account_id = None
    if cash_account is not None:
        cash_account_id = resolve_account_or_exit(ctx, service, cash_account)

    try:
        applied = parse_amount(amount)
        balance = parse_amount(previous_balance) if previous_balance is not None else None
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    payload = LoanTransactionPayload(
        account_id=account_id,
        applied_1=applied,
        terms=terms,
        cash_account_id=cash_account_id,
        loan_type=LoanType(loan_type),
        mode_of_payment=ModeOfPayment(mode),
        mode_of_payment_fixed_days=fixed_days,
        mode_of_payment_weekly=weekday,
        mode_of_payment_semi_monthly_pay_1=pay_1,
        mode_of_payment_semi_monthly_pay_2=pay_2,
        mode_of_payment_monthly_exact_day=exact_day,
        is_add_on=add_on,
        previous_loan_id=previous_loan,
    )
    if balance is not None:
        payload.previous_balance = balance
    return payload


@click.group()
def loan_group():
    """Manage loan transactions."""
    pass


@loan_group.command("create")
@click.option("--account", required=True, help="Loan receivable account (name or ID)")
@click.option("--cash-account", help="Cash account the loan is released from (defaults to the first cash account)")
@click.option("--amount", required=True, help="Loan amount applied for")
@click.option("--terms", type=int, required=True, help="Number of terms")
@click.option("--type", "loan_type", type=click.Choice(LOAN_TYPES), default=LoanType.STANDARD.value, show_default=True)
@click.option("--mode", type=click.Choice(MODES_OF_PAYMENT), default=ModeOfPayment.MONTHLY.value, show_default=True, help="Mode of payment")
@click.option("--fixed-days", type=int, help="Days between payments (mode 'day')")
@click.option("--weekday", type=click.Choice(WEEKDAYS), help="Payment weekday (mode 'weekly')")
@click.option("--pay-1", type=int, help="First payment day of month (mode 'semi-monthly')")
@click.option("--pay-2", type=int, help="Second payment day of month (mode 'semi-monthly')")
@click.option("--exact-day", is_flag=True, help="Pay on the exact release day each month (mode 'monthly')")
@click.option("--previous-loan", type=int, help="Loan transaction ID being renewed or restructured")
@click.option("--previous-balance", help="Outstanding balance of the previous loan")
@click.option("--add-on", is_flag=True, help="Add add-on deductions to the loan instead of deducting them")
@click.pass_context
def create_loan(
    ctx,
    account: str,
    cash_account: str | None,
    amount: str,
    terms: int,
    loan_type: str,
    mode: str,
    fixed_days: int | None,
    weekday: str | None,
    pay_1: int | None,
    pay_2: int | None,
    exact_day: bool,
    previous_loan: int | None,
    previous_balance: str | None,
    add_on: bool,
):
    """Create a loan transaction.

    The cash and loan entries and the automatic deductions are generated.

    Examples:
        loanledger loan create --account "Loans Receivable" --amount 10000 --terms 12
        loanledger loan create --account 2 --amount 5000 --terms 6 --mode weekly --weekday friday
        loanledger loan create --account 2 --amount 8000 --terms 12 --type renewal \\
            --previous-loan 1 --previous-balance 2500
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    payload = _payload_from_options(
        ctx, service, account, cash_account, amount, terms, loan_type, mode, fixed_days,
        weekday, pay_1, pay_2, exact_day, previous_loan, previous_balance, add_on,
    )

    coordinator = LoanLedgerCoordinator(db, ClickConfirmation(), ClickNotifier())
    loan = coordinator.save(payload)
    if loan is None:
        ctx.exit(1)
    click.echo(f"Created loan transaction {loan.id}")
    print_loan(coordinator)


@loan_group.command("list")
@click.pass_context
def list_loans(ctx):
    """List loan transactions."""
    db = ctx.obj["db"]

    loans: list[LoanTransaction] = db.list_loan_transactions()
    if not loans:
        click.echo("No loan transactions found.")
        return

    click.echo("\nLoan transactions:")
    click.echo("-" * 80)
    for loan in loans:
        account_name = loan.account.name if loan.account is not None else ""
        click.echo(
            f"ID: {loan.id:3d} | {account_name[:20]:20s} | {loan.loan_type.value:25s} | "
            f"{format_amount(loan.applied_1):>12s} | {resolve_status(loan).value}"
        )


@loan_group.command("show")
@click.argument("loan_id", type=int)
@click.option("--show-deleted", is_flag=True, help="Include deleted automatic deductions")
@click.pass_context
def show_loan(ctx, loan_id: int, show_deleted: bool):
    """Show a loan transaction with its entries and totals."""
    coordinator = open_coordinator(ctx, loan_id)
    print_loan(coordinator, show_deleted=show_deleted)


@loan_group.command("change-cash")
@click.argument("loan_id", type=int)
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def change_cash(ctx, loan_id: int, account: str, yes: bool):
    """Replace the cash account the loan is released from.

    ACCOUNT can be an account name or ID and must be a cash account.

    Examples:
        loanledger loan change-cash 1 "Bank - Checking"
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)
    coordinator = open_coordinator(ctx, loan_id, assume_yes=yes)

    state = coordinator.change_cash_equivalence_account(service.get_account(account_id))
    if state == CashReplacementState.CANCELLED:
        click.echo("Replacement cancelled.")
        return
    exit_on_failure(ctx, coordinator)


@loan_group.command("set-type")
@click.argument("loan_id", type=int)
@click.argument("loan_type", type=click.Choice(LOAN_TYPES))
@click.option("--previous-loan", type=int, help="Loan transaction ID being renewed or restructured")
@click.option("--previous-balance", help="Outstanding balance of the previous loan")
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def set_type(
    ctx,
    loan_id: int,
    loan_type: str,
    previous_loan: int | None,
    previous_balance: str | None,
    yes: bool,
):
    """Change the loan type.

    The entry set is regenerated: deductions and previous loan entries are
    replaced.

    Examples:
        loanledger loan set-type 3 "renewal without deduction" --previous-loan 1
    """
    coordinator = open_coordinator(ctx, loan_id, assume_yes=yes)
    payload = LoanTransactionPayload.from_loan(coordinator.loan)
    if previous_loan is not None:
        payload.previous_loan_id = previous_loan
    if previous_balance is not None:
        try:
            payload.previous_balance = parse_amount(previous_balance)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    if not coordinator.request_loan_type_change(payload, loan_type):
        exit_on_failure(ctx, coordinator)
        click.echo("Loan type unchanged.")
        return
    if coordinator.save(payload) is None:
        ctx.exit(1)
    click.echo(f"Loan type set to '{loan_type}'")


@loan_group.command("add-on")
@click.argument("loan_id", type=int)
@click.option("--on/--off", "enabled", required=True, help="Add add-on deductions to the loan amount")
@click.pass_context
def set_add_on(ctx, loan_id: int, enabled: bool):
    """Toggle add-on deductions of a loan transaction."""
    coordinator = open_coordinator(ctx, loan_id)
    payload = LoanTransactionPayload.from_loan(coordinator.loan)
    if coordinator.set_add_on(payload, enabled) is None:
        ctx.exit(1)
    click.echo(f"Add-on {'enabled' if enabled else 'disabled'}")


@loan_group.command("advance")
@click.argument("loan_id", type=int)
@click.argument("milestone", type=click.Choice([m.value for m in Milestone]))
@click.option("--date", "on_date", help="Milestone date (YYYY-MM-DD or relative like 'today'); defaults to today")
@click.pass_context
def advance(ctx, loan_id: int, milestone: str, on_date: str | None):
    """Mark a loan transaction printed, approved or released.

    A loan past draft is read-only.

    Examples:
        loanledger loan advance 1 printed
        loanledger loan advance 1 approved --date yesterday
    """
    db = ctx.obj["db"]

    milestone_date = date.today()
    if on_date is not None:
        try:
            milestone_date = parse_date(on_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        loan = db.advance_milestone(loan_id, Milestone(milestone), milestone_date)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Loan transaction {loan.id} is now {resolve_status(loan).value}")


def register_commands(cli):
    """Register loan commands with main CLI."""
    cli.add_command(loan_group, name="loan")
