"""Main CLI entry point."""

import click
from loanledger.database.factories import create_sqlite_database
from loanledger.logging import setup_logging

# Import and register all commands at module level
from loanledger.cli.commands import (
    account,
    deduction_rule,
    entry,
    loan,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LOANLEDGER_DB_PATH environment variable)",
    envvar="LOANLEDGER_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log requests and state changes to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Loanledger - Loan transaction ledger.

    Create loan transactions, review their debit/credit entries and manage
    deductions while the loan is still a draft.
    """
    ctx.ensure_object(dict)
    setup_logging("DEBUG" if verbose else None)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
deduction_rule.register_commands(cli)
loan.register_commands(cli)
entry.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
