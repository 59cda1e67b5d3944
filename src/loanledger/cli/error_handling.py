"""CLI error handling helpers."""

import click

from loanledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print a rejected ledger request as ``Error: ...`` on stderr and exit 1.

    Database rejections already carry their cause in the message, so every
    DomainError subclass is rendered the same way.
    """
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
