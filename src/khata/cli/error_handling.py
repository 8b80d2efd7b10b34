"""CLI error handling helpers."""

import click

from khata.domain.errors import DomainError, OverpaymentError
from khata.utils.currency import format_amount


def handle_domain_error(
    ctx: click.Context, error: DomainError | ValueError, currency: str | None = None
) -> None:
    """Render a domain error and exit with failure."""
    if isinstance(error, OverpaymentError) and currency is not None:
        click.echo(
            f"Error: Remaining is {format_amount(error.max_amount, currency)}. "
            "Enter up to that amount.",
            err=True,
        )
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
