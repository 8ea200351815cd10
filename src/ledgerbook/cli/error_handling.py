"""CLI error handling helpers."""

import click

from ledgerbook.client.errors import BackendError
from ledgerbook.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | BackendError | ValueError) -> None:
    """Render a domain or service error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
