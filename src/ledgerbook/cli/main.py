"""Main CLI entry point."""

import logging

import click
from ledgerbook.client.factories import create_http_backend

# Import and register all commands at module level
from ledgerbook.cli.commands import (
    account,
    add,
    book,
    login,
    summary,
    tag,
    view,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.option(
    "--api-url",
    help="Ledger service URL (overrides LEDGERBOOK_API_URL environment variable)",
    envvar="LEDGERBOOK_API_URL",
)
@click.option(
    "--token",
    help="Bearer token (overrides LEDGERBOOK_TOKEN environment variable)",
    envvar="LEDGERBOOK_TOKEN",
)
@click.option(
    "--timeout",
    type=float,
    help="Request timeout in seconds (overrides LEDGERBOOK_TIMEOUT environment variable)",
    envvar="LEDGERBOOK_TIMEOUT",
)
@click.option("--verbose", "-v", is_flag=True, help="Log requests and service responses")
@click.pass_context
def cli(ctx, api_url: str | None, token: str | None, timeout: float | None, verbose: bool):
    """Ledgerbook - double-entry bookkeeping client.

    Record expenses, income, transfers and free-form journal entries in
    books kept by a remote ledger service, and browse their history and
    statistics.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

    # Connect only when actually running a command (not when showing help).
    # A backend already placed in ctx.obj is used as-is.
    if ctx.invoked_subcommand is not None and "backend" not in ctx.obj:
        backend = create_http_backend(base_url=api_url, token=token, timeout=timeout)
        ctx.obj["backend"] = backend
        ctx.call_on_close(backend.close)


# Register all commands
login.register_commands(cli)
book.register_commands(cli)
account.register_commands(cli)
tag.register_commands(cli)
add.register_commands(cli)
view.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
