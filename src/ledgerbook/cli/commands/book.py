"""Book commands."""

import click
from ledgerbook.client.errors import BackendError
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.book import BookService


@click.group()
def book_group():
    """Browse books."""
    pass


@book_group.command("list")
@click.pass_context
def list_books(ctx):
    """List your books.

    The first book is used when a command is run without --book.
    """
    service = BookService(ctx.obj["backend"])

    try:
        books = service.list_books()
    except BackendError as e:
        handle_domain_error(ctx, e)

    if not books:
        click.echo("No books found.")
        return

    click.echo("\nBooks:")
    click.echo("-" * 60)
    for i, b in enumerate(books):
        default = " (default)" if i == 0 else ""
        currency = b.default_currency or "-"
        click.echo(f"ID: {b.id:3d} | {b.name:20s} | Currency: {currency}{default}")


def register_commands(cli):
    """Register book commands with main CLI."""
    cli.add_command(book_group, name="book")
