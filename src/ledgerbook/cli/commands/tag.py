"""Tag commands."""

import click
from ledgerbook.client.errors import BackendError
from ledgerbook.cli.account_resolution import resolve_book_or_exit
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.book import BookService


@click.group()
def tag_group():
    """Browse tags."""
    pass


@tag_group.command("list")
@click.option("--book", help="Book name or ID (defaults to your first book)")
@click.pass_context
def list_tags(ctx, book: str | None):
    """List the tags of a book."""
    book_obj = resolve_book_or_exit(ctx, book)
    service = BookService(ctx.obj["backend"])

    try:
        tags = service.list_tags(book_obj.id)
    except BackendError as e:
        handle_domain_error(ctx, e)

    if not tags:
        click.echo(f"No tags found in '{book_obj.name}'.")
        return

    click.echo(f"\nTags in '{book_obj.name}':")
    for t in tags:
        click.echo(f"  {t.name} (ID: {t.id})")


def register_commands(cli):
    """Register tag commands with main CLI."""
    cli.add_command(tag_group, name="tag")
