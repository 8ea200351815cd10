"""CLI helpers for book/account resolution and error handling."""

from __future__ import annotations

import click
from ledgerbook.client.errors import BackendError
from ledgerbook.domain.account import AccountDirectory, AccountService
from ledgerbook.domain.book import BookService
from ledgerbook.domain.entities import Account, Book
from ledgerbook.domain.errors import DomainError
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.utils.account_resolver import resolve_account


def resolve_book_or_exit(ctx: click.Context, book: str | None) -> Book:
    """Resolve a book name or ID (default: first book), or exit with a CLI error."""
    service = BookService(ctx.obj["backend"])
    try:
        return service.resolve_book(book)
    except (DomainError, BackendError) as exc:
        handle_domain_error(ctx, exc)


def load_directory_or_exit(ctx: click.Context, book: Book) -> AccountDirectory:
    """Fetch the account snapshot of a book, or exit with a CLI error."""
    service = AccountService(ctx.obj["backend"])
    try:
        return service.load_directory(book.id)
    except (DomainError, BackendError) as exc:
        handle_domain_error(ctx, exc)


def resolve_account_or_exit(
    ctx: click.Context, directory: AccountDirectory, account: str | int, role: str | None = None
) -> Account:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(directory, account, role)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
