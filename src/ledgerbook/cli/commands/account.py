"""Account browsing commands."""

import click
from ledgerbook.cli.account_resolution import load_directory_or_exit, resolve_book_or_exit
from ledgerbook.domain.account import ROLE_TYPES
from ledgerbook.domain.entities import AccountType

TYPE_LABELS = {
    AccountType.EXPENSE: "Expense",
    AccountType.INCOME: "Income",
    AccountType.ASSET: "Asset",
    AccountType.LIABILITY: "Liability",
    AccountType.EQUITY: "Equity",
}


@click.group()
def account_group():
    """Browse the accounts of a book."""
    pass


@account_group.command("list")
@click.option("--book", help="Book name or ID (defaults to your first book)")
@click.option(
    "--type",
    "account_types",
    multiple=True,
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    help="Only show accounts of this type (repeatable)",
)
@click.option(
    "--role",
    type=click.Choice(sorted(ROLE_TYPES), case_sensitive=False),
    help="Only show accounts usable for a role (e.g., 'pay')",
)
@click.option("--tree", is_flag=True, help="Show the full hierarchy instead of postable accounts")
@click.pass_context
def list_accounts(ctx, book: str | None, account_types: tuple[str, ...], role: str | None, tree: bool):
    """List postable (leaf) accounts grouped by type.

    Examples:
        ledgerbook account list
        ledgerbook account list --type EXPENSE
        ledgerbook account list --role pay
        ledgerbook account list --tree
    """
    book_obj = resolve_book_or_exit(ctx, book)
    directory = load_directory_or_exit(ctx, book_obj)

    if tree:
        if not directory.accounts:
            click.echo("No accounts found.")
            return
        click.echo(f"\nAccounts in '{book_obj.name}':")
        for depth, acc in directory.tree.walk():
            marker = "" if directory.tree.is_leaf(acc.id) else " +"
            click.echo(f"{'  ' * depth}{acc.name}{marker} (ID: {acc.id}, {acc.account_type.value})")
        return

    type_filter = [AccountType(t.upper()) for t in account_types]
    role_types = ROLE_TYPES[role.lower()] if role else ()
    if type_filter and role_types:
        # Both given: only types that satisfy both
        type_filter = [t for t in type_filter if t in role_types]
        groups = directory.grouped_leaves(type_filter) if type_filter else {}
    else:
        groups = directory.grouped_leaves(type_filter or role_types)
    if not groups:
        click.echo("No eligible accounts.")
        return

    click.echo(f"\nAccounts in '{book_obj.name}':")
    for account_type, accounts in groups.items():
        click.echo(f"\n{TYPE_LABELS[account_type]}:")
        for acc in accounts:
            click.echo(f"  ID: {acc.id:>6} | {directory.tree.path(acc.id)}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
