"""Transaction history commands."""

import click
from ledgerbook.client.errors import BackendError
from ledgerbook.cli.account_resolution import resolve_book_or_exit
from ledgerbook.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.entities import TransactionQuery
from ledgerbook.domain.transaction import TransactionService


@click.command("view")
@click.option("--book", help="Book name or ID (defaults to your first book)")
@period_options
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True, help="Page number")
@click.option("--page-size", type=click.IntRange(min=1), default=20, show_default=True, help="Transactions per page")
@click.option("--verbose", "-v", is_flag=True, help="Show tags and transaction IDs")
@click.pass_context
def view_transactions(
    ctx, book: str | None, start_date: str | None, end_date: str | None, page: int, page_size: int, verbose: bool, **flags
):
    """View transaction history grouped by day.

    Examples:
        ledgerbook view --this-month
        ledgerbook view --start-date 2024-01-01 --end-date 2024-01-31 --page 2
    """
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=pop_period_flags(flags)
    )
    book_obj = resolve_book_or_exit(ctx, book)
    service = TransactionService(ctx.obj["backend"])

    query = TransactionQuery(
        book_id=book_obj.id, start_date=start, end_date=end, page_num=page, page_size=page_size
    )
    try:
        result = service.list_transactions(query)
    except BackendError as e:
        handle_domain_error(ctx, e)

    if not result.daily_groups:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{result.total} transaction(s) in '{book_obj.name}' (page {result.page_num}):")
    for group in result.daily_groups:
        click.echo("")
        day = group.date.isoformat() if group.date else ""
        click.echo(
            f"{day:<12} income {group.daily_income:>12,.2f}   expense {group.daily_expense:>12,.2f}"
        )
        click.echo("-" * 100)
        for txn in group.transactions:
            time = f"{txn.transaction_date:%H:%M}" if txn.transaction_date else ""
            category = txn.category_name or ""
            target = txn.target_account_name or ""
            description = (txn.description or "")[:30]
            click.echo(
                f"  {time:<6} {txn.transaction_type:<9} {txn.display_amount:>12,.2f}  "
                f"{category:<20} {target:<20} {description}"
            )
            if verbose:
                tags = ", ".join(t.name for t in txn.tags)
                click.echo(f"         ID: {txn.id}" + (f" | Tags: {tags}" if tags else ""))


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_transactions)
