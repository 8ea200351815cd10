"""Summary commands."""

from datetime import date

import click
from ledgerbook.client.errors import BackendError
from ledgerbook.cli.account_resolution import resolve_book_or_exit
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.entities import AccountType
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.summary import SummaryService

BAR_WIDTH = 30


def _bar(percentage) -> str:
    filled = int(round(float(percentage) / 100 * BAR_WIDTH))
    return "#" * max(0, min(BAR_WIDTH, filled))


def _show_monthly(service, book_id, year, month):
    stats = service.monthly(book_id, year=year, month=month)
    period = f"{year}-{month:02d}" if year and month else "this month"
    click.echo(f"\nSummary for {period}:")
    click.echo("-" * 40)
    click.echo(f"{'Income':<20} {stats.total_income:>18,.2f}")
    click.echo(f"{'Expense':<20} {stats.total_expense:>18,.2f}")
    click.echo(f"{'Balance':<20} {stats.balance:>18,.2f}")


def _show_trend(service, book_id, year):
    trend = service.yearly_trend(book_id, year=year)
    click.echo(f"\nMonthly trend for {trend.year}:")
    click.echo("-" * 60)
    click.echo(f"{'Month':<8} {'Income':>16} {'Expense':>16} {'Balance':>16}")
    for m in trend.months:
        click.echo(f"{m.month:<8} {m.income:>16,.2f} {m.expense:>16,.2f} {m.balance:>16,.2f}")


def _show_rank(service, book_id, account_type, year, month):
    rank = service.category_rank(book_id, account_type=account_type, year=year, month=month)
    click.echo(f"\n{account_type.value.title()} by account (total {rank.total:,.2f}):")
    click.echo("-" * 80)
    if not rank.categories:
        click.echo("No transactions found.")
        return
    for item in rank.categories:
        click.echo(
            f"{item.account_name:<24} {item.amount:>14,.2f} {item.percentage:>6.1f}%  {_bar(item.percentage)}"
        )


def _show_tags(service, book_id, year, month):
    stats = service.tag_statistics(book_id, year=year, month=month)
    click.echo(f"\nBy tag (total {stats.total:,.2f}):")
    click.echo("-" * 80)
    if not stats.tags:
        click.echo("No tagged transactions found.")
        return
    for item in stats.tags:
        click.echo(
            f"{item.tag_name:<20} {item.amount:>14,.2f} {item.count:>5d}x {item.percentage:>6.1f}%  {_bar(item.percentage)}"
        )


def _show_balances(service, book_id, account_type):
    balances = service.account_balances(book_id, account_type=account_type)
    click.echo(f"\n{account_type.value.title()} balances (total {balances.total:,.2f}):")
    click.echo("-" * 50)
    for acc in balances.accounts:
        click.echo(f"{acc.account_name:<30} {acc.balance:>18,.2f}")


@click.command("summary")
@click.option("--book", help="Book name or ID (defaults to your first book)")
@click.option("--year", type=click.IntRange(min=1900), help="Year (defaults to the current year)")
@click.option("--month", type=click.IntRange(1, 12), help="Month 1-12 (defaults to the current month)")
@click.option("--trend", is_flag=True, help="Show month-by-month totals for the year")
@click.option(
    "--rank",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    help="Rank expense or income accounts by amount",
)
@click.option("--tags", "show_tags", is_flag=True, help="Show totals per tag")
@click.option(
    "--balances",
    type=click.Choice(["asset", "liability"], case_sensitive=False),
    help="Show current asset or liability balances",
)
@click.pass_context
def summary(
    ctx,
    book: str | None,
    year: int | None,
    month: int | None,
    trend: bool,
    rank: str | None,
    show_tags: bool,
    balances: str | None,
):
    """Show income and expense statistics for a book.

    Without options, shows this month's income, expense and balance.

    Examples:
        ledgerbook summary
        ledgerbook summary --year 2024 --month 3 --rank expense
        ledgerbook summary --trend --year 2024
        ledgerbook summary --balances asset
    """
    if month is not None and year is None:
        year = date.today().year

    book_obj = resolve_book_or_exit(ctx, book)
    service = SummaryService(ctx.obj["backend"])

    try:
        _show_monthly(service, book_obj.id, year, month)
        if trend:
            _show_trend(service, book_obj.id, year)
        if rank:
            _show_rank(service, book_obj.id, AccountType(rank.upper()), year, month)
        if show_tags:
            _show_tags(service, book_obj.id, year, month)
        if balances:
            _show_balances(service, book_obj.id, AccountType(balances.upper()))
    except (DomainError, BackendError) as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
