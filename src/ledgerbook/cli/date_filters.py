"""CLI helpers for date range options."""

from datetime import date

import click

from ledgerbook.utils.date_parser import PERIODS, get_date_range, parse_date


def period_options(func):
    """Add --start-date/--end-date and one flag per named period."""
    for period in reversed(PERIODS):
        func = click.option(f"--{period}", is_flag=True, help=f"Limit to {period.replace('-', ' ')}")(func)
    func = click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")(func)
    func = click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")(func)
    return func


def pop_period_flags(params: dict) -> dict[str, bool]:
    """Remove the period flags from command keyword arguments."""
    return {period: params.pop(period.replace("-", "_"), False) for period in PERIODS}


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date | None, date | None]:
    """Resolve a date range from period flags or explicit dates, or exit."""
    chosen = [period for period, is_set in period_flags.items() if is_set]

    if len(chosen) > 1:
        click.echo("Error: Only one period option (--this-month, --last-week, etc.) can be specified at a time.", err=True)
        ctx.exit(1)

    if chosen and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --last-week, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if chosen:
        return get_date_range(chosen[0])

    bounds = []
    for label, value in (("start", start_date), ("end", end_date)):
        if not value:
            bounds.append(None)
            continue
        try:
            bounds.append(parse_date(value))
        except ValueError as e:
            click.echo(f"Error: Invalid {label} date: {e}", err=True)
            ctx.exit(1)

    start, end = bounds
    if start and end and start > end:
        click.echo("Error: Start date is after end date.", err=True)
        ctx.exit(1)
    return start, end
