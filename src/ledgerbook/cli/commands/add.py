"""Add transaction commands."""

import click
from ledgerbook.client.errors import BackendError
from ledgerbook.cli.account_resolution import (
    load_directory_or_exit,
    resolve_account_or_exit,
    resolve_book_or_exit,
)
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountDirectory
from ledgerbook.domain.book import BookService
from ledgerbook.domain.draft import Mode, TransactionForm
from ledgerbook.domain.entities import Book, Direction
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.transaction import (
    TransactionService,
    auto_description,
    balance_status,
    build_request,
)
from ledgerbook.utils.date_parser import parse_datetime

DIRECTIONS = {"DEBIT": Direction.DEBIT, "D": Direction.DEBIT, "CREDIT": Direction.CREDIT, "C": Direction.CREDIT}


_TRANSACTION_OPTIONS = [
    click.option("--book", help="Book name or ID (defaults to your first book)"),
    click.option("--date", "date_str", help="Transaction date/time (e.g., '2024-01-15 12:30', 'yesterday'; default: now)"),
    click.option("--description", default="", help="Description (generated from the accounts if omitted)"),
    click.option("--tag", "tags", multiple=True, help="Tag name or ID (repeatable)"),
    click.option("--dry-run", is_flag=True, help="Show the entries without submitting"),
]


def transaction_options(func):
    """Options shared by every add subcommand."""
    for option in reversed(_TRANSACTION_OPTIONS):
        func = option(func)
    return func


def _start_form(ctx, mode: Mode, book: str | None, date_str: str | None, description: str, tags: tuple[str, ...]):
    """Create a form for a book, returning it with the book and its accounts."""
    book_obj = resolve_book_or_exit(ctx, book)
    directory = load_directory_or_exit(ctx, book_obj)

    try:
        txn_date = parse_datetime(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    form = TransactionForm(book_id=book_obj.id, mode=mode, description=description, transaction_date=txn_date)

    if tags:
        service = BookService(ctx.obj["backend"])
        try:
            book_tags = service.list_tags(book_obj.id)
            for tag in tags:
                tag_obj = service.resolve_tag(book_tags, tag)
                if tag_obj.id not in form.tag_ids:
                    form.toggle_tag(tag_obj.id)
        except (DomainError, BackendError) as e:
            handle_domain_error(ctx, e)

    return form, book_obj, directory


def _finish(ctx, form: TransactionForm, book_obj: Book, directory: AccountDirectory, dry_run: bool) -> None:
    """Build the form and submit it, or print it on a dry run."""
    if dry_run:
        try:
            request = build_request(form, directory)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Book: {book_obj.name}")
        click.echo(f"Date: {request.transaction_date:%Y-%m-%d %H:%M}")
        click.echo(f"Description: {request.description}")
        for entry in request.entries:
            memo = f"  # {entry.memo}" if entry.memo else ""
            click.echo(
                f"  {entry.direction.value:<6} {directory.tree.path(entry.account_id):<40} {entry.amount_str:>12}{memo}"
            )
        click.echo("Dry run: nothing submitted.")
        return

    service = TransactionService(ctx.obj["backend"])
    description = form.description.strip() or auto_description(form, directory)
    try:
        created = service.submit(form, directory)
    except (DomainError, BackendError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {created.id}")
    click.echo(f"  Book: {book_obj.name}")
    click.echo(f"  Description: {created.description or description}")


def _quick(ctx, mode: Mode, amount: str, selections: dict[str, str], opts: dict) -> None:
    form, book_obj, directory = _start_form(
        ctx, mode, opts["book"], opts["date_str"], opts["description"], opts["tags"]
    )
    form.set_amount(amount)
    for role, account in selections.items():
        form.select_account(role, resolve_account_or_exit(ctx, directory, account, role))
    _finish(ctx, form, book_obj, directory, opts["dry_run"])


@click.group()
def add_group():
    """Record a transaction."""
    pass


@add_group.command("expense")
@click.argument("amount")
@click.option("--account", "expense", required=True, help="Expense account name, path or ID")
@click.option("--pay", required=True, help="Asset or liability account paid from")
@transaction_options
@click.pass_context
def add_expense(ctx, amount: str, expense: str, pay: str, **opts):
    """Record an expense: debit the expense account, credit the pay account.

    Examples:
        ledgerbook add expense 12.50 --account Food --pay "Credit Card"
        ledgerbook add expense 30 --account "Transport > Taxi" --pay Cash --tag trip
    """
    _quick(ctx, Mode.EXPENSE, amount, {"expense": expense, "pay": pay}, opts)


@add_group.command("income")
@click.argument("amount")
@click.option("--account", "income", required=True, help="Income account name, path or ID")
@click.option("--deposit", required=True, help="Asset or liability account receiving the money")
@transaction_options
@click.pass_context
def add_income(ctx, amount: str, income: str, deposit: str, **opts):
    """Record income: debit the deposit account, credit the income account.

    Examples:
        ledgerbook add income 5000 --account Salary --deposit "Bank Account"
    """
    _quick(ctx, Mode.INCOME, amount, {"income": income, "deposit": deposit}, opts)


@add_group.command("transfer")
@click.argument("amount")
@click.option("--from", "from_account", required=True, help="Asset or liability account to move money from")
@click.option("--to", "to_account", required=True, help="Asset or liability account to move money to")
@transaction_options
@click.pass_context
def add_transfer(ctx, amount: str, from_account: str, to_account: str, **opts):
    """Move money: debit the 'to' account, credit the 'from' account.

    Examples:
        ledgerbook add transfer 200 --from "Bank Account" --to Cash
    """
    _quick(ctx, Mode.TRANSFER, amount, {"from": from_account, "to": to_account}, opts)


def _parse_entry(ctx, spec: str) -> tuple[Direction, str, str, str]:
    parts = spec.split(":", 3)
    if len(parts) < 3 or parts[0].strip().upper() not in DIRECTIONS:
        click.echo(
            f"Error: Invalid entry '{spec}'. Use DIRECTION:ACCOUNT:AMOUNT[:MEMO], e.g. DEBIT:Food:50",
            err=True,
        )
        ctx.exit(1)
    memo = parts[3] if len(parts) == 4 else ""
    return DIRECTIONS[parts[0].strip().upper()], parts[1].strip(), parts[2].strip(), memo


@add_group.command("entries")
@click.option(
    "--entry",
    "entry_specs",
    multiple=True,
    required=True,
    help="Posting line as DIRECTION:ACCOUNT:AMOUNT[:MEMO] (repeat, at least twice)",
)
@transaction_options
@click.pass_context
def add_entries(ctx, entry_specs: tuple[str, ...], **opts):
    """Record a free-form journal entry.

    Debits and credits must balance. DIRECTION is DEBIT (D) or CREDIT (C).

    Examples:
        ledgerbook add entries --entry D:Food:30 --entry D:Drinks:20 --entry C:Cash:50
        ledgerbook add entries --entry "DEBIT:Rent:1000:March" --entry "CREDIT:Bank Account:1000"
    """
    form, book_obj, directory = _start_form(
        ctx, Mode.ADVANCED, opts["book"], opts["date_str"], opts["description"], opts["tags"]
    )

    draft = form.advanced
    for i, spec in enumerate(entry_specs):
        direction, account, amount, memo = _parse_entry(ctx, spec)
        if i >= len(draft.entries):
            draft.add_entry()
        draft.update_entry(i, amount=amount, memo=memo, direction=direction)
        draft.select(i, resolve_account_or_exit(ctx, directory, account, "entry"))

    status = balance_status(draft.entries)
    click.echo(
        f"Debit {status.debit_sum:,.2f} | Credit {status.credit_sum:,.2f} | "
        f"{'balanced' if status.balanced else 'not balanced'}"
    )
    _finish(ctx, form, book_obj, directory, opts["dry_run"])


def register_commands(cli):
    """Register add commands with main CLI."""
    cli.add_command(add_group, name="add")
