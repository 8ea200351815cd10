"""Shared pytest fixtures for ledgerbook tests."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from ledgerbook.client.base import LedgerBackend
from ledgerbook.client.errors import BackendError
from ledgerbook.domain.account import AccountDirectory
from ledgerbook.domain.entities import (
    Account,
    AccountBalance,
    AccountBalances,
    AccountId,
    AccountType,
    Book,
    CategoryRank,
    CategoryRankItem,
    CreatedTransaction,
    DailyGroup,
    MonthlyStatistics,
    MonthTrend,
    Tag,
    TagStatistics,
    TagStatItem,
    TransactionItem,
    TransactionPage,
    YearlyTrend,
)

BIG_ID = "1234567890123456789"


def make_account(id, name, account_type, parent_id=None):
    """Build an Account from raw ids the way the service sends them."""
    return Account(
        id=AccountId.of(id),
        name=name,
        account_type=AccountType(account_type),
        parent_id=AccountId.of(parent_id),
    )


class FakeBackend(LedgerBackend):
    """In-memory ledger service recording what the client sends."""

    def __init__(self, books=None, accounts=None, tags=None):
        self.books = books if books is not None else []
        self.accounts = accounts if accounts is not None else {}
        self.tags = tags if tags is not None else {}
        self.created = []
        self.queries = []
        self.fail_with = None
        self.closed = False
        self.history_date = date(2024, 1, 15)

    def close(self):
        self.closed = True

    def login(self, username, password):
        if password != "secret":
            raise BackendError("Invalid username or password", status_code=401, code=401)
        return f"token-for-{username}"

    def list_books(self):
        return list(self.books)

    def list_accounts(self, book_id):
        return list(self.accounts.get(book_id, []))

    def list_tags(self, book_id):
        return list(self.tags.get(book_id, []))

    def create_transaction(self, request):
        if self.fail_with is not None:
            raise self.fail_with
        self.created.append(request)
        return CreatedTransaction(
            id=100 + len(self.created),
            transaction_date=request.transaction_date,
            description=request.description,
        )

    def get_transaction_details(self, query):
        self.queries.append(query)
        item = TransactionItem(
            id=7,
            transaction_date=datetime(2024, 1, 15, 12, 30),
            transaction_type="EXPENSE",
            display_amount=Decimal("12.50"),
            description="Lunch",
            category_name="Food",
            target_account_name="Cash",
        )
        group = DailyGroup(
            date=self.history_date,
            daily_income=Decimal("0"),
            daily_expense=Decimal("12.50"),
            transactions=(item,),
        )
        return TransactionPage(daily_groups=(group,), total=1, page_num=query.page_num or 1, page_size=20)

    def get_monthly_statistics(self, book_id, year=None, month=None):
        self.queries.append(("monthly", book_id, year, month))
        return MonthlyStatistics(Decimal("5000.00"), Decimal("1234.50"), Decimal("3765.50"))

    def get_yearly_trend(self, book_id, year=None):
        return YearlyTrend(year=year or 2024, months=(MonthTrend(1, Decimal("5000"), Decimal("1234.5"), Decimal("3765.5")),))

    def get_category_rank(self, book_id, account_type=None, year=None, month=None):
        return CategoryRank(
            type=account_type.value if account_type else "EXPENSE",
            total=Decimal("100"),
            categories=(CategoryRankItem(AccountId("2"), "Food", Decimal("100"), Decimal("100")),),
        )

    def get_tag_statistics(self, book_id, year=None, month=None):
        return TagStatistics(total=Decimal("50"), tags=(TagStatItem(1, "trip", Decimal("50"), 2, Decimal("100")),))

    def get_account_balances(self, book_id, account_type=None):
        return AccountBalances(
            account_type=account_type.value if account_type else "ASSET",
            total=Decimal("300"),
            accounts=(AccountBalance(AccountId("5"), "Cash", Decimal("300")),),
        )


@pytest.fixture
def sample_accounts():
    """Account list of a small book, with one account sent twice."""
    return [
        make_account(1, "Expenses", "EXPENSE"),
        make_account(2, "Food", "EXPENSE", 1),
        make_account(3, "Transport", "EXPENSE", 1),
        make_account(4, "Taxi", "EXPENSE", 3),
        make_account(5, "Cash", "ASSET"),
        make_account(6, "Bank Account", "ASSET"),
        make_account(7, "Credit Card", "LIABILITY"),
        make_account(8, "Income", "INCOME"),
        make_account(9, "Salary", "INCOME", 8),
        make_account(10, "Opening Balance", "EQUITY"),
        make_account(BIG_ID, "Savings", "ASSET"),
        make_account("2", "Food", "EXPENSE", "1"),
    ]


@pytest.fixture
def directory(sample_accounts):
    """Account snapshot of the sample book."""
    return AccountDirectory(sample_accounts, book_id=1)


@pytest.fixture
def backend(sample_accounts):
    """Fake ledger service with two books and some tags."""
    return FakeBackend(
        books=[
            Book(id=1, name="Household", default_currency="CNY"),
            Book(id=2, name="Travel", default_currency="EUR"),
        ],
        accounts={1: sample_accounts, 2: []},
        tags={1: [Tag(id=1, name="trip"), Tag(id=2, name="family")]},
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def invoke(cli_runner, backend):
    """Run the CLI against the fake backend."""
    from ledgerbook.cli.main import cli

    def _invoke(*args):
        return cli_runner.invoke(cli, list(args), obj={"backend": backend})

    return _invoke
