"""CLI tests against an in-memory ledger service."""

from datetime import date, datetime
from decimal import Decimal

from ledgerbook.client.errors import BackendError
from ledgerbook.domain.entities import Direction


class TestAddCommands:
    """Tests for recording transactions."""

    def test_add_expense(self, invoke, backend):
        result = invoke(
            "add", "expense", "12.5", "--account", "Food", "--pay", "Cash",
            "--date", "2024-01-15 12:30", "--tag", "trip",
        )

        assert result.exit_code == 0, result.output
        assert "Created transaction 101" in result.output
        assert "Description: Food - Cash" in result.output

        request = backend.created[0]
        assert request.book_id == 1
        assert request.transaction_date == datetime(2024, 1, 15, 12, 30)
        assert request.tag_ids == (1,)
        assert [(e.account_id, e.direction, e.amount_str) for e in request.entries] == [
            ("2", Direction.DEBIT, "12.50"),
            ("5", Direction.CREDIT, "12.50"),
        ]

    def test_add_income_with_description(self, invoke, backend):
        result = invoke(
            "add", "income", "5000", "--account", "Salary", "--deposit", "Bank Account",
            "--description", "March salary",
        )

        assert result.exit_code == 0, result.output
        assert backend.created[0].description == "March salary"
        assert [e.account_id for e in backend.created[0].entries] == ["6", "9"]

    def test_add_transfer_dry_run(self, invoke, backend):
        result = invoke(
            "add", "transfer", "200", "--from", "Bank Account", "--to", "Cash",
            "--date", "2024-01-15", "--dry-run",
        )

        assert result.exit_code == 0, result.output
        assert "Description: Bank Account → Cash" in result.output
        assert "Date: 2024-01-15 00:00" in result.output
        assert "Dry run: nothing submitted." in result.output
        assert backend.created == []

    def test_invalid_amount(self, invoke, backend):
        result = invoke("add", "expense", "0", "--account", "Food", "--pay", "Cash")

        assert result.exit_code == 1
        assert "Error: Please enter a valid amount" in result.output
        assert backend.created == []

    def test_account_of_wrong_type(self, invoke, backend):
        result = invoke("add", "expense", "10", "--account", "Cash", "--pay", "Cash")

        assert result.exit_code == 1
        assert "No EXPENSE leaf account 'Cash' for the expense account" in result.output

    def test_parent_account_is_rejected(self, invoke):
        result = invoke("add", "expense", "10", "--account", "Transport", "--pay", "Cash")

        assert result.exit_code == 1
        assert "Transport" in result.output

    def test_unknown_tag(self, invoke, backend):
        result = invoke("add", "expense", "10", "--account", "Food", "--pay", "Cash", "--tag", "work")

        assert result.exit_code == 1
        assert "Tag 'work' not found" in result.output
        assert backend.created == []

    def test_invalid_date(self, invoke):
        result = invoke("add", "expense", "10", "--account", "Food", "--pay", "Cash", "--date", "blorp")

        assert result.exit_code == 1
        assert "Invalid date format" in result.output

    def test_service_rejection(self, invoke, backend):
        backend.fail_with = BackendError("Account is closed", status_code=200, code=500)

        result = invoke("add", "expense", "10", "--account", "Food", "--pay", "Cash")

        assert result.exit_code == 1
        assert "Error: Account is closed" in result.output

    def test_add_entries(self, invoke, backend):
        result = invoke(
            "add", "entries",
            "--entry", "D:Food:30:team lunch",
            "--entry", "DEBIT:Expenses > Transport > Taxi:20",
            "--entry", "C:Cash:50",
        )

        assert result.exit_code == 0, result.output
        assert "Debit 50.00 | Credit 50.00 | balanced" in result.output
        request = backend.created[0]
        assert request.description == "复式记账"
        assert [(e.account_id, e.amount) for e in request.entries] == [
            ("2", Decimal("30.00")),
            ("4", Decimal("20.00")),
            ("5", Decimal("50.00")),
        ]
        assert request.entries[0].memo == "team lunch"

    def test_add_entries_unbalanced(self, invoke, backend):
        result = invoke("add", "entries", "--entry", "D:Food:100", "--entry", "C:Cash:99.99")

        assert result.exit_code == 1
        assert "not balanced" in result.output
        assert "Error: Entries are not balanced: debit 100.00 != credit 99.99" in result.output
        assert backend.created == []

    def test_add_single_entry(self, invoke):
        result = invoke("add", "entries", "--entry", "D:Food:30")

        assert result.exit_code == 1
        assert "Please select an account for every entry" in result.output

    def test_add_entries_bad_spec(self, invoke):
        result = invoke("add", "entries", "--entry", "Food:30")

        assert result.exit_code == 1
        assert "Invalid entry 'Food:30'" in result.output


class TestAccountCommands:
    """Tests for browsing accounts."""

    def test_list_groups_leaves(self, invoke):
        result = invoke("account", "list")

        assert result.exit_code == 0, result.output
        assert "Expense:" in result.output
        assert "Expenses > Transport > Taxi" in result.output
        assert "| Expenses > Transport\n" not in result.output
        assert "Savings" in result.output

    def test_list_by_role(self, invoke):
        result = invoke("account", "list", "--role", "pay")

        assert result.exit_code == 0, result.output
        assert "Asset:" in result.output
        assert "Liability:" in result.output
        assert "Expense:" not in result.output

    def test_type_and_role_intersect(self, invoke):
        result = invoke("account", "list", "--type", "ASSET", "--type", "EXPENSE", "--role", "pay")

        assert result.exit_code == 0, result.output
        assert "Asset:" in result.output
        assert "Expense:" not in result.output
        assert "Liability:" not in result.output

    def test_type_outside_role(self, invoke):
        result = invoke("account", "list", "--type", "EXPENSE", "--role", "pay")

        assert result.exit_code == 0, result.output
        assert "No eligible accounts." in result.output

    def test_list_empty_book(self, invoke):
        result = invoke("account", "list", "--book", "Travel")

        assert result.exit_code == 0
        assert "No eligible accounts." in result.output

    def test_tree(self, invoke):
        result = invoke("account", "list", "--tree")

        assert result.exit_code == 0, result.output
        assert "Expenses + (ID: 1, EXPENSE)" in result.output
        assert "    Taxi (ID: 4, EXPENSE)" in result.output


class TestBookAndTagCommands:
    """Tests for books and tags."""

    def test_book_list(self, invoke):
        result = invoke("book", "list")

        assert result.exit_code == 0
        assert "Household" in result.output
        assert "(default)" in result.output
        assert "Currency: EUR" in result.output

    def test_tag_list(self, invoke):
        result = invoke("tag", "list")

        assert result.exit_code == 0
        assert "Tags in 'Household':" in result.output
        assert "trip (ID: 1)" in result.output

    def test_tag_list_empty(self, invoke):
        result = invoke("tag", "list", "--book", "Travel")
        assert "No tags found in 'Travel'." in result.output

    def test_unknown_book(self, invoke):
        result = invoke("tag", "list", "--book", "Work")

        assert result.exit_code == 1
        assert "Error: Book 'Work' not found" in result.output


class TestViewCommand:
    """Tests for transaction history."""

    def test_view(self, invoke):
        result = invoke("view")

        assert result.exit_code == 0, result.output
        assert "1 transaction(s) in 'Household' (page 1):" in result.output
        assert "Lunch" in result.output
        assert "ID: 7" not in result.output

    def test_view_verbose_with_dates(self, invoke, backend):
        result = invoke("view", "--start-date", "2024-01-01", "--end-date", "2024-01-31", "--page", "2", "-v")

        assert result.exit_code == 0, result.output
        assert "ID: 7" in result.output
        query = backend.queries[-1]
        assert (query.start_date, query.end_date, query.page_num) == (date(2024, 1, 1), date(2024, 1, 31), 2)

    def test_view_group_without_date(self, invoke, backend):
        backend.history_date = None

        result = invoke("view")

        assert result.exit_code == 0, result.output
        assert "Lunch" in result.output

    def test_view_rejects_mixed_filters(self, invoke):
        result = invoke("view", "--this-month", "--start-date", "2024-01-01")

        assert result.exit_code == 1
        assert "cannot be combined" in result.output


class TestSummaryCommand:
    """Tests for statistics output."""

    def test_default_summary(self, invoke):
        result = invoke("summary")

        assert result.exit_code == 0, result.output
        assert "Summary for this month" in result.output
        assert "5,000.00" in result.output

    def test_month_defaults_year(self, invoke, backend):
        result = invoke("summary", "--month", "3")

        assert result.exit_code == 0, result.output
        assert backend.queries[-1] == ("monthly", 1, date.today().year, 3)

    def test_rank_tags_balances_and_trend(self, invoke):
        result = invoke(
            "summary", "--year", "2024", "--month", "3", "--rank", "expense", "--tags", "--balances", "asset", "--trend"
        )

        assert result.exit_code == 0, result.output
        assert "Summary for 2024-03" in result.output
        assert "Monthly trend for 2024" in result.output
        assert "Expense by account" in result.output
        assert "Food" in result.output
        assert "trip" in result.output
        assert "Asset balances" in result.output


class TestLoginCommand:
    """Tests for logging in."""

    def test_login(self, invoke):
        result = invoke("login", "alice", "--password", "secret")

        assert result.exit_code == 0
        assert result.output.strip() == "token-for-alice"

    def test_login_rejected(self, invoke):
        result = invoke("login", "alice", "--password", "wrong")

        assert result.exit_code == 1
        assert "Error: Invalid username or password" in result.output


def test_help_does_not_connect(cli_runner):
    """Test that showing help needs no ledger service."""
    from ledgerbook.cli.main import cli

    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "add" in result.output
    assert "summary" in result.output
