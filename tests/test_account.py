"""Tests for the account catalog."""

import pytest

from conftest import BIG_ID, make_account
from ledgerbook.domain.account import (
    AccountDirectory,
    AccountService,
    AccountTree,
    group_accounts_by_type,
    resolve_leaf_accounts,
)
from ledgerbook.domain.entities import AccountId, AccountType
from ledgerbook.domain.errors import AccountCycleError, NotFoundError, ValidationError


def _ids(accounts):
    return [str(acc.id) for acc in accounts]


class TestResolveLeafAccounts:
    """Tests for leaf account resolution."""

    def test_filters_by_type_and_excludes_parents(self):
        """Test that only childless accounts of the requested type are returned."""
        accounts = [
            make_account(1, "Expenses", "EXPENSE"),
            make_account(2, "Food", "EXPENSE", 1),
            make_account(3, "Transport", "EXPENSE", 1),
            make_account(4, "Cash", "ASSET"),
        ]

        result = resolve_leaf_accounts(accounts, [AccountType.EXPENSE])

        assert _ids(result) == ["2", "3"]

    def test_no_filter_returns_all_leaves(self, sample_accounts):
        """Test that an empty filter allows every type."""
        expected = ["2", "4", "5", "6", "7", "9", "10", BIG_ID]
        assert _ids(resolve_leaf_accounts(sample_accounts)) == expected
        assert _ids(resolve_leaf_accounts(sample_accounts, [])) == expected

    def test_multiple_types_keep_input_order(self, sample_accounts):
        """Test filtering by several types keeps input order."""
        result = resolve_leaf_accounts(sample_accounts, [AccountType.LIABILITY, AccountType.ASSET])
        assert _ids(result) == ["5", "6", "7", BIG_ID]

    def test_duplicates_keep_first_occurrence(self):
        """Test that a repeated id appears once."""
        first = make_account(2, "Food", "EXPENSE")
        second = make_account("2", "Food (copy)", "EXPENSE")

        result = resolve_leaf_accounts([first, second])

        assert result == [first]

    def test_parent_id_type_mismatch_still_excludes_parent(self):
        """Test that numeric and string ids compare equal."""
        accounts = [
            make_account(1, "Assets", "ASSET"),
            make_account("11", "Wallet", "ASSET", "1"),
            make_account(12, "Bank", "ASSET", 1),
        ]

        assert _ids(resolve_leaf_accounts(accounts)) == ["11", "12"]

    def test_large_ids_survive_unchanged(self, sample_accounts):
        """Test that ids too long for a float keep every digit."""
        result = resolve_leaf_accounts(sample_accounts, [AccountType.ASSET])
        assert result[-1].id == AccountId(BIG_ID)

    def test_empty_when_no_type_matches(self):
        """Test that an unmatched filter yields an empty list."""
        accounts = [make_account(1, "Cash", "ASSET")]
        assert resolve_leaf_accounts(accounts, [AccountType.EXPENSE]) == []

    def test_empty_input(self):
        """Test resolving an empty account list."""
        assert resolve_leaf_accounts([]) == []

    def test_parent_of_same_type_is_excluded(self):
        """Test that a parent is dropped even when its type matches."""
        accounts = [
            make_account(1, "Equity", "EQUITY"),
            make_account(2, "Retained", "EQUITY", 1),
        ]
        assert _ids(resolve_leaf_accounts(accounts, [AccountType.EQUITY])) == ["2"]

    def test_idempotent(self, sample_accounts):
        """Test that resolving twice yields the same result."""
        first = resolve_leaf_accounts(sample_accounts, [AccountType.EXPENSE])
        assert resolve_leaf_accounts(first, [AccountType.EXPENSE]) == first

    def test_every_result_is_a_leaf_of_an_allowed_type(self, sample_accounts):
        """Test the leaf and type properties on every returned account."""
        allowed = {AccountType.ASSET, AccountType.EXPENSE}
        parent_ids = {acc.parent_id for acc in sample_accounts if acc.parent_id}

        for acc in resolve_leaf_accounts(sample_accounts, allowed):
            assert acc.account_type in allowed
            assert acc.id not in parent_ids


def test_group_accounts_by_type(sample_accounts):
    """Test grouping keeps first-seen type order."""
    groups = group_accounts_by_type(resolve_leaf_accounts(sample_accounts))

    assert list(groups) == [
        AccountType.EXPENSE,
        AccountType.ASSET,
        AccountType.LIABILITY,
        AccountType.INCOME,
        AccountType.EQUITY,
    ]
    assert _ids(groups[AccountType.ASSET]) == ["5", "6", BIG_ID]


class TestAccountTree:
    """Tests for the account hierarchy."""

    def test_path(self, directory):
        """Test full path of a nested account."""
        assert directory.tree.path(AccountId("4")) == "Expenses > Transport > Taxi"
        assert directory.tree.path(AccountId("5")) == "Cash"

    def test_is_leaf(self, directory):
        """Test leaf detection."""
        assert directory.tree.is_leaf(AccountId("2"))
        assert not directory.tree.is_leaf(AccountId("3"))
        assert not directory.tree.is_leaf(AccountId("999"))

    def test_orphan_becomes_root(self):
        """Test that an account with an unknown parent is a root."""
        tree = AccountTree([make_account(5, "Orphan", "ASSET", 42)])
        assert [acc.name for acc in tree.roots] == ["Orphan"]
        assert tree.path(AccountId("5")) == "Orphan"

    def test_walk_depth_first(self):
        """Test depth-first traversal order and depths."""
        tree = AccountTree(
            [
                make_account(1, "Expenses", "EXPENSE"),
                make_account(2, "Food", "EXPENSE", 1),
                make_account(3, "Lunch", "EXPENSE", 2),
                make_account(4, "Cash", "ASSET"),
            ]
        )

        walked = [(depth, acc.name) for depth, acc in tree.walk()]

        assert walked == [(0, "Expenses"), (1, "Food"), (2, "Lunch"), (0, "Cash")]

    def test_cycle_is_rejected(self):
        """Test that a parent cycle raises instead of looping."""
        accounts = [
            make_account(1, "A", "EXPENSE", 3),
            make_account(2, "B", "EXPENSE", 1),
            make_account(3, "C", "EXPENSE", 2),
        ]

        with pytest.raises(AccountCycleError) as excinfo:
            AccountTree(accounts)

        assert set(excinfo.value.account_ids) == {"1", "2", "3"}
        assert "cycle" in str(excinfo.value)

    def test_self_parent_is_a_cycle(self):
        """Test that an account naming itself as parent is rejected."""
        with pytest.raises(AccountCycleError):
            AccountTree([make_account(1, "Loop", "ASSET", 1)])


class TestAccountDirectory:
    """Tests for account lookup within a book."""

    def test_find_by_id(self, directory):
        """Test finding an account by id."""
        assert directory.find("5").name == "Cash"
        assert directory.find(5).name == "Cash"

    def test_find_by_name(self, directory):
        """Test finding an account by unique name."""
        assert directory.find("Taxi").id == "4"

    def test_find_by_path(self, directory):
        """Test finding an account by its full path."""
        assert directory.find("Expenses > Transport > Taxi").id == "4"

    def test_find_parent_is_not_found(self, directory):
        """Test that non-leaf accounts cannot be picked."""
        with pytest.raises(NotFoundError, match="Account 'Transport' not found"):
            directory.find("Transport")

    def test_find_respects_type_filter(self, directory):
        """Test that the type filter restricts candidates."""
        with pytest.raises(NotFoundError):
            directory.find("Food", [AccountType.ASSET])

    def test_find_ambiguous_name(self):
        """Test that a name shared by two leaves must be disambiguated."""
        directory = AccountDirectory(
            [
                make_account(1, "Home", "EXPENSE"),
                make_account(2, "Other", "EXPENSE", 1),
                make_account(3, "Travel", "EXPENSE"),
                make_account(4, "Other", "EXPENSE", 3),
            ]
        )

        with pytest.raises(ValidationError, match="ambiguous"):
            directory.find("Other")
        assert directory.find("Travel > Other").id == "4"

    def test_name_of(self, directory):
        """Test display names, empty for unknown ids."""
        assert directory.name_of("2") == "Food"
        assert directory.name_of(None) == ""
        assert directory.name_of("404") == ""

    def test_leaves_for_role(self, directory):
        """Test role-based account candidates."""
        assert _ids(directory.leaves_for_role("expense")) == ["2", "4"]
        assert _ids(directory.leaves_for_role("pay")) == ["5", "6", "7", BIG_ID]
        assert _ids(directory.leaves_for_role("income")) == ["9"]
        assert len(directory.leaves_for_role("entry")) == 8

    def test_grouped_leaves(self, directory):
        """Test grouping leaves for a picker."""
        groups = directory.grouped_leaves([AccountType.ASSET, AccountType.LIABILITY])
        assert list(groups) == [AccountType.ASSET, AccountType.LIABILITY]


def test_account_service_loads_directory(backend):
    """Test loading an account snapshot from the service."""
    service = AccountService(backend)

    directory = service.load_directory(1)

    assert directory.book_id == 1
    assert directory.get(BIG_ID).name == "Savings"
    assert service.load_directory(2).accounts == ()
