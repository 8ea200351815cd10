"""Account catalog: leaf resolution, grouping and the account tree."""

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Sequence, Union

from ledgerbook.domain.entities import Account, AccountId, AccountType
from ledgerbook.domain.errors import (
    AccountCycleError,
    NotFoundError,
    ValidationError,
    account_not_found,
)

if TYPE_CHECKING:
    from ledgerbook.client.base import LedgerBackend

logger = logging.getLogger(__name__)

POSTABLE_TYPES = (AccountType.ASSET, AccountType.LIABILITY)

# Account types each picker role accepts. Advanced entries take any leaf.
ROLE_TYPES: dict[str, tuple[AccountType, ...]] = {
    "expense": (AccountType.EXPENSE,),
    "pay": POSTABLE_TYPES,
    "income": (AccountType.INCOME,),
    "deposit": POSTABLE_TYPES,
    "from": POSTABLE_TYPES,
    "to": POSTABLE_TYPES,
    "entry": (),
}


def resolve_leaf_accounts(
    accounts: Iterable[Account], type_filter: Optional[Iterable[AccountType]] = None
) -> list[Account]:
    """Return the accounts that can be posted to.

    An account is a leaf when no account in the list names it as parent.
    Accounts are kept in input order, restricted to ``type_filter`` (empty or
    None means every type) and deduplicated by id, first occurrence wins.

    Args:
        accounts: Flat account list of a book
        type_filter: Acceptable account types

    Returns:
        Leaf accounts, possibly empty
    """
    accounts = list(accounts)
    allowed = set(type_filter or ())
    parent_ids = {str(acc.parent_id) for acc in accounts if acc.parent_id is not None}

    leaves = []
    seen: set[str] = set()
    for acc in accounts:
        key = str(acc.id)
        if allowed and acc.account_type not in allowed:
            continue
        if key in parent_ids or key in seen:
            continue
        seen.add(key)
        leaves.append(acc)
    return leaves


def group_accounts_by_type(accounts: Iterable[Account]) -> dict[AccountType, list[Account]]:
    """Partition accounts by type, keeping first-seen type and account order."""
    groups: dict[AccountType, list[Account]] = {}
    for acc in accounts:
        groups.setdefault(acc.account_type, []).append(acc)
    return groups


class AccountTree:
    """Explicit parent/child structure built once from a flat account list.

    Accounts whose parent is not in the list are treated as roots.

    Raises:
        AccountCycleError: If following parent links ever revisits an account
    """

    def __init__(self, accounts: Iterable[Account]):
        self.by_id: dict[AccountId, Account] = {}
        for acc in accounts:
            self.by_id.setdefault(acc.id, acc)

        self.children: dict[AccountId, list[Account]] = {}
        self.roots: list[Account] = []
        for acc in self.by_id.values():
            if acc.parent_id is not None and acc.parent_id in self.by_id:
                self.children.setdefault(acc.parent_id, []).append(acc)
            else:
                self.roots.append(acc)

        self._check_cycles()

    def _check_cycles(self) -> None:
        acyclic: set[AccountId] = set()
        for start in self.by_id:
            chain: list[AccountId] = []
            current: Optional[AccountId] = start
            while current is not None and current in self.by_id and current not in acyclic:
                if current in chain:
                    cycle = chain[chain.index(current):] + [current]
                    raise AccountCycleError(cycle)
                chain.append(current)
                current = self.by_id[current].parent_id
            acyclic.update(chain)

    def is_leaf(self, account_id: AccountId) -> bool:
        return account_id in self.by_id and not self.children.get(account_id)

    def path(self, account_id: AccountId) -> str:
        """Full path for an account (e.g., "Expenses > Food > Lunch")."""
        parts = []
        current = self.by_id.get(account_id)
        while current is not None:
            parts.append(current.name)
            current = self.by_id.get(current.parent_id) if current.parent_id else None
        return " > ".join(reversed(parts))

    def walk(self) -> Iterable[tuple[int, Account]]:
        """Yield (depth, account) pairs in depth-first order."""
        stack = [(0, acc) for acc in reversed(self.roots)]
        while stack:
            depth, acc = stack.pop()
            yield depth, acc
            for child in reversed(self.children.get(acc.id, [])):
                stack.append((depth + 1, child))


class AccountDirectory:
    """Read-only snapshot of a book's accounts for one editing session."""

    def __init__(self, accounts: Sequence[Account], book_id: Optional[int] = None):
        self.book_id = book_id
        self.accounts: tuple[Account, ...] = tuple(accounts)
        self.tree = AccountTree(self.accounts)

    def get(self, account_id: Union[AccountId, int, str, None]) -> Optional[Account]:
        key = AccountId.of(account_id)
        if key is None:
            return None
        return self.tree.by_id.get(key)

    def name_of(self, account_id: Union[AccountId, int, str, None]) -> str:
        """Display name of an account, or an empty string when unresolved."""
        acc = self.get(account_id)
        return acc.name if acc is not None else ""

    def leaves(self, type_filter: Optional[Iterable[AccountType]] = None) -> list[Account]:
        return resolve_leaf_accounts(self.accounts, type_filter)

    def leaves_for_role(self, role: str) -> list[Account]:
        return self.leaves(ROLE_TYPES[role])

    def grouped_leaves(
        self, type_filter: Optional[Iterable[AccountType]] = None
    ) -> dict[AccountType, list[Account]]:
        return group_accounts_by_type(self.leaves(type_filter))

    def find(self, account: Union[str, int], type_filter: Optional[Iterable[AccountType]] = None) -> Account:
        """Resolve a user-supplied account id, name or full path to a leaf.

        Args:
            account: Account ID, name, full name or "A > B" path
            type_filter: Acceptable account types

        Returns:
            Matching leaf account

        Raises:
            NotFoundError: If no eligible leaf matches
            ValidationError: If a bare name matches several leaves
        """
        candidates = self.leaves(type_filter)
        key = str(account).strip()

        for acc in candidates:
            if acc.id == key:
                return acc

        for acc in candidates:
            if acc.full_name == key or self.tree.path(acc.id) == key:
                return acc

        named = [acc for acc in candidates if acc.name == key]
        if len(named) == 1:
            return named[0]
        if len(named) > 1:
            paths = ", ".join(f"'{self.tree.path(acc.id)}'" for acc in named)
            raise ValidationError(f"Account name '{key}' is ambiguous: {paths}")

        raise NotFoundError(account_not_found(key))


class AccountService:
    """Service for loading account catalogs."""

    def __init__(self, backend: "LedgerBackend"):
        """Initialize account service.

        Args:
            backend: Remote ledger service
        """
        self.backend = backend

    def load_directory(self, book_id: int) -> AccountDirectory:
        """Fetch a book's accounts once and hold them as a snapshot.

        Raises:
            AccountCycleError: If the service returned a cyclic hierarchy
        """
        accounts = self.backend.list_accounts(book_id)
        logger.debug("Loaded %d accounts for book %s", len(accounts), book_id)
        return AccountDirectory(accounts, book_id=book_id)
