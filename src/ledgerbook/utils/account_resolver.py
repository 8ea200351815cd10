"""Utility for resolving account names to accounts for a picker role."""

from typing import Optional

from ledgerbook.domain.account import ROLE_TYPES, AccountDirectory
from ledgerbook.domain.entities import Account
from ledgerbook.domain.errors import NotFoundError


def resolve_account(directory: AccountDirectory, account: str | int, role: Optional[str] = None) -> Account:
    """Resolve account name, path or ID to a postable leaf account.

    Args:
        directory: Account snapshot of the current book
        account: Account ID, name or "Parent > Child" path
        role: Optional picker role restricting account types
            (expense, pay, income, deposit, from, to, entry)

    Returns:
        Leaf account

    Raises:
        NotFoundError: If no eligible account matches
        ValidationError: If the name is ambiguous
    """
    type_filter = ROLE_TYPES[role] if role is not None else ()
    try:
        return directory.find(account, type_filter)
    except NotFoundError:
        if not role or not type_filter:
            raise
        allowed = "/".join(t.value for t in type_filter)
        raise NotFoundError(f"No {allowed} leaf account '{account}' for the {role} account")
