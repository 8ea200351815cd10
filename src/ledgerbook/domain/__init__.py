"""Domain layer for ledgerbook application."""

from ledgerbook.domain.account import AccountService, resolve_leaf_accounts
from ledgerbook.domain.book import BookService
from ledgerbook.domain.summary import SummaryService
from ledgerbook.domain.transaction import TransactionService, build_entries

__all__ = [
    "AccountService",
    "BookService",
    "SummaryService",
    "TransactionService",
    "build_entries",
    "resolve_leaf_accounts",
]
