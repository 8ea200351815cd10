"""Abstract interface to the remote ledger service."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import (
    Account,
    AccountBalances,
    AccountType,
    Book,
    CategoryRank,
    CreatedTransaction,
    MonthlyStatistics,
    Tag,
    TagStatistics,
    TransactionPage,
    TransactionQuery,
    TransactionRequest,
    YearlyTrend,
)


class LedgerBackend(ABC):
    """Abstract ledger service for ledgerbook.

    The service owns the ledger. The client reads books, accounts and tags,
    submits fully built transactions and reads aggregated statistics.
    """

    @abstractmethod
    def close(self) -> None:
        """Release any open connections."""
        pass

    # Authentication
    @abstractmethod
    def login(self, username: str, password: str) -> str:
        """Exchange credentials for a bearer token."""
        pass

    # Book operations
    @abstractmethod
    def list_books(self) -> list[Book]:
        """List books owned by the current user."""
        pass

    # Account operations
    @abstractmethod
    def list_accounts(self, book_id: int) -> list[Account]:
        """List the flat account list of a book, in service order."""
        pass

    # Tag operations
    @abstractmethod
    def list_tags(self, book_id: int) -> list[Tag]:
        """List tags of a book."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(self, request: TransactionRequest) -> CreatedTransaction:
        """Submit a balanced transaction. Returns the created transaction."""
        pass

    @abstractmethod
    def get_transaction_details(self, query: TransactionQuery) -> TransactionPage:
        """Get one page of transaction history grouped by day."""
        pass

    # Statistics
    @abstractmethod
    def get_monthly_statistics(
        self, book_id: int, year: Optional[int] = None, month: Optional[int] = None
    ) -> MonthlyStatistics:
        """Get income, expense and balance for a month."""
        pass

    @abstractmethod
    def get_yearly_trend(self, book_id: int, year: Optional[int] = None) -> YearlyTrend:
        """Get month-by-month totals for a year."""
        pass

    @abstractmethod
    def get_category_rank(
        self,
        book_id: int,
        account_type: Optional[AccountType] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> CategoryRank:
        """Get expense or income accounts ranked by amount."""
        pass

    @abstractmethod
    def get_tag_statistics(
        self, book_id: int, year: Optional[int] = None, month: Optional[int] = None
    ) -> TagStatistics:
        """Get totals per tag."""
        pass

    @abstractmethod
    def get_account_balances(
        self, book_id: int, account_type: Optional[AccountType] = None
    ) -> AccountBalances:
        """Get current balances of asset or liability accounts."""
        pass
