"""Statistics read models served by the remote ledger."""

from typing import TYPE_CHECKING, Optional

from ledgerbook.domain.entities import (
    AccountBalances,
    AccountType,
    CategoryRank,
    MonthlyStatistics,
    TagStatistics,
    YearlyTrend,
)
from ledgerbook.domain.errors import ValidationError

if TYPE_CHECKING:
    from ledgerbook.client.base import LedgerBackend

RANK_TYPES = (AccountType.EXPENSE, AccountType.INCOME)
BALANCE_TYPES = (AccountType.ASSET, AccountType.LIABILITY)


class SummaryService:
    """Service for income/expense statistics of a book.

    All aggregation happens server-side; this layer only validates the
    query parameters before they go over the wire.
    """

    def __init__(self, backend: "LedgerBackend"):
        self.backend = backend

    @staticmethod
    def _check_period(year: Optional[int], month: Optional[int]) -> None:
        if month is not None and not 1 <= month <= 12:
            raise ValidationError(f"Month must be between 1 and 12, got {month}")
        if month is not None and year is None:
            raise ValidationError("A month filter requires a year")

    def monthly(self, book_id: int, year: Optional[int] = None, month: Optional[int] = None) -> MonthlyStatistics:
        self._check_period(year, month)
        return self.backend.get_monthly_statistics(book_id, year=year, month=month)

    def yearly_trend(self, book_id: int, year: Optional[int] = None) -> YearlyTrend:
        return self.backend.get_yearly_trend(book_id, year=year)

    def category_rank(
        self,
        book_id: int,
        account_type: Optional[AccountType] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> CategoryRank:
        if account_type is not None and account_type not in RANK_TYPES:
            raise ValidationError(f"Category rank supports EXPENSE or INCOME, not {account_type.value}")
        self._check_period(year, month)
        return self.backend.get_category_rank(book_id, account_type=account_type, year=year, month=month)

    def tag_statistics(self, book_id: int, year: Optional[int] = None, month: Optional[int] = None) -> TagStatistics:
        self._check_period(year, month)
        return self.backend.get_tag_statistics(book_id, year=year, month=month)

    def account_balances(self, book_id: int, account_type: Optional[AccountType] = None) -> AccountBalances:
        if account_type is not None and account_type not in BALANCE_TYPES:
            raise ValidationError(f"Balances support ASSET or LIABILITY, not {account_type.value}")
        return self.backend.get_account_balances(book_id, account_type=account_type)
