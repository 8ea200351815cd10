"""Domain model entities for ledgerbook.

These are pure data classes representing bookkeeping concepts, independent of
the wire format used by the remote service. Mappers in the client layer turn
service payloads into these entities and back.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class AccountId(str):
    """Canonical account identifier.

    The service sends ids as numbers, or as strings once they are too large
    for a safe integer. Both are normalized to this string type at the
    boundary so comparisons never mix representations.
    """

    __slots__ = ()

    @classmethod
    def of(cls, raw: Union[int, str, None]) -> Optional["AccountId"]:
        """Normalize a raw id, returning None for missing values."""
        if raw is None or isinstance(raw, bool):
            return None
        text = str(raw).strip()
        if not text or text == "null":
            return None
        return cls(text)


class AccountType(str, Enum):
    """Ledger account classification."""

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class Direction(str, Enum):
    """Side of a posting line."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"

    def flipped(self) -> "Direction":
        return Direction.CREDIT if self is Direction.DEBIT else Direction.DEBIT


@dataclass(frozen=True)
class Book:
    """Book (ledger) domain entity."""

    id: int
    name: str
    description: Optional[str] = None
    owner_id: Optional[int] = None
    default_currency: Optional[str] = None
    cover_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Account:
    """Ledger account domain entity with hierarchical structure."""

    id: AccountId
    name: str
    account_type: AccountType
    parent_id: Optional[AccountId] = None
    full_name: Optional[str] = None
    icon: Optional[str] = None
    level: Optional[int] = None


@dataclass(frozen=True)
class Tag:
    """Tag domain entity."""

    id: int
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None


@dataclass(frozen=True)
class Entry:
    """One posting line of a transaction.

    ``amount`` is always positive and quantized to two fraction digits.
    """

    account_id: AccountId
    direction: Direction
    amount: Decimal
    memo: Optional[str] = None

    @property
    def amount_str(self) -> str:
        # utils imports the domain package, so resolve it lazily
        from ledgerbook.utils.amount_parser import format_amount

        return format_amount(self.amount)


@dataclass(frozen=True)
class TransactionRequest:
    """A fully built, balanced transaction ready for submission."""

    transaction_date: datetime
    description: str
    book_id: int
    entries: tuple[Entry, ...]
    tag_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class CreatedTransaction:
    """Identifier and echo of a transaction accepted by the service."""

    id: int
    transaction_date: Optional[datetime]
    description: Optional[str]


@dataclass(frozen=True)
class TagInfo:
    """Tag as embedded in a transaction read model."""

    id: int
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None


@dataclass(frozen=True)
class TransactionItem:
    """Transaction row of the history read model."""

    id: int
    transaction_date: Optional[datetime]
    transaction_type: str
    display_amount: Decimal
    description: Optional[str]
    category_name: Optional[str]
    target_account_name: Optional[str]
    tags: tuple[TagInfo, ...] = ()


@dataclass(frozen=True)
class DailyGroup:
    """Transactions of one day with that day's totals."""

    date: Optional[date]
    daily_income: Decimal
    daily_expense: Decimal
    transactions: tuple[TransactionItem, ...] = ()


@dataclass(frozen=True)
class TransactionPage:
    """One page of the transaction history."""

    daily_groups: tuple[DailyGroup, ...]
    total: int
    page_num: int
    page_size: int


@dataclass(frozen=True)
class TransactionQuery:
    """Filters for the transaction history."""

    book_id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    page_num: Optional[int] = None
    page_size: Optional[int] = None


@dataclass(frozen=True)
class MonthlyStatistics:
    """Income and expense totals for one month."""

    total_income: Decimal
    total_expense: Decimal
    balance: Decimal


@dataclass(frozen=True)
class MonthTrend:
    """One month of a yearly trend."""

    month: int
    income: Decimal
    expense: Decimal
    balance: Decimal


@dataclass(frozen=True)
class YearlyTrend:
    """Month-by-month totals for a year."""

    year: int
    months: tuple[MonthTrend, ...] = ()


@dataclass(frozen=True)
class CategoryRankItem:
    """Share of one income or expense account in a period."""

    account_id: AccountId
    account_name: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class CategoryRank:
    """Income or expense accounts ranked by amount."""

    type: str
    total: Decimal
    categories: tuple[CategoryRankItem, ...] = ()


@dataclass(frozen=True)
class TagStatItem:
    """Totals for one tag in a period."""

    tag_id: int
    tag_name: str
    amount: Decimal
    count: int
    percentage: Decimal


@dataclass(frozen=True)
class TagStatistics:
    """Totals per tag in a period."""

    total: Decimal
    tags: tuple[TagStatItem, ...] = ()


@dataclass(frozen=True)
class AccountBalance:
    """Current balance of one asset or liability account."""

    account_id: AccountId
    account_name: str
    balance: Decimal


@dataclass(frozen=True)
class AccountBalances:
    """Balances of all accounts of one type."""

    account_type: str
    total: Decimal
    accounts: tuple[AccountBalance, ...] = field(default_factory=tuple)
