"""Mapper functions between service payloads and domain entities.

This layer isolates the wire format (camelCase keys, array timestamps,
numbers-or-strings for ids) from the domain model.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from dateutil import parser as date_parser

from ledgerbook.domain import entities as domain

# Ids with this many digits or more travel as strings to keep their precision
SAFE_ID_DIGITS = 16


def _decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


def _timestamp(value: Any) -> Optional[datetime]:
    """Parse a timestamp sent either as ISO text or as [y, m, d, h, mi, s]."""
    if value is None or value == "":
        return None
    if isinstance(value, (list, tuple)):
        parts = [int(p) for p in value[:6]]
        while len(parts) < 3:
            parts.append(1)
        return datetime(*parts)
    return date_parser.parse(str(value))


def _date(value: Any) -> Optional[date]:
    stamp = _timestamp(value)
    return stamp.date() if stamp is not None else None


def wire_id(account_id: domain.AccountId) -> int | str:
    """Send short numeric ids as numbers and everything else as strings."""
    if account_id.isdigit() and len(account_id) < SAFE_ID_DIGITS:
        return int(account_id)
    return str(account_id)


def wire_timestamp(value: datetime) -> list[int]:
    return [value.year, value.month, value.day, value.hour, value.minute, value.second]


def book_to_domain(data: dict) -> domain.Book:
    """Convert a book payload to a domain Book entity."""
    return domain.Book(
        id=data["id"],
        name=data["name"],
        description=data.get("description"),
        owner_id=data.get("ownerId"),
        default_currency=data.get("defaultCurrency"),
        cover_url=data.get("coverUrl"),
        created_at=_timestamp(data.get("createdAt")),
        updated_at=_timestamp(data.get("updatedAt")),
    )


def account_to_domain(data: dict) -> domain.Account:
    """Convert an account payload to a domain Account entity."""
    return domain.Account(
        id=domain.AccountId.of(data["id"]),
        name=data["name"],
        account_type=domain.AccountType(data["accountType"]),
        parent_id=domain.AccountId.of(data.get("parentId")),
        full_name=data.get("fullName"),
        icon=data.get("icon"),
        level=data.get("level"),
    )


def tag_to_domain(data: dict) -> domain.Tag:
    """Convert a tag payload to a domain Tag entity."""
    return domain.Tag(
        id=data["id"],
        name=data.get("tagName") or data.get("name", ""),
        color=data.get("color"),
        icon=data.get("icon"),
    )


def transaction_request_to_payload(request: domain.TransactionRequest) -> dict:
    """Convert a built transaction into the creation request body."""
    entries = []
    for entry in request.entries:
        item = {
            "accountId": wire_id(entry.account_id),
            "direction": entry.direction.value,
            "amount": entry.amount_str,
        }
        if entry.memo:
            item["memo"] = entry.memo
        entries.append(item)

    payload = {
        "transDate": wire_timestamp(request.transaction_date),
        "description": request.description,
        "bookId": request.book_id,
        "entries": entries,
    }
    if request.tag_ids:
        payload["tagIds"] = list(request.tag_ids)
    return payload


def created_transaction_to_domain(data: dict) -> domain.CreatedTransaction:
    return domain.CreatedTransaction(
        id=data["transId"],
        transaction_date=_timestamp(data.get("transDate")),
        description=data.get("description"),
    )


def _tag_info(data: dict) -> domain.TagInfo:
    return domain.TagInfo(
        id=data["tagId"],
        name=data.get("tagName", ""),
        color=data.get("color"),
        icon=data.get("icon"),
    )


def _transaction_item(data: dict) -> domain.TransactionItem:
    return domain.TransactionItem(
        id=data["transId"],
        transaction_date=_timestamp(data.get("transDate")),
        transaction_type=data.get("transType", "OTHER"),
        display_amount=_decimal(data.get("displayAmount")),
        description=data.get("description"),
        category_name=data.get("categoryName"),
        target_account_name=data.get("targetAccountName"),
        tags=tuple(_tag_info(t) for t in data.get("tags") or []),
    )


def transaction_page_to_domain(data: dict) -> domain.TransactionPage:
    """Convert a transaction details payload to a domain TransactionPage."""
    groups = tuple(
        domain.DailyGroup(
            date=_date(group["date"]),
            daily_income=_decimal(group.get("dailyIncome")),
            daily_expense=_decimal(group.get("dailyExpense")),
            transactions=tuple(_transaction_item(t) for t in group.get("transactions") or []),
        )
        for group in data.get("dailyGroups") or []
    )
    return domain.TransactionPage(
        daily_groups=groups,
        total=int(data.get("total") or 0),
        page_num=int(data.get("pageNum") or 1),
        page_size=int(data.get("pageSize") or 0),
    )


def monthly_statistics_to_domain(data: dict) -> domain.MonthlyStatistics:
    return domain.MonthlyStatistics(
        total_income=_decimal(data.get("totalIncome")),
        total_expense=_decimal(data.get("totalExpense")),
        balance=_decimal(data.get("balance")),
    )


def yearly_trend_to_domain(data: dict) -> domain.YearlyTrend:
    return domain.YearlyTrend(
        year=int(data["year"]),
        months=tuple(
            domain.MonthTrend(
                month=int(m["month"]),
                income=_decimal(m.get("income")),
                expense=_decimal(m.get("expense")),
                balance=_decimal(m.get("balance")),
            )
            for m in data.get("months") or []
        ),
    )


def category_rank_to_domain(data: dict) -> domain.CategoryRank:
    return domain.CategoryRank(
        type=data.get("type", ""),
        total=_decimal(data.get("total")),
        categories=tuple(
            domain.CategoryRankItem(
                account_id=domain.AccountId.of(c["accountId"]),
                account_name=c.get("accountName", ""),
                amount=_decimal(c.get("amount")),
                percentage=_decimal(c.get("percentage")),
            )
            for c in data.get("categories") or []
        ),
    )


def tag_statistics_to_domain(data: dict) -> domain.TagStatistics:
    return domain.TagStatistics(
        total=_decimal(data.get("total")),
        tags=tuple(
            domain.TagStatItem(
                tag_id=t["tagId"],
                tag_name=t.get("tagName", ""),
                amount=_decimal(t.get("amount")),
                count=int(t.get("count") or 0),
                percentage=_decimal(t.get("percentage")),
            )
            for t in data.get("tags") or []
        ),
    )


def account_balances_to_domain(data: dict) -> domain.AccountBalances:
    return domain.AccountBalances(
        account_type=data.get("accountType", ""),
        total=_decimal(data.get("total")),
        accounts=tuple(
            domain.AccountBalance(
                account_id=domain.AccountId.of(a["accountId"]),
                account_name=a.get("accountName", ""),
                balance=_decimal(a.get("balance")),
            )
            for a in data.get("accounts") or []
        ),
    )
