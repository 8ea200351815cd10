"""HTTP implementation of the ledger service interface."""

import json
import logging
from decimal import Decimal
from typing import Any, Optional

import httpx

from ledgerbook.client.base import LedgerBackend
from ledgerbook.client.errors import BackendError
from ledgerbook.client.mappers import (
    account_balances_to_domain,
    account_to_domain,
    book_to_domain,
    category_rank_to_domain,
    created_transaction_to_domain,
    monthly_statistics_to_domain,
    tag_statistics_to_domain,
    tag_to_domain,
    transaction_page_to_domain,
    transaction_request_to_payload,
    yearly_trend_to_domain,
)
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

logger = logging.getLogger(__name__)

STATISTICS_PATH = "/app/fin/transactions"


class HttpLedgerBackend(LedgerBackend):
    """Ledger service reached over its JSON REST API."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the HTTP backend.

        Args:
            base_url: Service root (e.g., 'http://localhost:9000')
            token: Optional bearer token sent with every request
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=self.base_url, headers=headers, timeout=timeout, transport=transport
        )

    def close(self) -> None:
        self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        payload: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Send a request and unwrap the service's response envelope.

        Raises:
            BackendError: On network failure, HTTP error or a non-200 result code
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("%s %s %s", method, path, query)
        try:
            response = self._client.request(method, path, params=query or None, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise BackendError(f"Could not reach ledger service: {exc}") from exc

        try:
            result = json.loads(response.text, parse_float=Decimal)
        except ValueError:
            raise BackendError(
                f"Invalid response from ledger service (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        if not isinstance(result, dict):
            raise BackendError("Invalid response from ledger service", status_code=response.status_code)

        if response.is_error or result.get("code") != 200:
            message = result.get("message") or "Request failed"
            logger.warning("%s %s rejected (HTTP %s): %s", method, path, response.status_code, message)
            raise BackendError(message, status_code=response.status_code, code=result.get("code"))

        return result.get("data")

    # Authentication
    def login(self, username: str, password: str) -> str:
        data = self._request("POST", "/auth/login", payload={"username": username, "password": password})
        return data["token"]

    # Book operations
    def list_books(self) -> list[Book]:
        data = self._request("GET", "/fin/books/my")
        return [book_to_domain(b) for b in data or []]

    # Account operations
    def list_accounts(self, book_id: int) -> list[Account]:
        data = self._request("GET", "/fin/accounts", params={"bookId": book_id})
        return [account_to_domain(a) for a in data or []]

    # Tag operations
    def list_tags(self, book_id: int) -> list[Tag]:
        data = self._request("GET", "/fin/tags", params={"bookId": book_id})
        return [tag_to_domain(t) for t in data or []]

    # Transaction operations
    def create_transaction(self, request: TransactionRequest) -> CreatedTransaction:
        data = self._request(
            "POST", "/fin/transactions/with-entries", payload=transaction_request_to_payload(request)
        )
        return created_transaction_to_domain(data)

    def get_transaction_details(self, query: TransactionQuery) -> TransactionPage:
        params = {
            "bookId": query.book_id,
            "startDate": query.start_date.isoformat() if query.start_date else None,
            "endDate": query.end_date.isoformat() if query.end_date else None,
            "pageNum": query.page_num,
            "pageSize": query.page_size,
        }
        data = self._request("GET", f"{STATISTICS_PATH}/details", params=params)
        return transaction_page_to_domain(data or {})

    # Statistics
    def get_monthly_statistics(
        self, book_id: int, year: Optional[int] = None, month: Optional[int] = None
    ) -> MonthlyStatistics:
        params = {"bookId": book_id, "year": year, "month": month}
        data = self._request("GET", f"{STATISTICS_PATH}/monthly-statistics", params=params)
        return monthly_statistics_to_domain(data or {})

    def get_yearly_trend(self, book_id: int, year: Optional[int] = None) -> YearlyTrend:
        data = self._request("GET", f"{STATISTICS_PATH}/yearly-trend", params={"bookId": book_id, "year": year})
        return yearly_trend_to_domain(data)

    def get_category_rank(
        self,
        book_id: int,
        account_type: Optional[AccountType] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> CategoryRank:
        params = {
            "bookId": book_id,
            "type": account_type.value if account_type else None,
            "year": year,
            "month": month,
        }
        data = self._request("GET", f"{STATISTICS_PATH}/category-rank", params=params)
        return category_rank_to_domain(data or {})

    def get_tag_statistics(
        self, book_id: int, year: Optional[int] = None, month: Optional[int] = None
    ) -> TagStatistics:
        params = {"bookId": book_id, "year": year, "month": month}
        data = self._request("GET", f"{STATISTICS_PATH}/tag-statistics", params=params)
        return tag_statistics_to_domain(data or {})

    def get_account_balances(
        self, book_id: int, account_type: Optional[AccountType] = None
    ) -> AccountBalances:
        params = {"bookId": book_id, "accountType": account_type.value if account_type else None}
        data = self._request("GET", f"{STATISTICS_PATH}/account-balances", params=params)
        return account_balances_to_domain(data or {})
