"""Transaction builder, validator and submission service."""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional

from ledgerbook.domain.account import AccountDirectory
from ledgerbook.domain.draft import (
    AdvancedDraft,
    EntryRow,
    Mode,
    QuickDraft,
    TransactionForm,
)
from ledgerbook.domain.entities import (
    CreatedTransaction,
    Direction,
    Entry,
    TransactionPage,
    TransactionQuery,
    TransactionRequest,
)
from ledgerbook.domain.errors import (
    InvalidAmountError,
    MissingAccountError,
    NoBookError,
    SubmissionInProgressError,
    UnbalancedError,
)
from ledgerbook.utils.amount_parser import parse_amount, quantize_amount, to_cents

if TYPE_CHECKING:
    from ledgerbook.client.base import LedgerBackend

logger = logging.getLogger(__name__)

# Labels used when the user leaves the description blank
DEFAULT_DESCRIPTIONS = {
    Mode.EXPENSE: "日常支出",
    Mode.INCOME: "收入",
    Mode.TRANSFER: "转账",
    Mode.ADVANCED: "复式记账",
}


@dataclass(frozen=True)
class BalanceStatus:
    """Live debit/credit totals of an advanced draft."""

    debit_sum: Decimal
    credit_sum: Decimal
    balanced: bool

    @property
    def difference(self) -> Decimal:
        return self.debit_sum - self.credit_sum


def _positive_amount(text: Optional[str], message: str) -> Decimal:
    """Parse user input into a positive amount rounded to cents."""
    try:
        amount = quantize_amount(parse_amount(text))
    except ValueError:
        raise InvalidAmountError(message)
    if amount <= 0:
        raise InvalidAmountError(message)
    return amount


def _lenient_cents(text: str) -> int:
    try:
        return to_cents(parse_amount(text))
    except ValueError:
        return 0


def _build_quick(draft: QuickDraft) -> list[Entry]:
    amount = _positive_amount(draft.amount, "Please enter a valid amount")

    missing = draft.missing_roles()
    if missing:
        raise MissingAccountError(missing)

    return [
        Entry(draft.account_for(draft.debit_role), Direction.DEBIT, amount),
        Entry(draft.account_for(draft.credit_role), Direction.CREDIT, amount),
    ]


def _build_advanced(draft: AdvancedDraft) -> list[Entry]:
    rows = draft.entries

    # Every account is checked before any amount
    if any(row.account_id is None for row in rows):
        raise MissingAccountError(("entry",))

    amounts = [
        _positive_amount(row.amount, "Entry amounts must be positive numbers") for row in rows
    ]

    debit_cents = sum(to_cents(a) for a, row in zip(amounts, rows) if row.direction == Direction.DEBIT)
    credit_cents = sum(to_cents(a) for a, row in zip(amounts, rows) if row.direction == Direction.CREDIT)
    if debit_cents != credit_cents:
        raise UnbalancedError(
            Decimal(debit_cents).scaleb(-2), Decimal(credit_cents).scaleb(-2)
        )

    return [
        Entry(row.account_id, row.direction, amount, row.memo.strip() or None)
        for row, amount in zip(rows, amounts)
    ]


def build_entries(form: TransactionForm) -> list[Entry]:
    """Turn the form's current draft into balanced entries.

    Checks run in a fixed order and the first failure is raised: book,
    then (quick modes) amount and account roles, or (advanced mode) entry
    accounts, entry amounts and balance.

    Args:
        form: Transaction form

    Returns:
        Entries with amounts rounded to cents

    Raises:
        NoBookError: If no book is selected
        InvalidAmountError: If an amount is missing, unparsable or not positive
        MissingAccountError: If a required account is not selected
        UnbalancedError: If advanced debits and credits differ
    """
    if form.book_id is None:
        raise NoBookError()

    draft = form.draft
    if isinstance(draft, AdvancedDraft):
        return _build_advanced(draft)
    return _build_quick(draft)


def balance_status(rows: Iterable[EntryRow]) -> BalanceStatus:
    """Recompute debit/credit totals for display while the user types.

    Unparsable amounts count as zero. A draft with no amounts typed at all
    is never reported as balanced.
    """
    rows = list(rows)
    debit = sum(_lenient_cents(r.amount) for r in rows if r.direction == Direction.DEBIT)
    credit = sum(_lenient_cents(r.amount) for r in rows if r.direction == Direction.CREDIT)
    has_amount = any(r.amount.strip() for r in rows)
    return BalanceStatus(
        Decimal(debit).scaleb(-2), Decimal(credit).scaleb(-2), has_amount and debit == credit
    )


def auto_description(form: TransactionForm, directory: AccountDirectory) -> str:
    """Label a transaction from its selected accounts.

    Falls back to a generic label per mode when accounts are unresolved.
    """
    draft = form.draft
    if not isinstance(draft, QuickDraft):
        return DEFAULT_DESCRIPTIONS[Mode.ADVANCED]

    first = directory.name_of(draft.account_for(draft.roles[0]))
    second = directory.name_of(draft.account_for(draft.roles[1]))

    if draft.mode == Mode.TRANSFER:
        return f"{first} → {second}" if first and second else DEFAULT_DESCRIPTIONS[Mode.TRANSFER]
    if first and second:
        return f"{first} - {second}"
    return first or DEFAULT_DESCRIPTIONS[draft.mode]


def build_request(
    form: TransactionForm, directory: AccountDirectory, now: Optional[datetime] = None
) -> TransactionRequest:
    """Build the submission payload for a form.

    Raises:
        BuildError: If the form does not describe a valid transaction
    """
    entries = build_entries(form)
    description = form.description.strip() or auto_description(form, directory)
    transaction_date = form.transaction_date or (now or datetime.now()).replace(second=0, microsecond=0)
    return TransactionRequest(
        transaction_date=transaction_date,
        description=description,
        book_id=form.book_id,
        entries=tuple(entries),
        tag_ids=tuple(form.tag_ids),
    )


class TransactionService:
    """Service for submitting and browsing transactions."""

    def __init__(self, backend: "LedgerBackend"):
        """Initialize transaction service.

        Args:
            backend: Remote ledger service
        """
        self.backend = backend
        self.submitting = False

    def submit(self, form: TransactionForm, directory: AccountDirectory) -> CreatedTransaction:
        """Build and submit a transaction.

        The form is reset after the service accepts it and left untouched
        otherwise.

        Returns:
            Created transaction

        Raises:
            SubmissionInProgressError: If a submission is already in flight
            BuildError: If the form is invalid (nothing is sent)
            BackendError: If the service rejects the transaction
        """
        if self.submitting:
            raise SubmissionInProgressError()

        request = build_request(form, directory)

        self.submitting = True
        try:
            created = self.backend.create_transaction(request)
        finally:
            self.submitting = False

        logger.info(
            "Created transaction %s in book %s (%d entries)",
            created.id,
            request.book_id,
            len(request.entries),
        )
        form.reset()
        return created

    def list_transactions(self, query: TransactionQuery) -> TransactionPage:
        """Fetch one page of transaction history grouped by day."""
        return self.backend.get_transaction_details(query)
