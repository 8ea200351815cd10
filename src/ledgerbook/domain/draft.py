"""In-progress transaction drafts.

A form holds one draft per mode so switching modes never leaks selections
from one mode into another, and switching back to advanced mode finds its
entry list untouched.
"""

import itertools
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional, Union

from ledgerbook.domain.entities import Account, AccountId, Direction
from ledgerbook.domain.errors import MinimumEntriesError, ValidationError

MIN_ENTRIES = 2

_entry_keys = itertools.count(1)


class Mode(str, Enum):
    """Entry mode of the transaction form."""

    EXPENSE = "expense"
    INCOME = "income"
    TRANSFER = "transfer"
    ADVANCED = "advanced"


@dataclass
class QuickDraft:
    """Single amount moved between two accounts.

    Subclasses name their two account roles and which one is debited.
    """

    mode: ClassVar[Mode]
    roles: ClassVar[tuple[str, str]]
    debit_role: ClassVar[str]
    credit_role: ClassVar[str]

    amount: str = ""

    def account_for(self, role: str) -> Optional[AccountId]:
        return getattr(self, self._field(role))

    def select(self, role: str, account_id: Union[AccountId, int, str, None]) -> None:
        setattr(self, self._field(role), AccountId.of(account_id))

    def missing_roles(self) -> tuple[str, ...]:
        return tuple(role for role in self.roles if self.account_for(role) is None)

    def _field(self, role: str) -> str:
        if role not in self.roles:
            raise ValidationError(f"'{role}' is not an account role of {self.mode.value} mode")
        return f"{role}_account_id"


@dataclass
class ExpenseDraft(QuickDraft):
    mode: ClassVar[Mode] = Mode.EXPENSE
    roles: ClassVar[tuple[str, str]] = ("expense", "pay")
    debit_role: ClassVar[str] = "expense"
    credit_role: ClassVar[str] = "pay"

    expense_account_id: Optional[AccountId] = None
    pay_account_id: Optional[AccountId] = None


@dataclass
class IncomeDraft(QuickDraft):
    mode: ClassVar[Mode] = Mode.INCOME
    roles: ClassVar[tuple[str, str]] = ("income", "deposit")
    debit_role: ClassVar[str] = "deposit"
    credit_role: ClassVar[str] = "income"

    income_account_id: Optional[AccountId] = None
    deposit_account_id: Optional[AccountId] = None


@dataclass
class TransferDraft(QuickDraft):
    mode: ClassVar[Mode] = Mode.TRANSFER
    roles: ClassVar[tuple[str, str]] = ("from", "to")
    debit_role: ClassVar[str] = "to"
    credit_role: ClassVar[str] = "from"

    from_account_id: Optional[AccountId] = None
    to_account_id: Optional[AccountId] = None


@dataclass
class EntryRow:
    """Editable posting line of an advanced draft."""

    direction: Direction = Direction.DEBIT
    account_id: Optional[AccountId] = None
    account_name: str = ""
    amount: str = ""
    memo: str = ""
    key: str = field(default_factory=lambda: f"e_{next(_entry_keys)}")


def _default_rows() -> list[EntryRow]:
    return [EntryRow(direction=Direction.DEBIT), EntryRow(direction=Direction.CREDIT)]


@dataclass
class AdvancedDraft:
    """Free-form debit/credit lines, never fewer than two."""

    mode: ClassVar[Mode] = Mode.ADVANCED

    entries: list[EntryRow] = field(default_factory=_default_rows)

    def add_entry(self, direction: Direction = Direction.DEBIT) -> EntryRow:
        row = EntryRow(direction=direction)
        self.entries.append(row)
        return row

    def remove_entry(self, index: int) -> None:
        """Remove an entry.

        Raises:
            MinimumEntriesError: If removal would leave fewer than two entries
        """
        if len(self.entries) <= MIN_ENTRIES:
            raise MinimumEntriesError(MIN_ENTRIES)
        del self.entries[index]

    def update_entry(
        self,
        index: int,
        amount: Optional[str] = None,
        memo: Optional[str] = None,
        direction: Optional[Direction] = None,
    ) -> None:
        row = self.entries[index]
        if amount is not None:
            row.amount = amount
        if memo is not None:
            row.memo = memo
        if direction is not None:
            row.direction = Direction(direction)

    def flip_direction(self, index: int) -> None:
        row = self.entries[index]
        row.direction = row.direction.flipped()

    def select(self, index: int, account: Account) -> None:
        row = self.entries[index]
        row.account_id = account.id
        row.account_name = account.name


Draft = Union[ExpenseDraft, IncomeDraft, TransferDraft, AdvancedDraft]

DRAFT_TYPES: dict[Mode, type] = {
    Mode.EXPENSE: ExpenseDraft,
    Mode.INCOME: IncomeDraft,
    Mode.TRANSFER: TransferDraft,
    Mode.ADVANCED: AdvancedDraft,
}


def _fresh_drafts() -> dict[Mode, Draft]:
    return {mode: draft_type() for mode, draft_type in DRAFT_TYPES.items()}


@dataclass
class TransactionForm:
    """Everything the user has entered for one not-yet-submitted transaction."""

    book_id: Optional[int] = None
    mode: Mode = Mode.EXPENSE
    description: str = ""
    transaction_date: Optional[datetime] = None
    tag_ids: list[int] = field(default_factory=list)
    drafts: dict[Mode, Draft] = field(default_factory=_fresh_drafts)

    @property
    def draft(self) -> Draft:
        return self.drafts[self.mode]

    @property
    def advanced(self) -> AdvancedDraft:
        return self.drafts[Mode.ADVANCED]

    def switch_mode(self, mode: Union[Mode, str]) -> Draft:
        self.mode = Mode(mode)
        return self.draft

    def toggle_tag(self, tag_id: int) -> None:
        if tag_id in self.tag_ids:
            self.tag_ids.remove(tag_id)
        else:
            self.tag_ids.append(tag_id)

    def set_amount(self, amount: str) -> None:
        draft = self.draft
        if not isinstance(draft, QuickDraft):
            raise ValidationError("Advanced mode amounts are entered per entry")
        draft.amount = amount

    def select_account(self, role: str, account: Union[Account, AccountId, int, str]) -> None:
        """Select the account for a role of the current quick-mode draft."""
        draft = self.draft
        if not isinstance(draft, QuickDraft):
            raise ValidationError("Use entry indexes to select accounts in advanced mode")
        draft.select(role, account.id if isinstance(account, Account) else account)

    def reset(self) -> None:
        """Clear entered values, keeping the book, mode and date."""
        self.description = ""
        self.tag_ids = []
        self.drafts = _fresh_drafts()
