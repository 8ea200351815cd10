"""Shared domain error messages and error types."""

from decimal import Decimal
from enum import Enum
from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class AccountCycleError(DomainError):
    """The account list contains a parent cycle."""

    def __init__(self, account_ids: Iterable[str]):
        self.account_ids = tuple(account_ids)
        super().__init__(
            "Account hierarchy contains a cycle: " + " > ".join(self.account_ids)
        )


class SubmissionInProgressError(DomainError):
    """A submission is already in flight for this form."""

    def __init__(self) -> None:
        super().__init__("A transaction is already being submitted")


class ErrorKind(str, Enum):
    """Reason a transaction could not be built."""

    NO_BOOK = "NoBook"
    MISSING_ACCOUNT = "MissingAccount"
    INVALID_AMOUNT = "InvalidAmount"
    UNBALANCED = "Unbalanced"
    MINIMUM_ENTRIES = "MinimumEntries"


class BuildError(ValidationError):
    """A transaction draft failed validation.

    Every subclass sets ``kind`` so callers can branch without isinstance
    chains.
    """

    kind: ErrorKind


class NoBookError(BuildError):
    kind = ErrorKind.NO_BOOK

    def __init__(self) -> None:
        super().__init__("Please select a book first")


class MissingAccountError(BuildError):
    kind = ErrorKind.MISSING_ACCOUNT

    def __init__(self, roles: Iterable[str]):
        self.roles = tuple(roles)
        super().__init__(missing_account(self.roles))


class InvalidAmountError(BuildError):
    kind = ErrorKind.INVALID_AMOUNT

    def __init__(self, message: str = "Please enter a valid amount"):
        super().__init__(message)


class UnbalancedError(BuildError):
    kind = ErrorKind.UNBALANCED

    def __init__(self, debit_sum: Decimal, credit_sum: Decimal):
        self.debit_sum = debit_sum
        self.credit_sum = credit_sum
        super().__init__(unbalanced(debit_sum, credit_sum))


class MinimumEntriesError(BuildError):
    kind = ErrorKind.MINIMUM_ENTRIES

    def __init__(self, minimum: int):
        self.minimum = minimum
        super().__init__(f"At least {minimum} entries are required")


def account_not_found(account: str) -> str:
    """Return message for missing account."""
    return f"Account '{account}' not found"


def book_not_found(book: str) -> str:
    """Return message for missing book."""
    return f"Book '{book}' not found"


def missing_account(roles: tuple[str, ...]) -> str:
    """Return message naming the unselected account roles."""
    if not roles:
        return "Please select an account"
    if roles == ("entry",):
        return "Please select an account for every entry"
    return f"Please select the {' and '.join(roles)} account{'s' if len(roles) != 1 else ''}"


def unbalanced(debit_sum: Decimal, credit_sum: Decimal) -> str:
    """Return message for a debit/credit mismatch."""
    return f"Entries are not balanced: debit {debit_sum:.2f} != credit {credit_sum:.2f}"
