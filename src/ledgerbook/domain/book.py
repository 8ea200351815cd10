"""Book and tag domain service."""

from typing import TYPE_CHECKING, Optional, Union

from ledgerbook.domain.entities import Book, Tag
from ledgerbook.domain.errors import NotFoundError, book_not_found

if TYPE_CHECKING:
    from ledgerbook.client.base import LedgerBackend


class BookService:
    """Service for books and the tags defined in them."""

    def __init__(self, backend: "LedgerBackend"):
        """Initialize book service.

        Args:
            backend: Remote ledger service
        """
        self.backend = backend

    def list_books(self) -> list[Book]:
        """List the books the current user owns."""
        return self.backend.list_books()

    def resolve_book(self, book: Optional[Union[str, int]] = None) -> Book:
        """Resolve a book name or ID.

        With no book given, the first book of the user is used.

        Raises:
            NotFoundError: If the user has no books or no book matches
        """
        books = self.backend.list_books()
        if book is None:
            if not books:
                raise NotFoundError("No books found")
            return books[0]

        key = str(book).strip()
        for candidate in books:
            if str(candidate.id) == key:
                return candidate
        for candidate in books:
            if candidate.name == key:
                return candidate
        raise NotFoundError(book_not_found(key))

    def list_tags(self, book_id: int) -> list[Tag]:
        """List the tags of a book."""
        return self.backend.list_tags(book_id)

    def resolve_tag(self, tags: list[Tag], tag: Union[str, int]) -> Tag:
        """Resolve a tag name or ID within a tag list.

        Raises:
            NotFoundError: If no tag matches
        """
        key = str(tag).strip()
        for candidate in tags:
            if str(candidate.id) == key or candidate.name == key:
                return candidate
        raise NotFoundError(f"Tag '{key}' not found")
