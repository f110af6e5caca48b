"""
Document store implementation of the ReadBookRepository port.

Timestamps are stored as ISO-8601 strings. Comments are a JSON array inside
the document and grow through the store's atomic push, never by rewriting
the whole record.
"""

from datetime import datetime
from typing import List, Optional

from personal_library.domain.entities import ReadBook
from personal_library.domain.errors import (
    EntityNotFoundError,
    InvalidIdentifierError,
    StorageError,
)
from personal_library.domain.ports import ReadBookRepository
from personal_library.domain.utils import new_id, parse_id
from personal_library.infrastructure.db.document_store import (
    Document,
    SqliteDocumentStore,
)

ENTITY_NAME = "read book"


def _format_date(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise StorageError(f"invalid timestamp in read book document: {value!r}") from e


class DocumentReadBookRepository(ReadBookRepository):
    """Stores reading records in their own document collection."""

    def __init__(
        self, store: SqliteDocumentStore, collection_name: str = "read_books"
    ) -> None:
        self._collection = store.collection(collection_name)

    def _read_book_to_document(self, read_book: ReadBook) -> Document:
        """Convert a ReadBook entity to a stored document."""
        return {
            "id": read_book.id,
            "book_id": read_book.book_id,
            "start_date": _format_date(read_book.start_date),
            "expected_end_date": _format_date(read_book.expected_end_date),
            "actual_end_date": _format_date(read_book.actual_end_date),
            "rating": read_book.rating,
            "comments": list(read_book.comments),
        }

    def _document_to_read_book(self, document: Document) -> ReadBook:
        """Convert a stored document to a ReadBook entity."""
        try:
            start_date = _parse_date(document["start_date"])
            return ReadBook(
                id=document["id"],
                book_id=document["book_id"],
                start_date=start_date,
                expected_end_date=_parse_date(document.get("expected_end_date")),
                actual_end_date=_parse_date(document.get("actual_end_date")),
                rating=document.get("rating"),
                comments=list(document.get("comments") or []),
            )
        except KeyError as e:
            raise StorageError(f"read book document is missing field {e}") from e

    def _check_id(self, read_book_id: str) -> str:
        try:
            parse_id(read_book_id)
        except ValueError as e:
            raise InvalidIdentifierError(read_book_id) from e
        return read_book_id

    def create(self, read_book: ReadBook) -> None:
        """Persist a new reading record under a freshly generated id."""
        read_book.id = new_id()
        self._collection.insert_one(self._read_book_to_document(read_book))

    def get_by_id(self, read_book_id: str) -> ReadBook:
        document = self._collection.find_one(self._check_id(read_book_id))
        if document is None:
            raise EntityNotFoundError(ENTITY_NAME, read_book_id)
        return self._document_to_read_book(document)

    def update(self, read_book: ReadBook) -> None:
        """Fully replace the stored record, comments included."""
        read_book_id = self._check_id(read_book.id)
        document = self._read_book_to_document(read_book)
        if not self._collection.replace_one(read_book_id, document):
            raise EntityNotFoundError(ENTITY_NAME, read_book_id)

    def delete(self, read_book_id: str) -> None:
        if not self._collection.delete_one(self._check_id(read_book_id)):
            raise EntityNotFoundError(ENTITY_NAME, read_book_id)

    def get_all(self) -> List[ReadBook]:
        return [
            self._document_to_read_book(doc) for doc in self._collection.find_all()
        ]

    def add_comment(self, read_book_id: str, comment: str) -> None:
        """Append a comment atomically at the end of the comment log."""
        if not self._collection.push(self._check_id(read_book_id), "comments", comment):
            raise EntityNotFoundError(ENTITY_NAME, read_book_id)
