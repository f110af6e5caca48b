"""
Document store implementation of the BookRepository port.

Books live in their own collection, one JSON document per book. The
identifier is a UUIDv7 string assigned here on create; strings that are not
UUIDs are rejected as malformed before the store is queried.
"""

from typing import List

from personal_library.domain.entities import Book
from personal_library.domain.errors import (
    EntityNotFoundError,
    InvalidIdentifierError,
    StorageError,
)
from personal_library.domain.ports import BookRepository
from personal_library.domain.utils import new_id, parse_id
from personal_library.infrastructure.db.document_store import (
    Document,
    SqliteDocumentStore,
)

ENTITY_NAME = "book"


class DocumentBookRepository(BookRepository):
    """Stores books in a document collection of the shared store."""

    def __init__(self, store: SqliteDocumentStore, collection_name: str = "books") -> None:
        """
        Initialize the repository.

        Args:
            store: Shared document store handle
            collection_name: Collection holding book documents
        """
        self._collection = store.collection(collection_name)

    def _book_to_document(self, book: Book) -> Document:
        """Convert a Book entity to a stored document."""
        return {
            "id": book.id,
            "title": book.title,
            "subtitle": book.subtitle,
            "author": book.author,
            "pages": book.pages,
            "publisher": book.publisher,
            "comments": book.comments,
        }

    def _document_to_book(self, document: Document) -> Book:
        """Convert a stored document to a Book entity."""
        try:
            return Book(
                id=document["id"],
                title=document["title"],
                subtitle=document.get("subtitle", ""),
                author=document["author"],
                pages=document["pages"],
                publisher=document.get("publisher", ""),
                comments=document.get("comments", ""),
            )
        except KeyError as e:
            raise StorageError(f"book document is missing field {e}") from e

    def _check_id(self, book_id: str) -> str:
        try:
            parse_id(book_id)
        except ValueError as e:
            raise InvalidIdentifierError(book_id) from e
        return book_id

    def create(self, book: Book) -> None:
        """Persist a new book under a freshly generated id."""
        book.id = new_id()
        self._collection.insert_one(self._book_to_document(book))

    def get_by_id(self, book_id: str) -> Book:
        """Retrieve a book by id."""
        document = self._collection.find_one(self._check_id(book_id))
        if document is None:
            raise EntityNotFoundError(ENTITY_NAME, book_id)
        return self._document_to_book(document)

    def update(self, book: Book) -> None:
        """Overwrite every field of the stored book except its id."""
        book_id = self._check_id(book.id)
        if not self._collection.replace_one(book_id, self._book_to_document(book)):
            raise EntityNotFoundError(ENTITY_NAME, book_id)

    def delete(self, book_id: str) -> None:
        """Delete a book; EntityNotFoundError if nothing was removed."""
        if not self._collection.delete_one(self._check_id(book_id)):
            raise EntityNotFoundError(ENTITY_NAME, book_id)

    def get_all(self) -> List[Book]:
        """Retrieve all books in store order."""
        return [self._document_to_book(doc) for doc in self._collection.find_all()]
