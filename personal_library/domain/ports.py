"""
Port interfaces (protocols) for the domain layer.

Ports define the contracts between the domain and the infrastructure
layers. The services depend only on these protocols, so the document store
can be swapped for another engine or an in-memory fake in tests.
"""

from typing import List, Protocol

from .entities import Book, ReadBook


class BookRepository(Protocol):
    """
    Port for persisting and retrieving Book entities.

    Every operation runs under the store's per-operation deadline. Failures
    of the store itself surface as StorageError.
    """

    def create(self, book: Book) -> None:
        """
        Persist a new book.

        A fresh identifier is assigned to ``book.id``, overwriting any value
        supplied by the caller.

        Raises:
            StorageError: If the store rejects or times out the insert
        """
        ...

    def get_by_id(self, book_id: str) -> Book:
        """
        Retrieve a book by its identifier.

        Raises:
            InvalidIdentifierError: If ``book_id`` is malformed
            EntityNotFoundError: If no book has this identifier
            StorageError: If the store fails
        """
        ...

    def update(self, book: Book) -> None:
        """
        Replace every mutable field of the stored book matched by ``book.id``.

        Raises:
            InvalidIdentifierError: If ``book.id`` is malformed
            EntityNotFoundError: If no book has this identifier
            StorageError: If the store fails
        """
        ...

    def delete(self, book_id: str) -> None:
        """
        Remove a book.

        Raises:
            InvalidIdentifierError: If ``book_id`` is malformed
            EntityNotFoundError: If nothing was removed
            StorageError: If the store fails
        """
        ...

    def get_all(self) -> List[Book]:
        """
        Retrieve every book, in store order. An empty catalog yields [].

        Raises:
            StorageError: If the store fails
        """
        ...


class ReadBookRepository(Protocol):
    """
    Port for persisting and retrieving ReadBook entities.

    Same contract as BookRepository, plus an atomic comment append.
    """

    def create(self, read_book: ReadBook) -> None:
        """Persist a new reading record, assigning ``read_book.id``."""
        ...

    def get_by_id(self, read_book_id: str) -> ReadBook:
        """Retrieve a reading record, raising EntityNotFoundError if absent."""
        ...

    def update(self, read_book: ReadBook) -> None:
        """Fully replace the stored record matched by ``read_book.id``."""
        ...

    def delete(self, read_book_id: str) -> None:
        """Remove a reading record, raising EntityNotFoundError if absent."""
        ...

    def get_all(self) -> List[ReadBook]:
        """Retrieve every reading record, in store order."""
        ...

    def add_comment(self, read_book_id: str, comment: str) -> None:
        """
        Append a comment to the end of the record's comment log.

        The append happens inside the store, so concurrent appends are never
        lost to a read-modify-write race.

        Raises:
            InvalidIdentifierError: If ``read_book_id`` is malformed
            EntityNotFoundError: If no record has this identifier
            StorageError: If the store fails
        """
        ...
