"""
Domain services for the personal library.

Services orchestrate validation and persistence for each entity kind. They
depend only on the repository ports, never on a concrete store, and contain
no cross-entity logic: a ReadBook may reference a book id that does not
exist.
"""

import logging
from typing import List

from .entities import Book, ReadBook
from .errors import InvalidReadBookDataError
from .ports import BookRepository, ReadBookRepository
from .validation import validate_book, validate_read_book

logger = logging.getLogger(__name__)


class BookService:
    """
    Use cases for Book records.

    Validation runs before every create and update, so an invalid book never
    reaches the repository. Everything else is forwarded unchanged.
    """

    def __init__(self, repository: BookRepository) -> None:
        """
        Initialize the service.

        Args:
            repository: Port used to persist books
        """
        self._repository = repository

    def create_book(self, book: Book) -> Book:
        """
        Validate and persist a new book.

        Returns:
            The same book, now carrying its generated id

        Raises:
            InvalidBookDataError: If the book fails validation
            StorageError: If persistence fails
        """
        validate_book(book)
        self._repository.create(book)
        logger.info(f"Created book {book.id} ('{book.title}')")
        return book

    def get_book(self, book_id: str) -> Book:
        """Fetch a book by id."""
        logger.debug(f"Fetching book {book_id}")
        return self._repository.get_by_id(book_id)

    def update_book(self, book: Book) -> Book:
        """
        Validate and fully replace a stored book.

        Raises:
            InvalidBookDataError: If the book fails validation
            EntityNotFoundError: If ``book.id`` matches nothing
        """
        validate_book(book)
        self._repository.update(book)
        logger.info(f"Updated book {book.id}")
        return book

    def delete_book(self, book_id: str) -> None:
        """Delete a book by id."""
        self._repository.delete(book_id)
        logger.info(f"Deleted book {book_id}")

    def list_books(self) -> List[Book]:
        """Return every book in the catalog."""
        return self._repository.get_all()


class ReadBookService:
    """
    Use cases for ReadBook records.

    Create and update check the required fields (book_id, start_date) and the
    rating range; the referenced book is not looked up.
    """

    def __init__(self, repository: ReadBookRepository) -> None:
        self._repository = repository

    def create_read_book(self, read_book: ReadBook) -> ReadBook:
        """Validate and persist a new reading record."""
        validate_read_book(read_book)
        self._repository.create(read_book)
        logger.info(f"Created read book {read_book.id} for book {read_book.book_id}")
        return read_book

    def get_read_book(self, read_book_id: str) -> ReadBook:
        logger.debug(f"Fetching read book {read_book_id}")
        return self._repository.get_by_id(read_book_id)

    def update_read_book(self, read_book: ReadBook) -> ReadBook:
        """Validate and fully replace a stored reading record."""
        validate_read_book(read_book)
        self._repository.update(read_book)
        logger.info(f"Updated read book {read_book.id}")
        return read_book

    def delete_read_book(self, read_book_id: str) -> None:
        self._repository.delete(read_book_id)
        logger.info(f"Deleted read book {read_book_id}")

    def list_read_books(self) -> List[ReadBook]:
        return self._repository.get_all()

    def add_comment(self, read_book_id: str, comment: str) -> None:
        """
        Append one comment to a reading record's log.

        Raises:
            InvalidReadBookDataError: If the comment is blank
            EntityNotFoundError: If the record does not exist
        """
        if not comment or not comment.strip():
            raise InvalidReadBookDataError("comment is required")
        self._repository.add_comment(read_book_id, comment)
        logger.info(f"Added comment to read book {read_book_id}")
