"""
Structural validation rules applied before anything is persisted.

These are pure functions: no I/O, no mutation. The first failing rule wins,
checked in the order title, author, pages.
"""

from datetime import datetime

from .entities import Book, ReadBook
from .errors import InvalidBookDataError, InvalidReadBookDataError

def validate_book(book: Book) -> None:
    """
    Check that a book can be persisted.

    Args:
        book: The book to check

    Raises:
        InvalidBookDataError: If the title or author is blank, or pages <= 0
    """
    if not book.title or not book.title.strip():
        raise InvalidBookDataError("title is required")
    if not book.author or not book.author.strip():
        raise InvalidBookDataError("author is required")
    if book.pages <= 0:
        raise InvalidBookDataError("pages must be greater than zero")


def validate_read_book(read_book: ReadBook) -> None:
    """
    Check the required fields of a reading record.

    Raises:
        InvalidReadBookDataError: If book_id is blank, start_date is unset
            or the zero timestamp
    """
    if not read_book.book_id or not read_book.book_id.strip():
        raise InvalidReadBookDataError("book_id is required")
    if read_book.start_date is None or _is_zero_time(read_book.start_date):
        raise InvalidReadBookDataError("start_date is required")


def _is_zero_time(value: datetime) -> bool:
    return value.replace(tzinfo=None) == datetime.min
