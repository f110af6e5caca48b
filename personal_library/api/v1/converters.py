"""
Converters between domain entities and API schemas.

This module centralizes all conversion logic between the domain layer
and the API layer.
"""

from dataclasses import asdict

from personal_library.domain import entities as domain
from personal_library.api.v1 import schemas as api


def api_book_to_domain(request: api.BookRequest, book_id: str = "") -> domain.Book:
    """
    Convert a Book request body to a domain Book.

    Args:
        request: Decoded request body
        book_id: Identifier from the path, empty for creates

    Returns:
        Domain Book entity (the body's own id is discarded)
    """
    return domain.Book(
        id=book_id,
        title=request.title,
        subtitle=request.subtitle,
        author=request.author,
        pages=request.pages,
        publisher=request.publisher,
        comments=request.comments,
    )


def domain_book_to_api(book: domain.Book) -> api.Book:
    return api.Book(**asdict(book))


def api_read_book_to_domain(
    request: api.ReadBookRequest, read_book_id: str = ""
) -> domain.ReadBook:
    """Convert a ReadBook request body to a domain ReadBook."""
    return domain.ReadBook(
        id=read_book_id,
        book_id=request.book_id,
        start_date=request.start_date,
        expected_end_date=request.expected_end_date,
        actual_end_date=request.actual_end_date,
        rating=request.rating,
        comments=list(request.comments),
    )


def domain_read_book_to_api(read_book: domain.ReadBook) -> api.ReadBook:
    return api.ReadBook(**asdict(read_book))
