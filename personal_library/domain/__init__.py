"""
Domain layer - entities, validation rules, ports and services.

This layer has NO dependencies on web frameworks or storage engines.
"""

from .entities import Book, ReadBook
from .errors import (
    EntityNotFoundError,
    InvalidBookDataError,
    InvalidIdentifierError,
    InvalidReadBookDataError,
    LibraryError,
    StorageError,
)
from .services import BookService, ReadBookService

__all__ = [
    # Entities
    "Book",
    "ReadBook",
    # Errors
    "LibraryError",
    "InvalidBookDataError",
    "InvalidReadBookDataError",
    "InvalidIdentifierError",
    "EntityNotFoundError",
    "StorageError",
    # Services
    "BookService",
    "ReadBookService",
]
