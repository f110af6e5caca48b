"""
FastAPI dependencies for dependency injection.

This module provides singleton instances of the document store,
repositories and services for use with FastAPI's Depends() system.
The store handle is created once and shared by both repositories.
"""

from pathlib import Path
from typing import Optional

from personal_library.config import get_settings
from personal_library.domain.ports import BookRepository, ReadBookRepository
from personal_library.domain.services import BookService, ReadBookService
from personal_library.infrastructure.db import (
    DocumentBookRepository,
    DocumentReadBookRepository,
    SqliteDocumentStore,
)

# Module-level singletons (initialized lazily)
_document_store: Optional[SqliteDocumentStore] = None
_book_repository: Optional[BookRepository] = None
_read_book_repository: Optional[ReadBookRepository] = None
_book_service: Optional[BookService] = None
_read_book_service: Optional[ReadBookService] = None


def get_document_store() -> SqliteDocumentStore:
    """Provide the process-wide document store handle."""
    global _document_store
    if _document_store is None:
        settings = get_settings()
        _document_store = SqliteDocumentStore(
            Path(settings.database_path),
            timeout=settings.store_timeout_seconds,
        )
    return _document_store


def get_book_repository() -> BookRepository:
    global _book_repository
    if _book_repository is None:
        _book_repository = DocumentBookRepository(
            get_document_store(), get_settings().books_collection
        )
    return _book_repository


def get_read_book_repository() -> ReadBookRepository:
    global _read_book_repository
    if _read_book_repository is None:
        _read_book_repository = DocumentReadBookRepository(
            get_document_store(), get_settings().read_books_collection
        )
    return _read_book_repository


def get_book_service() -> BookService:
    """Provide the Book service wired to its repository."""
    global _book_service
    if _book_service is None:
        _book_service = BookService(get_book_repository())
    return _book_service


def get_read_book_service() -> ReadBookService:
    """Provide the ReadBook service wired to its repository."""
    global _read_book_service
    if _read_book_service is None:
        _read_book_service = ReadBookService(get_read_book_repository())
    return _read_book_service


def reset_dependencies() -> None:
    """
    Reset all singletons. Useful for testing.

    The next call to any provider rebuilds the chain from the current
    settings.
    """
    global _document_store, _book_repository, _read_book_repository
    global _book_service, _read_book_service

    _document_store = None
    _book_repository = None
    _read_book_repository = None
    _book_service = None
    _read_book_service = None
