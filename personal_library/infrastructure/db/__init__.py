"""Document store adapters."""

from .book_repository import DocumentBookRepository
from .document_store import DocumentCollection, SqliteDocumentStore
from .read_book_repository import DocumentReadBookRepository

__all__ = [
    "SqliteDocumentStore",
    "DocumentCollection",
    "DocumentBookRepository",
    "DocumentReadBookRepository",
]
