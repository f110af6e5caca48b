"""
Shared fixtures for the HTTP API tests.

Each test gets its own SQLite document store under tmp_path, injected
through FastAPI's dependency overrides.
"""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from personal_library.api.v1.dependencies import (
    get_book_service,
    get_document_store,
    get_read_book_service,
)
from personal_library.domain.errors import StorageError
from personal_library.domain.services import BookService, ReadBookService
from personal_library.infrastructure.db import (
    DocumentBookRepository,
    DocumentReadBookRepository,
    SqliteDocumentStore,
)
from personal_library.main import app


@pytest.fixture
def store(tmp_path):
    return SqliteDocumentStore(tmp_path / "api_test.db")


@pytest.fixture
def client(store):
    book_service = BookService(DocumentBookRepository(store, "books"))
    read_book_service = ReadBookService(DocumentReadBookRepository(store, "read_books"))

    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_book_service] = lambda: book_service
    app.dependency_overrides[get_read_book_service] = lambda: read_book_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def failing_client():
    """Client whose repositories fail every call with a storage error."""
    failure = StorageError("find in books: deadline of 5.0s exceeded")
    book_repo = Mock()
    read_book_repo = Mock()
    for repo in (book_repo, read_book_repo):
        for method in ("create", "get_by_id", "update", "delete", "get_all", "add_comment"):
            getattr(repo, method).side_effect = failure

    app.dependency_overrides[get_book_service] = lambda: BookService(book_repo)
    app.dependency_overrides[get_read_book_service] = lambda: ReadBookService(read_book_repo)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
