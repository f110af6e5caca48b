"""
Tests for BookService and ReadBookService.

The services are exercised against in-memory fake repositories, so these
tests check orchestration only: validation runs before persistence and
every other call is forwarded unchanged.
"""

from datetime import datetime, timezone
from typing import Dict, List
from unittest.mock import Mock

import pytest

from personal_library.domain.entities import Book, ReadBook
from personal_library.domain.errors import (
    EntityNotFoundError,
    InvalidBookDataError,
    InvalidReadBookDataError,
    StorageError,
)
from personal_library.domain.services import BookService, ReadBookService
from personal_library.domain.utils import new_id


# =============================================================================
# Fake implementations for testing
# =============================================================================


class FakeBookRepository:
    """Dict-backed BookRepository."""

    def __init__(self):
        self.books: Dict[str, Book] = {}

    def create(self, book: Book) -> None:
        book.id = new_id()
        self.books[book.id] = Book(**vars(book))

    def get_by_id(self, book_id: str) -> Book:
        if book_id not in self.books:
            raise EntityNotFoundError("book", book_id)
        return Book(**vars(self.books[book_id]))

    def update(self, book: Book) -> None:
        if book.id not in self.books:
            raise EntityNotFoundError("book", book.id)
        self.books[book.id] = Book(**vars(book))

    def delete(self, book_id: str) -> None:
        if self.books.pop(book_id, None) is None:
            raise EntityNotFoundError("book", book_id)

    def get_all(self) -> List[Book]:
        return list(self.books.values())


class FakeReadBookRepository:
    """Dict-backed ReadBookRepository."""

    def __init__(self):
        self.records: Dict[str, ReadBook] = {}

    def create(self, read_book: ReadBook) -> None:
        read_book.id = new_id()
        self.records[read_book.id] = read_book

    def get_by_id(self, read_book_id: str) -> ReadBook:
        if read_book_id not in self.records:
            raise EntityNotFoundError("read book", read_book_id)
        return self.records[read_book_id]

    def update(self, read_book: ReadBook) -> None:
        if read_book.id not in self.records:
            raise EntityNotFoundError("read book", read_book.id)
        self.records[read_book.id] = read_book

    def delete(self, read_book_id: str) -> None:
        if self.records.pop(read_book_id, None) is None:
            raise EntityNotFoundError("read book", read_book_id)

    def get_all(self) -> List[ReadBook]:
        return list(self.records.values())

    def add_comment(self, read_book_id: str, comment: str) -> None:
        self.get_by_id(read_book_id).comments.append(comment)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def book_repo():
    return FakeBookRepository()


@pytest.fixture
def book_service(book_repo):
    return BookService(book_repo)


@pytest.fixture
def read_book_repo():
    return FakeReadBookRepository()


@pytest.fixture
def read_book_service(read_book_repo):
    return ReadBookService(read_book_repo)


@pytest.fixture
def dune():
    return Book(title="Dune", author="Frank Herbert", pages=412)


def make_read_book(**overrides) -> ReadBook:
    fields = {
        "book_id": new_id(),
        "start_date": datetime(2024, 3, 1, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return ReadBook(**fields)


# =============================================================================
# BookService
# =============================================================================


class TestBookServiceCreate:
    """Tests for BookService.create_book()."""

    def test_assigns_id(self, book_service, dune):
        created = book_service.create_book(dune)

        assert created.id
        assert created.title == "Dune"

    def test_ids_are_fresh_per_create(self, book_service):
        ids = {
            book_service.create_book(Book(title=f"Book {i}", author="A", pages=10)).id
            for i in range(20)
        }
        assert len(ids) == 20

    def test_caller_supplied_id_is_overwritten(self, book_service, dune):
        dune.id = "chosen-by-client"

        created = book_service.create_book(dune)

        assert created.id != "chosen-by-client"

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"title": " "}, "title is required"),
            ({"author": ""}, "author is required"),
            ({"pages": 0}, "pages must be greater than zero"),
        ],
    )
    def test_invalid_book_never_reaches_repository(self, overrides, message):
        repo = Mock()
        service = BookService(repo)
        fields = {"title": "Dune", "author": "Frank Herbert", "pages": 412}
        fields.update(overrides)

        with pytest.raises(InvalidBookDataError, match=message):
            service.create_book(Book(**fields))

        repo.create.assert_not_called()

    def test_storage_errors_propagate(self, dune):
        repo = Mock()
        repo.create.side_effect = StorageError("insert: deadline exceeded")

        with pytest.raises(StorageError):
            BookService(repo).create_book(dune)


class TestBookServiceReadUpdateDelete:
    """Tests for the remaining BookService operations."""

    def test_round_trip(self, book_service, dune):
        created = book_service.create_book(dune)

        fetched = book_service.get_book(created.id)

        assert fetched == created

    def test_update_replaces_fields(self, book_service, dune):
        created = book_service.create_book(dune)
        changed = Book(
            id=created.id, title="Dune Messiah", author="Frank Herbert", pages=256
        )

        book_service.update_book(changed)

        assert book_service.get_book(created.id).title == "Dune Messiah"

    def test_update_validates_before_repository(self):
        repo = Mock()
        with pytest.raises(InvalidBookDataError):
            BookService(repo).update_book(Book(id="x", title="", author="A", pages=1))
        repo.update.assert_not_called()

    def test_update_of_unknown_id_is_not_found(self, book_service):
        with pytest.raises(EntityNotFoundError):
            book_service.update_book(Book(id=new_id(), title="T", author="A", pages=1))

    def test_second_delete_is_not_found(self, book_service, dune):
        created = book_service.create_book(dune)

        book_service.delete_book(created.id)

        with pytest.raises(EntityNotFoundError):
            book_service.delete_book(created.id)

    def test_list_empty(self, book_service):
        assert book_service.list_books() == []

    def test_list_returns_created_books(self, book_service, dune):
        book_service.create_book(dune)
        book_service.create_book(Book(title="Emma", author="Jane Austen", pages=474))

        titles = sorted(b.title for b in book_service.list_books())

        assert titles == ["Dune", "Emma"]


# =============================================================================
# ReadBookService
# =============================================================================


class TestReadBookService:
    """Tests for ReadBookService."""

    def test_create_assigns_id(self, read_book_service):
        created = read_book_service.create_read_book(make_read_book())
        assert created.id

    def test_create_does_not_check_that_book_exists(self, read_book_service):
        created = read_book_service.create_read_book(make_read_book(book_id="no-such-book"))
        assert created.book_id == "no-such-book"

    def test_create_rejects_blank_book_id(self):
        repo = Mock()
        with pytest.raises(InvalidReadBookDataError, match="book_id is required"):
            ReadBookService(repo).create_read_book(make_read_book(book_id=""))
        repo.create.assert_not_called()

    def test_update_rejects_zero_start_date(self):
        repo = Mock()
        with pytest.raises(InvalidReadBookDataError, match="start_date is required"):
            ReadBookService(repo).update_read_book(
                make_read_book(id=new_id(), start_date=datetime.min)
            )
        repo.update.assert_not_called()

    def test_comments_keep_insertion_order(self, read_book_service):
        created = read_book_service.create_read_book(make_read_book())

        read_book_service.add_comment(created.id, "a")
        read_book_service.add_comment(created.id, "b")

        assert read_book_service.get_read_book(created.id).comments == ["a", "b"]

    def test_blank_comment_is_rejected(self):
        repo = Mock()
        with pytest.raises(InvalidReadBookDataError, match="comment is required"):
            ReadBookService(repo).add_comment(new_id(), "   ")
        repo.add_comment.assert_not_called()

    def test_comment_on_unknown_record_is_not_found(self, read_book_service):
        with pytest.raises(EntityNotFoundError):
            read_book_service.add_comment(new_id(), "great book")

    def test_delete_then_get_is_not_found(self, read_book_service):
        created = read_book_service.create_read_book(make_read_book())

        read_book_service.delete_read_book(created.id)

        with pytest.raises(EntityNotFoundError):
            read_book_service.get_read_book(created.id)

    def test_list_forwards_repository_result(self, read_book_service):
        read_book_service.create_read_book(make_read_book())
        assert len(read_book_service.list_read_books()) == 1
