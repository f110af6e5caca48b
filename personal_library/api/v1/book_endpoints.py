"""
API endpoints for Book records.

Successful responses wrap the payload as {"data": ...}; errors are rendered
as {"message": ...} by the application's HTTPException handler.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from personal_library.api.v1 import schemas as api
from personal_library.api.v1.converters import api_book_to_domain, domain_book_to_api
from personal_library.api.v1.dependencies import get_book_service
from personal_library.domain.errors import (
    EntityNotFoundError,
    InvalidBookDataError,
    InvalidIdentifierError,
    StorageError,
)
from personal_library.domain.services import BookService

logger = logging.getLogger(__name__)
router = APIRouter()

BOOK_NOT_FOUND = "Book not found"
INTERNAL_ERROR = "Internal server error"


@router.post(
    "/books",
    status_code=status.HTTP_201_CREATED,
    response_model=api.BookEnvelope,
    responses={400: {"model": api.ErrorResponse}, 500: {"model": api.ErrorResponse}},
)
def create_book(
    request: api.BookRequest,
    service: BookService = Depends(get_book_service),
) -> api.BookEnvelope:
    """
    Add a new book to the library.

    Returns:
        The created book, including its generated id
    """
    try:
        book = service.create_book(api_book_to_domain(request))
    except InvalidBookDataError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError:
        logger.exception("Failed to create book")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create book",
        )

    return api.BookEnvelope(data=domain_book_to_api(book))


@router.get("/books", response_model=api.BookListEnvelope)
def list_books(
    service: BookService = Depends(get_book_service),
) -> api.BookListEnvelope:
    """Retrieve all books from the library."""
    try:
        books = service.list_books()
    except StorageError:
        logger.exception("Failed to list books")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR
        )

    return api.BookListEnvelope(data=[domain_book_to_api(b) for b in books])


@router.get(
    "/books/{book_id}",
    response_model=api.BookEnvelope,
    responses={404: {"model": api.ErrorResponse}},
)
def get_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> api.BookEnvelope:
    """
    Get a book by its identifier.

    Raises:
        404: Book not found (malformed ids included)
    """
    try:
        book = service.get_book(book_id)
    except (EntityNotFoundError, InvalidIdentifierError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=BOOK_NOT_FOUND)
    except StorageError:
        logger.exception(f"Failed to fetch book {book_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR
        )

    return api.BookEnvelope(data=domain_book_to_api(book))


@router.put(
    "/books/{book_id}",
    response_model=api.BookEnvelope,
    responses={400: {"model": api.ErrorResponse}, 404: {"model": api.ErrorResponse}},
)
def update_book(
    book_id: str,
    request: api.BookRequest,
    service: BookService = Depends(get_book_service),
) -> api.BookEnvelope:
    """Replace every field of a book except its id."""
    try:
        book = service.update_book(api_book_to_domain(request, book_id=book_id))
    except InvalidBookDataError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (EntityNotFoundError, InvalidIdentifierError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=BOOK_NOT_FOUND)
    except StorageError:
        logger.exception(f"Failed to update book {book_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR
        )

    return api.BookEnvelope(data=domain_book_to_api(book))


@router.delete(
    "/books/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": api.ErrorResponse}},
)
def delete_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> Response:
    """Remove a book from the library."""
    try:
        service.delete_book(book_id)
    except (EntityNotFoundError, InvalidIdentifierError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=BOOK_NOT_FOUND)
    except StorageError:
        logger.exception(f"Failed to delete book {book_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
