"""
API endpoints for ReadBook (reading progress) records.

Unlike the book routes, successful responses return the record or list
as-is, without a {"data": ...} envelope.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import PlainTextResponse

from personal_library.api.v1 import schemas as api
from personal_library.api.v1.converters import (
    api_read_book_to_domain,
    domain_read_book_to_api,
)
from personal_library.api.v1.dependencies import get_read_book_service
from personal_library.domain.errors import (
    EntityNotFoundError,
    InvalidIdentifierError,
    InvalidReadBookDataError,
    StorageError,
)
from personal_library.domain.services import ReadBookService

logger = logging.getLogger(__name__)
router = APIRouter()

READ_BOOK_NOT_FOUND = "Read book not found"
INTERNAL_ERROR = "Internal server error"
COMMENT_ADDED = "Comment added successfully"


def _storage_failure(action: str) -> HTTPException:
    logger.exception(f"Failed to {action}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR
    )


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=READ_BOOK_NOT_FOUND)


@router.post(
    "/read_books",
    status_code=status.HTTP_201_CREATED,
    response_model=api.ReadBook,
    responses={400: {"model": api.ErrorResponse}},
)
def create_read_book(
    request: api.ReadBookRequest,
    service: ReadBookService = Depends(get_read_book_service),
) -> api.ReadBook:
    """Start tracking the reading of a book."""
    try:
        read_book = service.create_read_book(api_read_book_to_domain(request))
    except InvalidReadBookDataError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError:
        raise _storage_failure("create read book")

    return domain_read_book_to_api(read_book)


@router.get("/read_books", response_model=list[api.ReadBook])
def list_read_books(
    service: ReadBookService = Depends(get_read_book_service),
) -> list[api.ReadBook]:
    try:
        read_books = service.list_read_books()
    except StorageError:
        raise _storage_failure("list read books")

    return [domain_read_book_to_api(rb) for rb in read_books]


@router.get(
    "/read_books/{read_book_id}",
    response_model=api.ReadBook,
    responses={404: {"model": api.ErrorResponse}},
)
def get_read_book(
    read_book_id: str,
    service: ReadBookService = Depends(get_read_book_service),
) -> api.ReadBook:
    try:
        read_book = service.get_read_book(read_book_id)
    except (EntityNotFoundError, InvalidIdentifierError):
        raise _not_found()
    except StorageError:
        raise _storage_failure(f"fetch read book {read_book_id}")

    return domain_read_book_to_api(read_book)


@router.put(
    "/read_books/{read_book_id}",
    response_model=api.ReadBook,
    responses={400: {"model": api.ErrorResponse}, 404: {"model": api.ErrorResponse}},
)
def update_read_book(
    read_book_id: str,
    request: api.ReadBookRequest,
    service: ReadBookService = Depends(get_read_book_service),
) -> api.ReadBook:
    """Replace a reading record; the comment log is replaced too."""
    try:
        read_book = service.update_read_book(
            api_read_book_to_domain(request, read_book_id=read_book_id)
        )
    except InvalidReadBookDataError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (EntityNotFoundError, InvalidIdentifierError):
        raise _not_found()
    except StorageError:
        raise _storage_failure(f"update read book {read_book_id}")

    return domain_read_book_to_api(read_book)


@router.delete(
    "/read_books/{read_book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": api.ErrorResponse}},
)
def delete_read_book(
    read_book_id: str,
    service: ReadBookService = Depends(get_read_book_service),
) -> Response:
    try:
        service.delete_read_book(read_book_id)
    except (EntityNotFoundError, InvalidIdentifierError):
        raise _not_found()
    except StorageError:
        raise _storage_failure(f"delete read book {read_book_id}")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/read_books/{read_book_id}/comments",
    response_class=PlainTextResponse,
    responses={400: {"model": api.ErrorResponse}, 404: {"model": api.ErrorResponse}},
)
def add_comment(
    read_book_id: str,
    request: api.CommentRequest,
    service: ReadBookService = Depends(get_read_book_service),
) -> PlainTextResponse:
    """
    Append a comment to the reading log of the record named in the path.
    """
    try:
        service.add_comment(read_book_id, request.comment)
    except InvalidReadBookDataError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (EntityNotFoundError, InvalidIdentifierError):
        raise _not_found()
    except StorageError:
        raise _storage_failure(f"add comment to read book {read_book_id}")

    return PlainTextResponse(COMMENT_ADDED)
