"""
Request and response bodies of the HTTP API.

Request models forbid unknown fields so a misspelled key is reported
instead of silently dropped. An ``id`` in a request body is accepted for
client convenience but never used: the server assigns ids on create and
the path segment wins on update.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictInt, StrictStr


def _iso_string(value: Any) -> Any:
    # JSON has no timestamp type; numbers must not be read as epoch seconds
    if not isinstance(value, str):
        raise ValueError("timestamp must be an ISO-8601 string")
    return value


Timestamp = Annotated[datetime, BeforeValidator(_iso_string)]


class BookRequest(BaseModel):
    """
    Request body for POST /books and PUT /books/{id}.
    """
    model_config = ConfigDict(extra="forbid")

    id: StrictStr | None = Field(default=None, description="Ignored, assigned by the server")
    title: StrictStr = Field(description="Book title")
    subtitle: StrictStr = Field(default="", description="Optional subtitle")
    author: StrictStr = Field(description="Author name")
    pages: StrictInt = Field(description="Number of pages (> 0)")
    publisher: StrictStr = Field(default="", description="Publisher name")
    comments: StrictStr = Field(default="", description="Free-form notes")


class Book(BaseModel):
    """
    API representation of a Book entity.
    """
    id: str = Field(description="Unique identifier of the book")
    title: str
    subtitle: str
    author: str
    pages: int
    publisher: str
    comments: str


class BookEnvelope(BaseModel):
    data: Book


class BookListEnvelope(BaseModel):
    data: list[Book]


class ErrorResponse(BaseModel):
    """Body of every error response."""
    message: str


class ReadBookRequest(BaseModel):
    """
    Request body for POST /read_books and PUT /read_books/{id}.
    """
    model_config = ConfigDict(extra="forbid")

    id: StrictStr | None = Field(default=None, description="Ignored, assigned by the server")
    book_id: StrictStr = Field(description="Identifier of the book being read")
    start_date: Timestamp = Field(description="When reading started")
    expected_end_date: Timestamp | None = Field(default=None, description="Planned finish date")
    actual_end_date: Timestamp | None = Field(default=None, description="Actual finish date")
    rating: StrictInt | None = Field(default=None, description="Optional rating")
    comments: list[StrictStr] = Field(default_factory=list, description="Reading log")


class ReadBook(BaseModel):
    """
    API representation of a ReadBook entity. Timestamps are ISO-8601.
    """
    id: str
    book_id: str
    start_date: datetime
    expected_end_date: datetime | None = None
    actual_end_date: datetime | None = None
    comments: list[str] = Field(default_factory=list)
    rating: int | None = None


# request body of POST /read_books/{id}/comments
class CommentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    comment: StrictStr = Field(description="Comment appended to the reading log")
