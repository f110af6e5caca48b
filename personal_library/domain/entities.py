"""
Domain entities for the personal library catalog.

Entities are objects with a unique identity that runs through time and
different representations. Both entities here are owned by the document
store; the application only holds transient copies while serving a request.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Book:
    """
    Represents a book in the personal catalog.

    The identifier is assigned by the persistence layer on creation and is
    never changed afterwards. Updates replace every other field.
    """

    title: str
    """Book title (must not be blank to be persisted)"""

    author: str
    """Author name (must not be blank to be persisted)"""

    pages: int
    """Page count (must be greater than zero to be persisted)"""

    subtitle: str = ""
    """Optional subtitle"""

    publisher: str = ""
    """Optional publisher name"""

    comments: str = ""
    """Free-form notes about the book"""

    id: str = ""
    """Opaque identifier, empty until the book has been created"""


@dataclass
class ReadBook:
    """
    Tracks the reading of a book.

    The reference to the book is by value only: nothing checks that
    ``book_id`` points at an existing Book. Comments form an ordered,
    append-only reading log.
    """

    book_id: str
    """Identifier of the Book being read"""

    start_date: datetime
    """When reading started"""

    expected_end_date: Optional[datetime] = None
    """When reading is expected to finish"""

    actual_end_date: Optional[datetime] = None
    """When reading actually finished (None while unknown)"""

    rating: Optional[int] = None
    """Optional rating given to the book"""

    comments: List[str] = field(default_factory=list)
    """Reading-progress log, in insertion order"""

    id: str = ""
    """Opaque identifier, empty until the record has been created"""
