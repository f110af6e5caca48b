"""
Error taxonomy for the personal library domain.

Validation and not-found errors are expected outcomes reported back to the
client. Storage errors wrap operational failures of the document store and
are never retried by the service.
"""


class LibraryError(Exception):
    """Base class for every error raised by the library domain."""


class InvalidBookDataError(LibraryError, ValueError):
    """A Book failed validation; the message names the first broken rule."""


class InvalidReadBookDataError(LibraryError, ValueError):
    """A ReadBook is structurally incomplete."""


class InvalidIdentifierError(LibraryError, ValueError):
    """An identifier does not have the shape the store uses for its keys."""

    def __init__(self, entity_id: str) -> None:
        super().__init__(f"invalid identifier: {entity_id!r}")
        self.entity_id = entity_id


class EntityNotFoundError(LibraryError, LookupError):
    """No stored document matches the requested identifier."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class StorageError(LibraryError, RuntimeError):
    """The document store failed or exceeded its deadline."""
