"""
SQLite-backed document store.

Each collection is a table holding one JSON document per row, keyed by an
application-generated string id. The store handle is created once at
startup and shared by every repository; it holds no per-request state.

Every operation opens its own connection and runs under a deadline:
``sqlite3.connect(timeout=...)`` bounds lock waits and a progress handler
interrupts statements that are still running when the deadline passes.
Any sqlite3 error is re-raised as StorageError.
"""

import json
import logging
import re
import sqlite3
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from personal_library.domain.errors import StorageError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]

DEFAULT_TIMEOUT_SECONDS = 5.0

# SQLite virtual machine instructions between deadline checks
_PROGRESS_STEPS = 1000

_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_name(kind: str, name: str) -> str:
    if not isinstance(name, str) or not _NAME_PATTERN.match(name):
        raise ValueError(f"invalid {kind} name: {name!r}")
    return name


class SqliteDocumentStore:
    """
    Process-wide handle to the document database.

    Usage:
        store = SqliteDocumentStore(Path("data/library.db"), timeout=5.0)
        books = store.collection("books")
        books.insert_one({"id": "...", "title": "Dune"})
    """

    def __init__(
        self, db_path: Union[str, Path], timeout: float = DEFAULT_TIMEOUT_SECONDS
    ) -> None:
        """
        Initialize the store with a database path.

        Args:
            db_path: SQLite database file; parent directories are created
            timeout: Deadline in seconds applied to every operation
        """
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=self._timeout)
        deadline = time.monotonic() + self._timeout
        conn.set_progress_handler(
            lambda: 1 if time.monotonic() > deadline else 0, _PROGRESS_STEPS
        )
        return conn

    @contextmanager
    def session(self, operation: str) -> Iterator[sqlite3.Connection]:
        """
        Open a connection for one operation and commit it on success.

        Args:
            operation: Name used in logs and error messages

        Raises:
            StorageError: If SQLite fails or the deadline is exceeded
        """
        conn: Optional[sqlite3.Connection] = None
        try:
            conn = self._connect()
            with conn:
                yield conn
        except sqlite3.Error as e:
            if "interrupted" in str(e):
                message = f"{operation}: deadline of {self._timeout}s exceeded"
            else:
                message = f"{operation}: {e}"
            logger.error(f"Document store failure in {message}")
            raise StorageError(message) from e
        finally:
            if conn is not None:
                conn.close()

    def collection(self, name: str) -> "DocumentCollection":
        """
        Get a collection by name, creating its table if needed.

        Raises:
            ValueError: If ``name`` is not a plain identifier
        """
        return DocumentCollection(self, _check_name("collection", name))

    def ping(self) -> bool:
        """Check that the database answers a trivial query."""
        try:
            with self.session("ping") as conn:
                conn.execute("SELECT 1").fetchone()
            return True
        except StorageError:
            return False


class DocumentCollection:
    """
    One named collection of JSON documents.

    Documents must carry a string ``id`` field; it is stored both inside the
    document and as the table's primary key.
    """

    def __init__(self, store: SqliteDocumentStore, name: str) -> None:
        self._store = store
        self._name = name
        self._init_schema()

    @property
    def name(self) -> str:
        return self._name

    def _init_schema(self) -> None:
        """Create the collection table if it doesn't exist."""
        with self._store.session(f"create collection {self._name}") as conn:
            conn.execute(
                f'CREATE TABLE IF NOT EXISTS "{self._name}" ('
                "id TEXT PRIMARY KEY, "
                "document TEXT NOT NULL"
                ")"
            )

    def _decode(self, raw: str) -> Document:
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"corrupt document in {self._name}: {e}") from e

    def insert_one(self, document: Document) -> None:
        """
        Insert a new document.

        Raises:
            ValueError: If the document has no string id
            StorageError: If the id already exists or SQLite fails
        """
        doc_id = document.get("id")
        if not isinstance(doc_id, str) or not doc_id:
            raise ValueError("document must have a non-empty string 'id'")

        with self._store.session(f"insert into {self._name}") as conn:
            conn.execute(
                f'INSERT INTO "{self._name}" (id, document) VALUES (?, ?)',
                (doc_id, json.dumps(document)),
            )

    def find_one(self, doc_id: str) -> Optional[Document]:
        """Return the document with this id, or None."""
        with self._store.session(f"find in {self._name}") as conn:
            row = conn.execute(
                f'SELECT document FROM "{self._name}" WHERE id = ?', (doc_id,)
            ).fetchone()

        if row is None:
            return None
        return self._decode(row[0])

    def find_all(self) -> List[Document]:
        """Return every document in insertion order."""
        with self._store.session(f"find all in {self._name}") as conn:
            rows = conn.execute(
                f'SELECT document FROM "{self._name}" ORDER BY rowid'
            ).fetchall()

        return [self._decode(row[0]) for row in rows]

    def replace_one(self, doc_id: str, document: Document) -> bool:
        """
        Overwrite the document with this id. The stored id is kept.

        Returns:
            True if a document matched, False otherwise
        """
        stored = dict(document, id=doc_id)
        with self._store.session(f"replace in {self._name}") as conn:
            cursor = conn.execute(
                f'UPDATE "{self._name}" SET document = ? WHERE id = ?',
                (json.dumps(stored), doc_id),
            )
            return cursor.rowcount > 0

    def delete_one(self, doc_id: str) -> bool:
        """Delete the document with this id. Returns True if one was removed."""
        with self._store.session(f"delete from {self._name}") as conn:
            cursor = conn.execute(
                f'DELETE FROM "{self._name}" WHERE id = ?', (doc_id,)
            )
            return cursor.rowcount > 0

    def push(self, doc_id: str, field: str, value: Any) -> bool:
        """
        Append ``value`` to the array ``field`` of one document.

        The append is a single UPDATE statement, so it is atomic with respect
        to other writers. A missing or non-array field starts as [].

        Returns:
            True if a document matched, False otherwise
        """
        _check_name("field", field)
        with self._store.session(f"push into {self._name}") as conn:
            cursor = conn.execute(
                f'UPDATE "{self._name}" SET document = json_insert('
                "CASE WHEN json_type(document, ?) = 'array' THEN document "
                "ELSE json_set(document, ?, json('[]')) END, "
                "?, json(?)) "
                "WHERE id = ?",
                (
                    f"$.{field}",
                    f"$.{field}",
                    f"$.{field}[#]",
                    json.dumps(value),
                    doc_id,
                ),
            )
            return cursor.rowcount > 0
