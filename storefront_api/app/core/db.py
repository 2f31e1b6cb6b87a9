"""
Document storage on top of SQLite and a simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), applying migrations on application start
(``init_db``) and the :class:`DocumentStore` adapter used by every
service.  Documents are JSON bodies grouped by ``collection``; an
optional natural ``key`` is unique within its collection, which is
what makes slug upserts and the singleton sections safe under
concurrent writers.

The adapter carries no business rules.  It translates driver failures
into :class:`~storefront_api.app.core.errors.StoreError` and leaves
everything else to the services.
"""

import json
import os
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .config import settings
from .errors import StoreError


Document = Dict[str, Any]

# Fields maintained by the store and never persisted inside a body.
RESERVED_FIELDS = ("id", "created_at", "updated_at")


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the configured path is absolute, use it directly.  Otherwise
    resolve it relative to the project root.
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # storefront_api/
    return str((base_dir / db_url).resolve())


def get_connection(database_url: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by
    name.  Timestamps are stored as ISO strings and returned untouched.
    """
    conn = sqlite3.connect(get_database_path(database_url))
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(database_url: Optional[str] = None) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(database_url)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


MIGRATIONS: List[tuple] = [
    # Migration 1: document table
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS documents (
            id TEXT PRIMARY KEY,
            collection TEXT NOT NULL,
            key TEXT,
            body TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        -- Natural keys (slugs, singleton markers) are unique per collection.
        -- NULL keys are allowed to repeat.
        CREATE UNIQUE INDEX IF NOT EXISTS idx_documents_collection_key
            ON documents(collection, key);
        """,
    ),
    # Migration 2: speed up full-collection scans used by the admin queues
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_documents_collection
            ON documents(collection, created_at);
        """,
    ),
]


def init_db(database_url: Optional[str] = None) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries of
    ``MIGRATIONS`` in order.
    """
    with get_cursor(database_url) as cursor:
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                current_version = version


def utcnow() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def new_id() -> str:
    """Identifier for documents and embedded subdocuments."""
    return uuid.uuid4().hex


class DocumentStore:
    """Thin find/insert/update/delete adapter over the ``documents`` table.

    Every call opens its own connection and commits one statement (or
    one statement plus its read-back), so single-document writes are
    atomic and no state is shared between requests.
    """

    def __init__(self, database_url: Optional[str] = None) -> None:
        self.database_url = database_url or settings.database_url

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Cursor]:
        try:
            conn = get_connection(self.database_url)
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot open document store: {exc}") from exc
        try:
            yield conn.cursor()
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StoreError(f"Document store failure: {exc}") from exc
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find(self, collection: str, **filters: Any) -> List[Document]:
        """Return documents of ``collection`` in insertion order.

        ``filters`` are equality matches on top-level body fields.
        """
        with self._session() as cursor:
            rows = cursor.execute(
                "SELECT * FROM documents WHERE collection = ? ORDER BY rowid",
                (collection,),
            ).fetchall()
        docs = [self._row_to_document(row) for row in rows]
        if filters:
            docs = [d for d in docs if all(d.get(k) == v for k, v in filters.items())]
        return docs

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._session() as cursor:
            row = cursor.execute(
                "SELECT * FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
        return self._row_to_document(row) if row else None

    def get_by_key(self, collection: str, key: str) -> Optional[Document]:
        with self._session() as cursor:
            row = cursor.execute(
                "SELECT * FROM documents WHERE collection = ? AND key = ?",
                (collection, key),
            ).fetchone()
        return self._row_to_document(row) if row else None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, collection: str, document: Document, key: Optional[str] = None) -> Document:
        """Insert a new document and return it with its store fields.

        An ``id`` present in ``document`` is used as the primary key;
        otherwise a random one is generated.  Inserting a duplicate
        ``key`` raises :class:`StoreError`.
        """
        doc_id = str(document.get("id") or new_id())
        now = utcnow()
        created_at = document.get("created_at") or now
        with self._session() as cursor:
            cursor.execute(
                "INSERT INTO documents (id, collection, key, body, created_at, updated_at)"
                " VALUES (?, ?, ?, ?, ?, ?)",
                (doc_id, collection, key, self._dump(document), created_at, now),
            )
            row = cursor.execute("SELECT * FROM documents WHERE id = ?", (doc_id,)).fetchone()
        return self._row_to_document(row)

    def upsert_by_key(self, collection: str, key: str, document: Document) -> Document:
        """Create or replace the document stored under ``key``.

        Runs as a single ``INSERT ... ON CONFLICT DO UPDATE`` against the
        unique ``(collection, key)`` index, so two writers racing on an
        unseen key still end up with one row.
        """
        now = utcnow()
        with self._session() as cursor:
            cursor.execute(
                "INSERT INTO documents (id, collection, key, body, created_at, updated_at)"
                " VALUES (?, ?, ?, ?, ?, ?)"
                " ON CONFLICT(collection, key) DO UPDATE SET body = excluded.body, updated_at = excluded.updated_at",
                (new_id(), collection, key, self._dump(document), now, now),
            )
            row = cursor.execute(
                "SELECT * FROM documents WHERE collection = ? AND key = ?",
                (collection, key),
            ).fetchone()
        return self._row_to_document(row)

    def update(self, collection: str, doc_id: str, document: Document) -> Optional[Document]:
        """Replace the body of an existing document.

        Returns ``None`` if no document with ``doc_id`` exists.
        """
        with self._session() as cursor:
            cursor.execute(
                "UPDATE documents SET body = ?, updated_at = ? WHERE collection = ? AND id = ?",
                (self._dump(document), utcnow(), collection, doc_id),
            )
            if cursor.rowcount == 0:
                return None
            row = cursor.execute("SELECT * FROM documents WHERE id = ?", (doc_id,)).fetchone()
        return self._row_to_document(row)

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._session() as cursor:
            cursor.execute("DELETE FROM documents WHERE collection = ? AND id = ?", (collection, doc_id))
            return cursor.rowcount > 0

    def delete_by_key(self, collection: str, key: str) -> bool:
        with self._session() as cursor:
            cursor.execute("DELETE FROM documents WHERE collection = ? AND key = ?", (collection, key))
            return cursor.rowcount > 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _dump(document: Document) -> str:
        body = {k: v for k, v in document.items() if k not in RESERVED_FIELDS}
        return json.dumps(body, ensure_ascii=False)

    @staticmethod
    def _row_to_document(row: sqlite3.Row) -> Document:
        doc: Document = {"id": row["id"]}
        doc.update(json.loads(row["body"]))
        doc["created_at"] = row["created_at"]
        doc["updated_at"] = row["updated_at"]
        return doc


def get_store() -> DocumentStore:
    """FastAPI dependency returning a store bound to the configured database."""
    return DocumentStore()
