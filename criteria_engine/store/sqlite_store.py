"""
SQLite-backed document store.
Keeps every collection in one table of JSON documents keyed by (collection, key).
"""

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any, Optional

from .base import DocumentStore, DocumentStoreError

logger = logging.getLogger("criteria_engine.store")

DEFAULT_BUSY_TIMEOUT_SECONDS = 5.0


class SQLiteDocumentStore(DocumentStore):
    """
    Persistent document store backed by SQLite.
    Features:
      - Full-replace writes (upsert)
      - Connection-per-call, run on a worker thread so the event loop
        keeps running and the caller's timeout can fire
      - Insertion-ordered collection listings
    """

    name = "sqlite"

    def __init__(self, db_path: str, busy_timeout: float = DEFAULT_BUSY_TIMEOUT_SECONDS):
        self.db_path = Path(db_path)
        self.busy_timeout = busy_timeout
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        """Initialize the document table."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS documents (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    collection TEXT NOT NULL,
                    key TEXT NOT NULL,
                    data TEXT NOT NULL,
                    updated_at REAL NOT NULL,
                    UNIQUE (collection, key)
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_documents_collection
                ON documents(collection)
            """)
            conn.commit()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path), timeout=self.busy_timeout)

    # --- Async interface ---

    async def get(self, collection: str, key: str) -> Optional[dict]:
        return await asyncio.to_thread(self.get_document, collection, key)

    async def set(self, collection: str, key: str, document: dict) -> None:
        await asyncio.to_thread(self.put_document, collection, key, document)

    async def delete(self, collection: str, key: str) -> None:
        await asyncio.to_thread(self.delete_document, collection, key)

    async def list_documents(self, collection: str) -> list[dict]:
        return await asyncio.to_thread(self.list_collection, collection)

    # --- Synchronous operations, also used to seed data outside an event loop ---

    def get_document(self, collection: str, key: str) -> Optional[dict]:
        row = self._query_one(
            "SELECT data FROM documents WHERE collection = ? AND key = ?",
            (collection, key),
            key,
        )
        if row is None:
            logger.debug(f"No document {collection}/{key}")
            return None
        return json.loads(row[0])

    def put_document(self, collection: str, key: str, document: dict) -> None:
        data_json = json.dumps(document, default=str, ensure_ascii=False)
        try:
            with self._connect() as conn:
                # Upsert keeps the original seq, so listing order is stable
                conn.execute(
                    """
                    INSERT INTO documents (collection, key, data, updated_at)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(collection, key)
                    DO UPDATE SET data = excluded.data, updated_at = excluded.updated_at
                    """,
                    (collection, key, data_json, time.time()),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise DocumentStoreError(str(e), key=f"{collection}/{key}") from e
        logger.debug(f"Stored {collection}/{key}")

    def delete_document(self, collection: str, key: str) -> None:
        try:
            with self._connect() as conn:
                deleted = conn.execute(
                    "DELETE FROM documents WHERE collection = ? AND key = ?",
                    (collection, key),
                ).rowcount
                conn.commit()
        except sqlite3.Error as e:
            raise DocumentStoreError(str(e), key=f"{collection}/{key}") from e
        if deleted:
            logger.debug(f"Deleted {collection}/{key}")

    def list_collection(self, collection: str) -> list[dict]:
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    "SELECT key, data FROM documents WHERE collection = ? ORDER BY seq",
                    (collection,),
                ).fetchall()
        except sqlite3.Error as e:
            raise DocumentStoreError(str(e), key=collection) from e
        return [{**json.loads(data), "id": key} for key, data in rows]

    def _query_one(self, sql: str, params: tuple, key: str) -> Optional[Any]:
        try:
            with self._connect() as conn:
                return conn.execute(sql, params).fetchone()
        except sqlite3.Error as e:
            raise DocumentStoreError(str(e), key=key) from e
