"""
In-memory document store for tests and dry runs.
"""

from __future__ import annotations

import copy
from typing import Optional

from .base import DocumentStore


class MemoryDocumentStore(DocumentStore):
    """Dict-backed store; documents are deep-copied in and out."""

    name = "memory"

    def __init__(self, initial: Optional[dict[str, dict[str, dict]]] = None):
        self._collections: dict[str, dict[str, dict]] = copy.deepcopy(initial or {})

    async def get(self, collection: str, key: str) -> Optional[dict]:
        doc = self._collections.get(collection, {}).get(key)
        return copy.deepcopy(doc) if doc is not None else None

    async def set(self, collection: str, key: str, document: dict) -> None:
        self._collections.setdefault(collection, {})[key] = copy.deepcopy(document)

    async def delete(self, collection: str, key: str) -> None:
        self._collections.get(collection, {}).pop(key, None)

    async def list_documents(self, collection: str) -> list[dict]:
        return [
            {**copy.deepcopy(doc), "id": key}
            for key, doc in self._collections.get(collection, {}).items()
        ]
