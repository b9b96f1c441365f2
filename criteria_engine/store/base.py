"""
Base document store — Abstract interface for keyed JSON document storage.
Defines the contract the persistence gateway relies on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class DocumentStoreError(Exception):
    """Raised when a store backend fails to complete an operation."""
    def __init__(self, message: str, key: str = "", status_code: Optional[int] = None):
        self.key = key
        self.status_code = status_code
        prefix = f"Document store error {status_code}" if status_code else "Document store error"
        super().__init__(f"{prefix} for {key}: {message}" if key else f"{prefix}: {message}")


class DocumentStore(ABC):
    """
    Abstract keyed document store.

    Collections are addressed by slash-separated paths, so a framework's
    domains live under "frameworks/<id>/domains". Documents are plain dicts.
    """

    name: str = "base"

    @abstractmethod
    async def get(self, collection: str, key: str) -> Optional[dict]:
        """Return the document, or None if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    async def set(self, collection: str, key: str, document: dict) -> None:
        """Create or fully replace a document."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, collection: str, key: str) -> None:
        """Delete a document. Deleting a missing document is not an error."""
        raise NotImplementedError

    @abstractmethod
    async def list_documents(self, collection: str) -> list[dict]:
        """
        Return every document in a collection.
        Each returned dict carries its key under "id".
        """
        raise NotImplementedError

    async def close(self) -> None:
        """Release backend resources."""
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()
