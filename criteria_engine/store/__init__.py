"""Document store package — backends for the persisted criteria documents."""

from ..config import StoreConfig
from .base import DocumentStore, DocumentStoreError
from .http_store import HttpDocumentStore
from .memory_store import MemoryDocumentStore
from .sqlite_store import SQLiteDocumentStore


def build_store(config: StoreConfig) -> DocumentStore:
    """Instantiate the backend named by `config.backend`."""
    if config.backend == "sqlite":
        return SQLiteDocumentStore(config.sqlite_path)
    if config.backend == "http":
        if not config.base_url:
            raise ValueError("store.base_url is required for the http backend")
        return HttpDocumentStore(
            config.base_url,
            api_token=config.api_token,
            timeout=config.http_timeout_seconds,
        )
    if config.backend == "memory":
        return MemoryDocumentStore()
    raise ValueError(f"Unknown store backend: {config.backend!r}")


__all__ = [
    "DocumentStore",
    "DocumentStoreError",
    "HttpDocumentStore",
    "MemoryDocumentStore",
    "SQLiteDocumentStore",
    "build_store",
]
