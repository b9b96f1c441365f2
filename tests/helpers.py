"""Test doubles and sample data shared across the criteria engine tests."""
import asyncio

from criteria_engine.config import domains_path
from criteria_engine.criteria import Domain, LocalizedText
from criteria_engine.store import DocumentStoreError, MemoryDocumentStore

FRAMEWORK_ID = "F1"
FIXED_TIMESTAMP = "2026-01-01T00:00:00+00:00"

DOMAIN_DOCS = {
    "D1": {"name": {"en": "Governance", "ar": "الحوكمة"}},
    "D2": {"name": {"en": "Risk Management", "ar": "إدارة المخاطر"}},
    "D3": {"name": {"en": "Operations", "ar": "العمليات"}},
}


def make_domains(*ids: str) -> list[Domain]:
    return [Domain(id=i, name=LocalizedText(en=f"Domain {i}", ar=f"مجال {i}")) for i in ids]


def seeded_collections() -> dict:
    return {domains_path(FRAMEWORK_ID): {k: dict(v) for k, v in DOMAIN_DOCS.items()}}


class FailingStore(MemoryDocumentStore):
    """Memory store whose selected operations raise DocumentStoreError."""

    def __init__(self, initial=None, fail_on=("get", "set", "delete", "list_documents")):
        super().__init__(initial)
        self.fail_on = set(fail_on)

    async def get(self, collection, key):
        if "get" in self.fail_on:
            raise DocumentStoreError("unavailable", key=key, status_code=503)
        return await super().get(collection, key)

    async def set(self, collection, key, document):
        if "set" in self.fail_on:
            raise DocumentStoreError("unavailable", key=key, status_code=503)
        await super().set(collection, key, document)

    async def delete(self, collection, key):
        if "delete" in self.fail_on:
            raise DocumentStoreError("unavailable", key=key, status_code=503)
        await super().delete(collection, key)

    async def list_documents(self, collection):
        if "list_documents" in self.fail_on:
            raise DocumentStoreError("unavailable", key=collection, status_code=503)
        return await super().list_documents(collection)


class GatedStore(MemoryDocumentStore):
    """Memory store whose writes (and optionally reads) wait until `release` is set."""

    def __init__(self, initial=None, gate_reads=False):
        super().__init__(initial)
        self.gate_reads = gate_reads
        self.release = asyncio.Event()
        self.entered = asyncio.Event()
        self.write_calls = 0

    async def get(self, collection, key):
        if self.gate_reads:
            self.entered.set()
            await self.release.wait()
        return await super().get(collection, key)

    async def set(self, collection, key, document):
        self.write_calls += 1
        self.entered.set()
        await self.release.wait()
        await super().set(collection, key, document)

    async def delete(self, collection, key):
        self.write_calls += 1
        self.entered.set()
        await self.release.wait()
        await super().delete(collection, key)


class NamelessDomainStore(MemoryDocumentStore):
    """Memory store that lists a domain document without its id."""

    async def list_documents(self, collection):
        return [{"name": {"en": "Governance", "ar": "الحوكمة"}}]
