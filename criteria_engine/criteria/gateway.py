"""
Criteria Persistence Gateway — Loads, saves and deletes the single criteria
document kept per framework, and reads the framework's live domains.

Every call is bounded by a timeout. Failures are wrapped in
CriteriaGatewayError with a tag (loadFailed / saveFailed / deleteFailed)
and are never retried here.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional

from ..config import (
    ASSESSMENT_CRITERIA_COLLECTION,
    CRITERIA_PERCENTAGE,
    DEFAULT_IO_TIMEOUT_SECONDS,
    domains_path,
)
from ..safety.guardian import CriteriaGuard
from ..store.base import DocumentStore
from .models import AssessmentCriteria, CriteriaLevel, Domain, DomainWeight

logger = logging.getLogger("criteria_engine.gateway")

TAG_LOAD_FAILED = "loadFailed"
TAG_SAVE_FAILED = "saveFailed"
TAG_DELETE_FAILED = "deleteFailed"


class CriteriaGatewayError(Exception):
    """Raised when the underlying store fails or times out."""
    def __init__(self, tag: str, framework_id: str, cause: Optional[BaseException] = None):
        self.tag = tag
        self.framework_id = framework_id
        self.cause = cause
        detail = f": {type(cause).__name__}: {cause}" if cause else ""
        super().__init__(f"{tag} for framework {framework_id}{detail}")


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class CriteriaGateway:
    """Reads and writes assessment criteria through a DocumentStore."""

    def __init__(
        self,
        store: DocumentStore,
        timeout: float = DEFAULT_IO_TIMEOUT_SECONDS,
        guard: Optional[CriteriaGuard] = None,
        clock: Callable[[], Any] = _utc_now,
    ):
        self.store = store
        self.timeout = timeout
        self.guard = guard or CriteriaGuard()
        self.clock = clock

    async def load(self, framework_id: str) -> Optional[AssessmentCriteria]:
        """Fetch the framework's criteria; None means nothing is configured yet."""
        doc = await self._call(
            self.store.get(ASSESSMENT_CRITERIA_COLLECTION, framework_id),
            TAG_LOAD_FAILED,
            framework_id,
        )
        if doc is None:
            return None
        try:
            return AssessmentCriteria.from_dict(doc)
        except (KeyError, TypeError, AttributeError) as e:
            logger.error(f"Malformed criteria document for {framework_id}: {e}")
            raise CriteriaGatewayError(TAG_LOAD_FAILED, framework_id, e) from e

    async def load_domains(self, framework_id: str) -> list[Domain]:
        """Read-through to the framework's domains sub-collection."""
        docs = await self._call(
            self.store.list_documents(domains_path(framework_id)),
            TAG_LOAD_FAILED,
            framework_id,
        )
        try:
            return [Domain.from_dict(d) for d in docs]
        except (KeyError, TypeError, AttributeError) as e:
            logger.error(f"Malformed domain document for {framework_id}: {e}")
            raise CriteriaGatewayError(TAG_LOAD_FAILED, framework_id, e) from e

    async def save(
        self,
        framework_id: str,
        criteria_type: str,
        domain_weights: list[DomainWeight],
        levels: Optional[list[CriteriaLevel]] = None,
    ) -> AssessmentCriteria:
        """
        Overwrite the framework's criteria document.
        Levels are stripped for percentage criteria and when empty.
        """
        criteria = AssessmentCriteria(
            framework_id=framework_id,
            type=criteria_type,
            domain_weights=list(domain_weights),
            levels=list(levels) if criteria_type != CRITERIA_PERCENTAGE and levels else None,
            created_at=self.clock(),
        )
        document = criteria.to_dict()
        self.guard.validate_document(framework_id, document)

        await self._call(
            self.store.set(ASSESSMENT_CRITERIA_COLLECTION, framework_id, document),
            TAG_SAVE_FAILED,
            framework_id,
        )
        logger.info(
            f"Saved {criteria_type} criteria for {framework_id} "
            f"({len(criteria.domain_weights)} domains, {len(criteria.levels or [])} levels)"
        )
        return criteria

    async def remove(self, framework_id: str) -> None:
        await self._call(
            self.store.delete(ASSESSMENT_CRITERIA_COLLECTION, framework_id),
            TAG_DELETE_FAILED,
            framework_id,
        )
        logger.info(f"Deleted criteria for {framework_id}")

    async def _call(self, operation: Awaitable, tag: str, framework_id: str):
        try:
            return await asyncio.wait_for(operation, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{tag}: store call timed out after {self.timeout}s for {framework_id}")
            raise CriteriaGatewayError(tag, framework_id, e) from e
        except Exception as e:
            logger.error(f"{tag}: {type(e).__name__}: {e}")
            raise CriteriaGatewayError(tag, framework_id, e) from e
