"""
Criteria Guard — Enforces aggregate invariants on every outgoing write.
Checks document shape before it reaches the store and logs violations.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from ..config import CRITERIA_PERCENTAGE, CRITERIA_TYPES

logger = logging.getLogger("criteria_engine.safety")


class InvariantViolation(Exception):
    """Raised when code attempts something correct usage can never reach."""
    pass


class CriteriaGuard:
    """
    Validates every assessment criteria document before it is written.
    Maintains an audit log of checks and violations.

    The weight-sum rule is deliberately not re-checked here: writes are
    client-validated only and the last write wins.
    """

    def __init__(self):
        self.violations: list[dict] = []
        self.checks_performed: int = 0
        self.started_at: str = datetime.now(timezone.utc).isoformat()

    def validate_document(self, key: str, document: dict) -> bool:
        """
        Validate an outgoing criteria document.
        Returns True if consistent, raises InvariantViolation if not.
        """
        self.checks_performed += 1

        if document.get("frameworkId") != key:
            self._violation(key, f"frameworkId {document.get('frameworkId')!r} does not match key")

        criteria_type = document.get("type")
        if criteria_type not in CRITERIA_TYPES:
            self._violation(key, f"unknown criteria type {criteria_type!r}")

        if criteria_type == CRITERIA_PERCENTAGE and "levels" in document:
            self._violation(key, "levels present on a percentage criteria document")

        if not isinstance(document.get("domainWeights"), list):
            self._violation(key, "domainWeights missing or not a list")

        return True

    def _violation(self, key: str, reason: str):
        self.violations.append({
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "key": key,
            "reason": reason,
        })
        logger.critical(f"INVARIANT VIOLATION: {reason} — {key}")
        raise InvariantViolation(f"Refusing to write criteria for {key}: {reason}")

    def get_audit_record(self) -> dict:
        return {
            "criteria_guard": {
                "started_at": self.started_at,
                "checks_performed": self.checks_performed,
                "violations_detected": len(self.violations),
                "violations": self.violations,
                "status": "CLEAN" if not self.violations else "VIOLATIONS_DETECTED",
            }
        }
