"""
Criteria data models — Structured types for assessment criteria configuration.

Documents are persisted with camelCase keys (frameworkId, domainWeights,
createdAt, ...) so they stay readable by the rest of the console.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..config import (
    CRITERIA_PERCENTAGE,
    PRIMARY_LANGUAGE,
    SUPPORTED_LANGUAGES,
)


@dataclass
class LocalizedText:
    """Display string per supported language."""
    en: str = ""
    ar: str = ""

    def get(self, language: str) -> str:
        """Text in the requested language, falling back to the primary one."""
        text = getattr(self, language, "") if language in SUPPORTED_LANGUAGES else ""
        return text or getattr(self, PRIMARY_LANGUAGE)

    def is_complete(self) -> bool:
        return all(getattr(self, lang).strip() for lang in SUPPORTED_LANGUAGES)

    def to_dict(self) -> dict:
        return {"en": self.en, "ar": self.ar}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "LocalizedText":
        data = data or {}
        return cls(en=data.get("en", ""), ar=data.get("ar", ""))


@dataclass
class CriteriaLevel:
    """One rung of a maturity or compliance scale."""
    label: LocalizedText = field(default_factory=LocalizedText)
    value: float = 0                     # Threshold, 0-100
    description: LocalizedText = field(default_factory=LocalizedText)

    def to_dict(self) -> dict:
        return {
            "label": self.label.to_dict(),
            "value": self.value,
            "description": self.description.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CriteriaLevel":
        return cls(
            label=LocalizedText.from_dict(data.get("label")),
            value=data.get("value", 0),
            description=LocalizedText.from_dict(data.get("description")),
        )


@dataclass
class DomainWeight:
    """Percentage contribution of one domain to the overall score."""
    domain_id: str
    weight: float = 0                    # 0-100

    def to_dict(self) -> dict:
        return {"domainId": self.domain_id, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict) -> "DomainWeight":
        return cls(domain_id=data["domainId"], weight=data.get("weight", 0))


@dataclass
class Domain:
    """Read-only reference to a framework domain."""
    id: str
    name: LocalizedText = field(default_factory=LocalizedText)

    @classmethod
    def from_dict(cls, data: dict) -> "Domain":
        return cls(id=data["id"], name=LocalizedText.from_dict(data.get("name")))


@dataclass
class AssessmentCriteria:
    """The persisted aggregate, one per framework."""
    framework_id: str
    type: str
    domain_weights: list[DomainWeight] = field(default_factory=list)
    levels: Optional[list[CriteriaLevel]] = None   # Only for maturity/compliance
    created_at: Any = None                        # ISO-8601 string once stored

    def to_dict(self) -> dict:
        doc: dict[str, Any] = {
            "frameworkId": self.framework_id,
            "type": self.type,
            "domainWeights": [w.to_dict() for w in self.domain_weights],
            "createdAt": self.created_at,
        }
        if self.type != CRITERIA_PERCENTAGE and self.levels is not None:
            doc["levels"] = [lvl.to_dict() for lvl in self.levels]
        return doc

    @classmethod
    def from_dict(cls, data: dict) -> "AssessmentCriteria":
        levels = data.get("levels")
        return cls(
            framework_id=data["frameworkId"],
            type=data["type"],
            domain_weights=[DomainWeight.from_dict(w) for w in data.get("domainWeights", [])],
            levels=[CriteriaLevel.from_dict(lvl) for lvl in levels] if levels is not None else None,
            created_at=data.get("createdAt"),
        )


@dataclass
class WizardDraft:
    """In-progress configuration held by the wizard; never persisted on its own."""
    type: str = CRITERIA_PERCENTAGE
    levels: list[CriteriaLevel] = field(default_factory=list)
    domain_weights: list[DomainWeight] = field(default_factory=list)

    @classmethod
    def from_criteria(cls, criteria: AssessmentCriteria) -> "WizardDraft":
        return cls(
            type=criteria.type,
            levels=list(criteria.levels or []),
            domain_weights=list(criteria.domain_weights),
        )


# Wizard steps, in forward order
STEP_TYPE = "type"
STEP_LEVELS = "levels"
STEP_DOMAINS = "domains"
STEP_PREVIEW = "preview"
WIZARD_STEPS = (STEP_TYPE, STEP_LEVELS, STEP_DOMAINS, STEP_PREVIEW)
