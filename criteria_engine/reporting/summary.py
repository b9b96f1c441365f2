"""
Criteria summary — View-model behind the preview step and the summary card.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ..config import CRITERIA_PERCENTAGE, PRIMARY_LANGUAGE, WEIGHT_BUDGET
from ..criteria.models import AssessmentCriteria, Domain, WizardDraft
from ..criteria.validator import round_half_up


@dataclass
class CriteriaSummary:
    """Display-ready criteria: names resolved, rows ordered for reading."""
    type: str
    language: str
    domain_rows: list[dict] = field(default_factory=list)   # weight descending
    level_rows: list[dict] = field(default_factory=list)    # value ascending
    total_weight: float = 0.0
    framework_id: str = ""
    created_at: str = ""

    @property
    def weight_ok(self) -> bool:
        return round_half_up(self.total_weight) == WEIGHT_BUDGET

    def to_dict(self) -> dict:
        return {
            "framework_id": self.framework_id,
            "type": self.type,
            "language": self.language,
            "created_at": self.created_at,
            "total_weight": self.total_weight,
            "weight_ok": self.weight_ok,
            "domains": self.domain_rows,
            "levels": self.level_rows,
        }


def build_summary(
    criteria: Union[AssessmentCriteria, WizardDraft],
    domains: list[Domain],
    language: str = PRIMARY_LANGUAGE,
) -> CriteriaSummary:
    """
    Build the summary for saved criteria or an in-progress draft.
    Domains missing from `domains` are shown by their id.
    """
    names = {d.id: d.name.get(language) for d in domains}
    summary = CriteriaSummary(
        type=criteria.type,
        language=language,
        framework_id=getattr(criteria, "framework_id", ""),
        created_at=str(getattr(criteria, "created_at", "") or ""),
    )

    weights = sorted(criteria.domain_weights, key=lambda w: w.weight, reverse=True)
    summary.domain_rows = [
        {
            "domain_id": w.domain_id,
            "name": names.get(w.domain_id) or w.domain_id,
            "weight": w.weight,
        }
        for w in weights
    ]
    summary.total_weight = sum(w.weight for w in criteria.domain_weights)

    if criteria.type != CRITERIA_PERCENTAGE:
        levels = sorted(criteria.levels or [], key=lambda lvl: lvl.value)
        summary.level_rows = [
            {
                "label": lvl.label.get(language),
                "value": lvl.value,
                "description": lvl.description.get(language),
            }
            for lvl in levels
        ]

    return summary
