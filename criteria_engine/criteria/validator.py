"""
Criteria Validator — Per-step checks run before every forward wizard
transition and before the final save.

Rules:
  - type:    the criteria type is one of percentage / maturity / compliance.
  - levels:  (maturity and compliance only) at least one level, values
             strictly increasing in list order, every value within 0-100.
  - domains: at least one weight, every weight within 0-100, only live
             domains referenced, and the sum rounding to exactly 100.
  - preview: same type check as the first step.

Validation never mutates the draft.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from ..config import (
    CRITERIA_PERCENTAGE,
    CRITERIA_TYPES,
    LEVEL_VALUE_MAX,
    LEVEL_VALUE_MIN,
    WEIGHT_BUDGET,
)
from .models import (
    STEP_DOMAINS,
    STEP_LEVELS,
    STEP_PREVIEW,
    STEP_TYPE,
    WIZARD_STEPS,
    WizardDraft,
)

# Error keys, resolved to display strings by the presentation layer
ERR_INVALID_TYPE = "invalidType"
ERR_NO_LEVELS = "noLevels"
ERR_LEVEL_ORDER = "levelOrder"
ERR_LEVEL_RANGE = "levelRange"
ERR_NO_DOMAINS = "noDomains"
ERR_WEIGHT_RANGE = "weightRange"
ERR_UNKNOWN_DOMAIN = "unknownDomain"
ERR_WEIGHT_SUM = "weightSum"


@dataclass
class FieldError:
    """A single failed rule, with parameters for message interpolation."""
    key: str
    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class ValidationResult:
    """Failed rules grouped by field (`type`, `levels`, `domains`)."""
    errors: dict[str, list[FieldError]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, key: str, **params) -> None:
        self.errors.setdefault(field_name, []).append(FieldError(key, params))

    def first(self, field_name: str) -> Optional[FieldError]:
        """The first rule that failed for a field, if any."""
        found = self.errors.get(field_name)
        return found[0] if found else None

    def keys_for(self, field_name: str) -> list[str]:
        return [e.key for e in self.errors.get(field_name, [])]

    def summary(self) -> dict[str, FieldError]:
        """First failure per field, the shape shown next to form fields."""
        return {name: errs[0] for name, errs in self.errors.items()}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def validate_step(
    step: str,
    draft: WizardDraft,
    domain_ids: Optional[Iterable[str]] = None,
) -> ValidationResult:
    """
    Validate the draft for one wizard step.

    Args:
        step: One of WIZARD_STEPS.
        draft: The in-progress configuration.
        domain_ids: Live domain ids; when given, weights for other ids fail.
    """
    if step not in WIZARD_STEPS:
        raise ValueError(f"Unknown wizard step: {step!r}")

    result = ValidationResult()
    if step in (STEP_TYPE, STEP_PREVIEW):
        _check_type(draft, result)
    elif step == STEP_LEVELS:
        _check_levels(draft, result)
    elif step == STEP_DOMAINS:
        _check_domains(draft, result, domain_ids)
    return result


def _check_type(draft: WizardDraft, result: ValidationResult):
    if draft.type not in CRITERIA_TYPES:
        result.add("type", ERR_INVALID_TYPE, type=draft.type)


def _check_levels(draft: WizardDraft, result: ValidationResult):
    if draft.type == CRITERIA_PERCENTAGE:
        return

    values = [lvl.value for lvl in draft.levels]
    if not values:
        result.add("levels", ERR_NO_LEVELS)
        return

    for i in range(1, len(values)):
        if values[i] <= values[i - 1]:
            result.add("levels", ERR_LEVEL_ORDER, index=i)
            break

    for i, value in enumerate(values):
        if not LEVEL_VALUE_MIN <= value <= LEVEL_VALUE_MAX:
            result.add("levels", ERR_LEVEL_RANGE, index=i, value=value)
            break


def _check_domains(
    draft: WizardDraft,
    result: ValidationResult,
    domain_ids: Optional[Iterable[str]],
):
    weights = draft.domain_weights
    if not weights:
        result.add("domains", ERR_NO_DOMAINS)
        return

    for w in weights:
        if not 0 <= w.weight <= WEIGHT_BUDGET:
            result.add("domains", ERR_WEIGHT_RANGE, domain_id=w.domain_id, weight=w.weight)
            break

    if domain_ids is not None:
        known = set(domain_ids)
        unknown = [w.domain_id for w in weights if w.domain_id not in known]
        if unknown:
            result.add("domains", ERR_UNKNOWN_DOMAIN, domain_ids=unknown)

    total = sum(w.weight for w in weights)
    if round_half_up(total) != WEIGHT_BUDGET:
        result.add("domains", ERR_WEIGHT_SUM, sum=total)
