"""
Criteria Wizard — Step sequence and draft editing for one configuration session.

Steps:  type → levels → domains → preview
The levels step is skipped in both directions when the type is percentage.
The wizard performs no I/O: commit() hands back the finished aggregate and
the controller persists it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Union

from ..config import CRITERIA_PERCENTAGE
from ..safety.guardian import InvariantViolation
from .models import (
    STEP_DOMAINS,
    STEP_LEVELS,
    STEP_PREVIEW,
    STEP_TYPE,
    AssessmentCriteria,
    CriteriaLevel,
    Domain,
    DomainWeight,
    WizardDraft,
)
from .validator import FieldError, ValidationResult, validate_step
from .weights import distribute_equal_weights, reconcile_weights, set_domain_weight

logger = logging.getLogger("criteria_engine.wizard")


# ---------------------------------------------------------------------------
# Draft update messages
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SetType:
    type: str


@dataclass(frozen=True)
class SetLevels:
    levels: tuple[CriteriaLevel, ...]


@dataclass(frozen=True)
class SetDomainWeight:
    domain_id: str
    weight: float


@dataclass(frozen=True)
class SetDomainWeights:
    domain_weights: tuple[DomainWeight, ...]


@dataclass(frozen=True)
class DistributeEvenly:
    pass


DraftMessage = Union[SetType, SetLevels, SetDomainWeight, SetDomainWeights, DistributeEvenly]


class CriteriaWizard:
    """
    Finite-state wizard over a WizardDraft.

    go_to_next_step() validates the current step first and stays put on
    failure, exposing the errors via `errors`.
    """

    def __init__(
        self,
        draft: Optional[WizardDraft] = None,
        domains: Optional[list[Domain]] = None,
    ):
        self.domains: list[Domain] = list(domains or [])
        self.draft = draft or WizardDraft(domain_weights=distribute_equal_weights(self.domains))
        self.current_step: str = STEP_TYPE
        self.errors: dict[str, FieldError] = {}

    @classmethod
    def start(
        cls,
        existing: Optional[AssessmentCriteria],
        domains: list[Domain],
    ) -> "CriteriaWizard":
        """
        Open a session: pre-populate from saved criteria, or default to a
        percentage draft with equal weights over the live domains.
        """
        if existing is None:
            return cls(domains=domains)
        draft = WizardDraft.from_criteria(existing)
        if domains:
            draft.domain_weights = reconcile_weights(draft.domain_weights, domains)
        return cls(draft=draft, domains=domains)

    # --- Validation ---

    def validate_current_step(self) -> ValidationResult:
        domain_ids = [d.id for d in self.domains] if self.domains else None
        result = validate_step(self.current_step, self.draft, domain_ids)
        self.errors = result.summary()
        return result

    # --- Navigation ---

    def go_to_next_step(self) -> bool:
        """
        Advance one step.
        Returns True only when called on a valid preview step, signalling
        that the configuration is ready to commit.
        """
        result = self.validate_current_step()
        if not result.is_valid:
            logger.debug(f"Step '{self.current_step}' blocked: {result.summary()}")
            return False

        if self.current_step == STEP_TYPE:
            self.current_step = STEP_DOMAINS if self._is_percentage() else STEP_LEVELS
        elif self.current_step == STEP_LEVELS:
            self.current_step = STEP_DOMAINS
        elif self.current_step == STEP_DOMAINS:
            self.current_step = STEP_PREVIEW
        elif self.current_step == STEP_PREVIEW:
            return True
        return False

    def go_to_prev_step(self):
        self.errors = {}
        if self.current_step == STEP_LEVELS:
            self.current_step = STEP_TYPE
        elif self.current_step == STEP_DOMAINS:
            self.current_step = STEP_TYPE if self._is_percentage() else STEP_LEVELS
        elif self.current_step == STEP_PREVIEW:
            self.current_step = STEP_DOMAINS

    # --- Draft editing ---

    def update_draft(self, **changes) -> WizardDraft:
        """
        Merge a partial update (type, levels, domain_weights) into the draft.
        Switching type keeps previously entered levels and weights.
        """
        if "levels" in changes:
            changes["levels"] = list(changes["levels"])
        if "domain_weights" in changes:
            changes["domain_weights"] = list(changes["domain_weights"])
        self.draft = replace(self.draft, **changes)
        return self.draft

    def apply(self, message: DraftMessage) -> WizardDraft:
        """Apply one typed draft update message."""
        if isinstance(message, SetType):
            return self.update_draft(type=message.type)
        if isinstance(message, SetLevels):
            return self.update_draft(levels=message.levels)
        if isinstance(message, SetDomainWeight):
            return self.update_draft(domain_weights=set_domain_weight(
                self.draft.domain_weights, message.domain_id, message.weight,
            ))
        if isinstance(message, SetDomainWeights):
            return self.update_draft(domain_weights=message.domain_weights)
        if isinstance(message, DistributeEvenly):
            return self.update_draft(domain_weights=distribute_equal_weights(self.domains))
        raise TypeError(f"Unsupported draft message: {type(message).__name__}")

    # --- Completion ---

    def commit(self, framework_id: str) -> AssessmentCriteria:
        """
        Build the aggregate to persist. Only legal from the preview step.
        Levels are dropped for percentage criteria.
        """
        if self.current_step != STEP_PREVIEW:
            raise InvariantViolation(
                f"commit() called from step '{self.current_step}', expected '{STEP_PREVIEW}'"
            )
        return AssessmentCriteria(
            framework_id=framework_id,
            type=self.draft.type,
            domain_weights=list(self.draft.domain_weights),
            levels=None if self._is_percentage() else list(self.draft.levels),
        )

    def reset(self):
        """Return to the first step and clear errors."""
        self.current_step = STEP_TYPE
        self.errors = {}

    def _is_percentage(self) -> bool:
        return self.draft.type == CRITERIA_PERCENTAGE
