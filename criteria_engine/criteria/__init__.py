"""Criteria package — assessment criteria model, wizard, validation and persistence."""

from .controller import CriteriaController
from .gateway import CriteriaGateway, CriteriaGatewayError
from .levels import (
    IncompleteLevelError,
    add_level,
    move_level_down,
    move_level_up,
    remove_level,
    update_level,
)
from .models import (
    AssessmentCriteria,
    CriteriaLevel,
    Domain,
    DomainWeight,
    LocalizedText,
    WizardDraft,
)
from .validator import FieldError, ValidationResult, validate_step
from .weights import (
    distribute_equal_weights,
    reconcile_weights,
    remaining_weight,
    set_domain_weight,
    total_weight,
)
from .wizard import (
    CriteriaWizard,
    DistributeEvenly,
    SetDomainWeight,
    SetDomainWeights,
    SetLevels,
    SetType,
)

__all__ = [
    "AssessmentCriteria",
    "CriteriaController",
    "CriteriaGateway",
    "CriteriaGatewayError",
    "CriteriaLevel",
    "CriteriaWizard",
    "DistributeEvenly",
    "Domain",
    "DomainWeight",
    "FieldError",
    "IncompleteLevelError",
    "LocalizedText",
    "SetDomainWeight",
    "SetDomainWeights",
    "SetLevels",
    "SetType",
    "ValidationResult",
    "WizardDraft",
    "add_level",
    "distribute_equal_weights",
    "move_level_down",
    "move_level_up",
    "reconcile_weights",
    "remaining_weight",
    "remove_level",
    "set_domain_weight",
    "total_weight",
    "update_level",
    "validate_step",
]
