import pytest

from criteria_engine.criteria import (
    AssessmentCriteria,
    CriteriaLevel,
    CriteriaWizard,
    DistributeEvenly,
    DomainWeight,
    LocalizedText,
    SetDomainWeight,
    SetDomainWeights,
    SetLevels,
    SetType,
)
from criteria_engine.safety.guardian import InvariantViolation

from .helpers import make_domains


def levels(*values):
    return tuple(
        CriteriaLevel(label=LocalizedText(en=f"L{v}", ar=f"م{v}"), value=v) for v in values
    )


@pytest.fixture
def wizard():
    return CriteriaWizard.start(None, make_domains("D1", "D2", "D3"))


def test_new_wizard_defaults(wizard):
    assert wizard.current_step == "type"
    assert wizard.draft.type == "percentage"
    assert wizard.draft.levels == []
    assert [(w.domain_id, w.weight) for w in wizard.draft.domain_weights] == [
        ("D1", 34), ("D2", 33), ("D3", 33),
    ]


def test_existing_criteria_prepopulate_draft():
    existing = AssessmentCriteria(
        framework_id="F1",
        type="maturity",
        domain_weights=[DomainWeight("D1", 70), DomainWeight("D2", 30)],
        levels=list(levels(10, 50)),
    )
    wizard = CriteriaWizard.start(existing, make_domains("D1", "D2"))

    assert wizard.current_step == "type"
    assert wizard.draft.type == "maturity"
    assert [lvl.value for lvl in wizard.draft.levels] == [10, 50]
    assert [w.weight for w in wizard.draft.domain_weights] == [70, 30]


def test_percentage_skips_levels_both_ways(wizard):
    assert wizard.go_to_next_step() is False
    assert wizard.current_step == "domains"

    wizard.go_to_prev_step()
    assert wizard.current_step == "type"


def test_maturity_visits_levels(wizard):
    wizard.apply(SetType("maturity"))
    wizard.go_to_next_step()
    assert wizard.current_step == "levels"

    wizard.apply(SetLevels(levels(20, 60, 90)))
    wizard.go_to_next_step()
    assert wizard.current_step == "domains"

    wizard.go_to_prev_step()
    assert wizard.current_step == "levels"
    wizard.go_to_prev_step()
    assert wizard.current_step == "type"


def test_invalid_step_blocks_transition(wizard):
    wizard.apply(SetType("compliance"))
    wizard.go_to_next_step()
    assert wizard.current_step == "levels"

    assert wizard.go_to_next_step() is False
    assert wizard.current_step == "levels"
    assert wizard.errors["levels"].key == "noLevels"

    wizard.apply(SetLevels(levels(30, 70, 100)))
    wizard.go_to_next_step()
    assert wizard.current_step == "domains"
    assert wizard.errors == {}


def test_weight_sum_gates_preview(wizard):
    wizard.go_to_next_step()
    wizard.apply(SetDomainWeight("D3", 32))

    assert wizard.go_to_next_step() is False
    assert wizard.current_step == "domains"
    assert wizard.errors["domains"].params["sum"] == 99

    wizard.apply(DistributeEvenly())
    wizard.go_to_next_step()
    assert wizard.current_step == "preview"


def test_going_back_clears_step_errors(wizard):
    wizard.go_to_next_step()
    wizard.apply(SetDomainWeight("D1", 90))
    assert wizard.go_to_next_step() is False
    assert "domains" in wizard.errors

    wizard.go_to_prev_step()
    assert wizard.current_step == "type"
    assert wizard.errors == {}


def test_next_on_preview_signals_completion(wizard):
    wizard.go_to_next_step()
    wizard.go_to_next_step()
    assert wizard.current_step == "preview"

    assert wizard.go_to_next_step() is True
    assert wizard.current_step == "preview"

    wizard.go_to_prev_step()
    assert wizard.current_step == "domains"


def test_switching_type_keeps_entered_work(wizard):
    wizard.apply(SetType("maturity"))
    wizard.apply(SetLevels(levels(10, 20)))
    wizard.apply(SetDomainWeights((DomainWeight("D1", 100),)))
    wizard.apply(SetType("percentage"))
    wizard.apply(SetType("compliance"))

    assert [lvl.value for lvl in wizard.draft.levels] == [10, 20]
    assert [(w.domain_id, w.weight) for w in wizard.draft.domain_weights] == [("D1", 100)]


def test_update_draft_merges_partial(wizard):
    wizard.update_draft(type="maturity")
    assert wizard.draft.type == "maturity"
    assert len(wizard.draft.domain_weights) == 3


def test_commit_outside_preview_is_a_defect(wizard):
    with pytest.raises(InvariantViolation):
        wizard.commit("F1")


def test_commit_drops_stale_levels_for_percentage(wizard):
    wizard.apply(SetType("maturity"))
    wizard.apply(SetLevels(levels(10, 20)))
    wizard.apply(SetType("percentage"))
    wizard.go_to_next_step()
    wizard.go_to_next_step()

    criteria = wizard.commit("F1")
    assert criteria.type == "percentage"
    assert criteria.levels is None
    assert "levels" not in criteria.to_dict()


def test_unsupported_message(wizard):
    with pytest.raises(TypeError):
        wizard.apply("SetType")
