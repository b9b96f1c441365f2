import json

from criteria_engine.criteria import (
    AssessmentCriteria,
    CriteriaLevel,
    DomainWeight,
    LocalizedText,
    WizardDraft,
)
from criteria_engine.reporting import build_summary, export_json

from .helpers import make_domains


def criteria():
    return AssessmentCriteria(
        framework_id="F1",
        type="maturity",
        domain_weights=[DomainWeight("D1", 20), DomainWeight("D2", 50), DomainWeight("D9", 30)],
        levels=[
            CriteriaLevel(LocalizedText("High", "عالي"), 80, LocalizedText("h", "ع")),
            CriteriaLevel(LocalizedText("Low", ""), 10, LocalizedText("l", "")),
        ],
        created_at="2026-01-01T00:00:00+00:00",
    )


def test_summary_orders_rows_and_resolves_names():
    summary = build_summary(criteria(), make_domains("D1", "D2"), language="ar")

    assert [row["domain_id"] for row in summary.domain_rows] == ["D2", "D9", "D1"]
    assert summary.domain_rows[0]["name"] == "مجال D2"
    assert summary.domain_rows[1]["name"] == "D9"
    assert [row["value"] for row in summary.level_rows] == [10, 80]
    # Missing Arabic text falls back to English
    assert summary.level_rows[0]["label"] == "Low"
    assert summary.total_weight == 100
    assert summary.weight_ok is True


def test_summary_of_percentage_draft_has_no_levels():
    draft = WizardDraft(
        type="percentage",
        levels=criteria().levels,
        domain_weights=[DomainWeight("D1", 60), DomainWeight("D2", 30)],
    )
    summary = build_summary(draft, make_domains("D1", "D2"))

    assert summary.level_rows == []
    assert summary.weight_ok is False
    assert summary.framework_id == ""


def test_export_json(tmp_path):
    summary = build_summary(criteria(), make_domains("D1", "D2"))
    path = export_json(summary, tmp_path / "out", "F1")

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert path.name == "assessment_criteria_F1.json"
    assert payload["metadata"]["framework_id"] == "F1"
    assert payload["criteria"]["type"] == "maturity"
    assert payload["criteria"]["weight_ok"] is True
