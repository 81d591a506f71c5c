"""Tests for the deterministic rubric category scorer."""

from __future__ import annotations

import pytest

from prdgrade.evaluation.categories import categories_for_document, standard_categories
from prdgrade.evaluation.category_scoring import (
    UNKNOWN_CATEGORY_SCORE,
    justification_for,
    score_category,
    score_document,
    trigger_severity,
)
from prdgrade.models.evaluation import Category, TriggerSeverity
from prdgrade.models.prd import (
    KeyResult,
    OKR,
    Objective,
    Objectives,
    CustomSection,
    Persona,
    PRDDocument,
)


class TestTriggerSeverity:
    @pytest.mark.parametrize(
        "score,severity",
        [
            (0.0, TriggerSeverity.BLOCKER),
            (3.0, TriggerSeverity.BLOCKER),
            (3.5, TriggerSeverity.MAJOR),
            (4.99, TriggerSeverity.MAJOR),
            (5.0, TriggerSeverity.MINOR),
            (6.99, TriggerSeverity.MINOR),
            (7.0, None),
            (10.0, None),
        ],
    )
    def test_thresholds(self, score, severity):
        assert trigger_severity(score) == severity


class TestJustification:
    @pytest.mark.parametrize(
        "score,text",
        [
            (9.0, "UX Coverage is strong and well-documented"),
            (6.0, "UX Coverage is adequate but could be improved"),
            (4.5, "UX Coverage has significant gaps that should be addressed"),
            (2.0, "UX Coverage is weak and requires substantial work"),
            (0.0, "UX Coverage is missing or fundamentally incomplete"),
        ],
    )
    def test_bands(self, score, text):
        assert justification_for("ux_coverage", score) == text

    @pytest.mark.parametrize(
        "category_id,text",
        [
            ("market_awareness", "No market information defined"),
            ("ux_coverage", "No UX requirements defined"),
            ("technical_feasibility", "No technical architecture defined"),
        ],
    )
    def test_absent_section(self, empty_prd, category_id, text):
        category = next(c for c in standard_categories() if c.id == category_id)
        assert score_category(empty_prd, category).justification == text

    def test_absent_section_text_in_triggers(self, empty_prd):
        triggers = {t.category: t for t in score_document(empty_prd).revision_triggers}
        assert triggers["market_awareness"].description == "No market information defined"
        assert triggers["problem_definition"].description == (
            "Problem Definition is missing or fundamentally incomplete"
        )

    def test_present_but_empty_section_uses_bands(self):
        doc = PRDDocument.model_validate({"market": {}})
        category = next(c for c in standard_categories() if c.id == "market_awareness")
        assert score_category(doc, category).justification == (
            "Market Awareness is missing or fundamentally incomplete"
        )


class TestEmptyDocument:
    def test_every_category_blocks(self, empty_prd):
        assessment = score_document(empty_prd)
        assert len(assessment.category_scores) == 10
        assert all(cs.score == 0.0 for cs in assessment.category_scores)
        assert len(assessment.blockers) == 10
        assert assessment.weighted_score == 0.0

    def test_revision_triggers_numbered(self, empty_prd):
        triggers = score_document(empty_prd).revision_triggers
        assert [t.issue_id for t in triggers] == [f"REV-{n}" for n in range(1, 11)]
        assert {t.severity for t in triggers} == {"blocker"}
        assert triggers[0].category == "problem_definition"
        assert triggers[0].recommended_owner == "problem-discovery"


class TestFullDocument:
    def test_scores(self, full_prd):
        assessment = score_document(full_prd)
        scores = {cs.category: cs.score for cs in assessment.category_scores}
        assert scores["problem_definition"] == pytest.approx(9.5)
        assert all(score == 10.0 for cid, score in scores.items() if cid != "problem_definition")

    def test_no_triggers(self, full_prd):
        assessment = score_document(full_prd)
        assert assessment.revision_triggers == []
        assert assessment.blockers == []
        assert assessment.weighted_score == pytest.approx(9.9)

    def test_evidence_recorded(self, full_prd):
        cs = score_category(full_prd, standard_categories()[0])
        assert "Problem statement present in executive summary" in cs.evidence
        assert "Confidence: 80%" in cs.evidence


class TestBounds:
    def test_scores_capped_at_ten(self, full_prd):
        # Solution fit earns 12 raw points on the full document.
        solution_fit = next(c for c in standard_categories() if c.id == "solution_fit")
        assert score_category(full_prd, solution_fit).score == 10.0

    def test_scores_within_bounds(self, empty_prd, minimal_prd, full_prd):
        for doc in (empty_prd, minimal_prd, full_prd):
            for cs in score_document(doc).category_scores:
                assert 0.0 <= cs.score <= 10.0
                assert cs.max_score == 10.0


class TestCategories:
    def test_unknown_category_scores_five(self, empty_prd):
        cs = score_category(empty_prd, Category(id="custom:legal", name="Legal", weight=0.05))
        assert cs.score == UNKNOWN_CATEGORY_SCORE
        assert cs.justification == "No deterministic scorer for this category"

    def test_custom_category_raises_minor_trigger(self):
        doc = PRDDocument(custom_sections=[CustomSection(id="legal")])
        assessment = score_document(doc, categories_for_document(doc))
        custom = [t for t in assessment.revision_triggers if t.category == "custom:legal"]
        assert len(custom) == 1
        assert custom[0].severity == "minor"
        assert custom[0].recommended_owner == "prd-lead"

    def test_weighted_score_normalized_by_weight(self):
        categories = [
            Category(id="metrics_quality", name="Metrics", weight=0.5),
            Category(id="custom:legal", name="Legal", weight=0.5),
        ]
        doc = PRDDocument(
            objectives=Objectives(
                okrs=[OKR(objective=Objective(key_results=[KeyResult(target="10", baseline="5")]))]
            )
        )
        # metrics: 4 + 2 + 2 = 8, custom: 5
        assert score_document(doc, categories).weighted_score == pytest.approx(6.5)


class TestMonotonicity:
    def test_user_understanding_grows_with_personas(self):
        previous = -1.0
        for n in range(5):
            doc = PRDDocument(
                personas=[
                    Persona(
                        id=f"P{i}",
                        name=f"Persona {i}",
                        role="Engineer",
                        description="Handles tickets",
                        goals=["Fast answers"],
                        pain_points=["Slow search"],
                    )
                    for i in range(n)
                ]
            )
            cs = score_category(doc, next(c for c in standard_categories() if c.id == "user_understanding"))
            assert cs.score >= previous
            previous = cs.score

    def test_metrics_grow_with_targeted_key_results(self):
        metrics = next(c for c in standard_categories() if c.id == "metrics_quality")
        previous = -1.0
        for n in range(4):
            doc = PRDDocument(
                objectives=Objectives(
                    okrs=[OKR(objective=Objective(key_results=[KeyResult(target="10") for _ in range(n)]))]
                )
            )
            score = score_category(doc, metrics).score
            assert score >= previous
            previous = score
