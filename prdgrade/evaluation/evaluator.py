"""Rubric evaluator — builds EvaluationReports from documents.

Two entry points:

* ``score_to_evaluation`` runs the deterministic category scorer and returns
  a finalized report.
* ``generate_evaluation_template`` returns an unscored report whose
  categories are all ``pending``; an external judge fills it in through
  ``apply_judge_scores`` and the caller finalizes it with
  ``decision.finalize_report``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import PurePath

from prdgrade.config import Settings, get_settings
from prdgrade.evaluation.categories import (
    apply_weight_overrides,
    categories_for_document,
    renormalize_weights,
)
from prdgrade.evaluation.category_scoring import MAX_CATEGORY_SCORE, score_document
from prdgrade.evaluation.decision import category_status, finalize_report, finding_from_trigger
from prdgrade.logger import get_logger
from prdgrade.models.evaluation import (
    CategoryScore,
    CategoryStatus,
    EvaluationReport,
    Finding,
    ReportMetadata,
)
from prdgrade.models.prd import PRDDocument

logger = get_logger(__name__)


def _report_metadata(doc: PRDDocument, filename: str, generated_by: str) -> ReportMetadata:
    return ReportMetadata(
        document=PurePath(filename).name if filename else "",
        document_id=doc.metadata.id,
        document_title=doc.metadata.title,
        document_version=doc.metadata.version,
        generated_by=generated_by,
    )


def score_to_evaluation(
    doc: PRDDocument,
    filename: str = "",
    settings: Settings | None = None,
) -> EvaluationReport:
    """Score ``doc`` deterministically and return a finalized evaluation report."""
    settings = settings or get_settings()
    assessment = score_document(doc)

    categories = [
        cs.model_copy(update={"status": category_status(cs.score, cs.max_score)})
        for cs in assessment.category_scores
    ]
    findings = [finding_from_trigger(t) for t in assessment.revision_triggers]

    report = EvaluationReport(
        review_type=settings.review_type,
        metadata=_report_metadata(doc, filename, settings.generated_by),
        categories=categories,
        findings=findings,
    )
    report = finalize_report(report, settings.rerun_command(filename))

    logger.info(
        "Document evaluated",
        document=report.metadata.document,
        document_id=report.metadata.document_id,
        weighted_score=round(report.weighted_score, 2),
        decision=report.decision.status.value if report.decision else None,
        blockers=len(assessment.blockers),
    )
    return report


def generate_evaluation_template(
    doc: PRDDocument,
    filename: str = "",
    weights: Mapping[str, float] | None = None,
    renormalize: bool = False,
    settings: Settings | None = None,
) -> EvaluationReport:
    """Return an unscored report with one pending category per rubric dimension.

    Custom document sections become ``custom:<id>`` categories. ``weights``
    overrides weights by category id; with ``renormalize`` the resulting
    weights are scaled to sum to 1.0.
    """
    settings = settings or get_settings()

    categories = categories_for_document(doc)
    if weights:
        categories = apply_weight_overrides(categories, weights)
    if renormalize:
        categories = renormalize_weights(categories)

    report = EvaluationReport(
        review_type=settings.review_type,
        metadata=_report_metadata(doc, filename, settings.template_generated_by),
        categories=[
            CategoryScore(
                category=c.id,
                score=0.0,
                max_score=MAX_CATEGORY_SCORE,
                weight=c.weight,
                status=CategoryStatus.PENDING,
            )
            for c in categories
        ],
    )
    logger.debug(
        "Evaluation template generated",
        document=report.metadata.document,
        categories=len(report.categories),
    )
    return report


def apply_judge_scores(
    template: EvaluationReport,
    scores: Mapping[str, float],
    findings: Iterable[Finding] = (),
    justifications: Mapping[str, str] | None = None,
) -> EvaluationReport:
    """Merge externally produced category scores and findings into ``template``.

    Returns a new, not yet finalized report. Categories missing from
    ``scores`` stay pending. Raises ``ValueError`` for a finalized template
    or an unknown category id, and ``ValidationError`` for a score outside
    0–10.
    """
    if template.finalized:
        raise ValueError("Cannot apply scores to a finalized report")

    known = {cs.category for cs in template.categories}
    unknown = sorted(set(scores) - known)
    if unknown:
        raise ValueError(f"Unknown categories: {', '.join(unknown)}")

    justifications = justifications or {}
    categories = []
    for cs in template.categories:
        if cs.category not in scores:
            categories.append(cs)
            continue
        score = scores[cs.category]
        categories.append(
            CategoryScore(
                **{
                    **cs.model_dump(exclude={"weighted_contribution"}),
                    "score": score,
                    "status": category_status(score, cs.max_score),
                    "justification": justifications.get(cs.category, cs.justification),
                }
            )
        )

    return template.model_copy(
        update={
            "categories": categories,
            "findings": [*template.findings, *findings],
        }
    )
