"""Completeness aggregator — section scores → overall percentage, grade and recommendations."""

from __future__ import annotations

from collections.abc import Iterable

from prdgrade.evaluation.sections import SECTION_SCORERS, SectionScorer
from prdgrade.logger import get_logger
from prdgrade.models.completeness import (
    CompletenessReport,
    Grade,
    RecommendPriority,
    Recommendation,
    SectionScore,
    SectionStatus,
)
from prdgrade.models.prd import PRDDocument

logger = get_logger(__name__)

# Highest grade first; the first threshold the score reaches wins.
_GRADE_THRESHOLDS: tuple[tuple[float, Grade], ...] = (
    (90.0, Grade.A),
    (80.0, Grade.B),
    (70.0, Grade.C),
    (60.0, Grade.D),
)

CRITICAL_SECTION_SCORE = 50.0


def score_to_grade(score: float) -> Grade:
    for threshold, grade in _GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return Grade.F


def issue_priority(section: SectionScore) -> RecommendPriority:
    """Priority for an issue raised by ``section``; suggestions are always low."""
    if section.required and section.score < CRITICAL_SECTION_SCORE:
        return RecommendPriority.CRITICAL
    if section.required:
        return RecommendPriority.HIGH
    return RecommendPriority.MEDIUM


def build_recommendations(sections: Iterable[SectionScore]) -> list[Recommendation]:
    """Flatten section issues and suggestions into recommendations, in section order."""
    recommendations: list[Recommendation] = []
    for section in sections:
        priority = issue_priority(section)
        recommendations.extend(
            Recommendation(section=section.name, priority=priority, message=issue)
            for issue in section.issues
        )
        recommendations.extend(
            Recommendation(section=section.name, priority=RecommendPriority.LOW, message=suggestion)
            for suggestion in section.suggestions
        )
    return recommendations


def generate_summary(report: CompletenessReport) -> str:
    lines = [
        f"PRD Completeness: {report.overall_score:.1f}% (Grade: {report.grade.value})",
        f"Required sections: {report.required_complete}/{report.required_total} complete",
        f"Optional sections: {report.optional_complete}/{report.optional_total} complete",
    ]
    critical = len(report.recommendations_by_priority(RecommendPriority.CRITICAL))
    if critical:
        lines.append("")
        lines.append(f"Critical issues requiring attention: {critical}")
    return "\n".join(lines)


def check_completeness(
    document: PRDDocument | None,
    scorers: Iterable[SectionScorer] | None = None,
) -> CompletenessReport:
    """Score every registered section of ``document`` and aggregate the results.

    ``None`` is treated as an empty document. Never raises for a valid-shape
    document: an empty draft simply gets the lowest scores.
    """
    doc = document if document is not None else PRDDocument()
    scorers = list(scorers) if scorers is not None else list(SECTION_SCORERS.values())

    sections = [scorer.score(doc) for scorer in scorers]

    total_points = sum(s.max_points for s in sections)
    earned_points = sum(s.score / 100 * s.max_points for s in sections)
    overall = earned_points / total_points * 100 if total_points else 0.0
    overall = min(max(overall, 0.0), 100.0)

    required = [s for s in sections if s.required]
    optional = [s for s in sections if not s.required]

    report = CompletenessReport(
        overall_score=overall,
        grade=score_to_grade(overall),
        sections=sections,
        recommendations=build_recommendations(sections),
        required_complete=sum(1 for s in required if s.status == SectionStatus.COMPLETE),
        required_total=len(required),
        optional_complete=sum(1 for s in optional if s.status == SectionStatus.COMPLETE),
        optional_total=len(optional),
    )
    report.summary = generate_summary(report)

    logger.info(
        "Completeness checked",
        document_id=doc.metadata.id,
        score=round(overall, 1),
        grade=report.grade.value,
        required_complete=report.required_complete,
        recommendations=len(report.recommendations),
    )
    return report
