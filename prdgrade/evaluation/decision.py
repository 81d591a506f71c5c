"""Decision & findings engine — severities, category status, verdict and next steps."""

from __future__ import annotations

from collections.abc import Iterable

from prdgrade.evaluation.categories import category_name
from prdgrade.logger import get_logger
from prdgrade.models.evaluation import (
    Action,
    CategoryScore,
    CategoryStatus,
    Decision,
    DecisionStatus,
    Effort,
    EvaluationReport,
    Finding,
    FindingCounts,
    NextSteps,
    RevisionTrigger,
    Severity,
    TriggerSeverity,
)

logger = get_logger(__name__)

APPROVE_THRESHOLD = 8.0
REVISE_THRESHOLD = 6.5
REJECT_THRESHOLD = 3.0

PASS_RATIO = 0.8
WARN_RATIO = 0.5

MAX_WEIGHTED_SCORE = 10.0

_TRIGGER_SEVERITY: dict[TriggerSeverity, Severity] = {
    TriggerSeverity.BLOCKER: Severity.CRITICAL,
    TriggerSeverity.MAJOR: Severity.HIGH,
    TriggerSeverity.MINOR: Severity.MEDIUM,
}

SEVERITY_RANK: dict[Severity, int] = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}

_FIX_RECOMMENDATIONS: dict[str, str] = {
    "problem_definition": "Add detailed problem statement with evidence and root cause analysis",
    "user_understanding": "Define at least 3 personas with pain points and behaviors; add user stories",
    "market_awareness": "Add competitive analysis with 3-5 alternatives and differentiation points",
    "solution_fit": "Document solution options with pros/cons and selection rationale",
    "scope_discipline": "Define clear objectives and out-of-scope items",
    "requirements_quality": "Add functional requirements with acceptance criteria and NFRs",
    "ux_coverage": "Add UX requirements including wireframes, flows, and accessibility",
    "technical_feasibility": "Document technical architecture with integration points and tech stack",
    "metrics_quality": "Define success metrics with targets, baselines, and measurement methods",
    "risk_management": "Identify risks with mitigations; document assumptions and constraints",
}
DEFAULT_FIX_RECOMMENDATION = "Review and improve this category"

_HIGH_EFFORT_CATEGORIES = frozenset(
    {"technical_feasibility", "requirements_quality", "market_awareness"}
)


def severity_from_trigger(severity: str) -> Severity:
    """blocker → critical, major → high, minor → medium, anything else → low."""
    try:
        return _TRIGGER_SEVERITY[TriggerSeverity(severity)]
    except ValueError:
        return Severity.LOW


def fix_recommendation(category_id: str) -> str:
    return _FIX_RECOMMENDATIONS.get(category_id, DEFAULT_FIX_RECOMMENDATION)


def estimate_effort(category_id: str) -> Effort:
    return Effort.HIGH if category_id in _HIGH_EFFORT_CATEGORIES else Effort.MEDIUM


def finding_from_trigger(trigger: RevisionTrigger) -> Finding:
    return Finding(
        id=trigger.issue_id,
        category=trigger.category,
        severity=severity_from_trigger(trigger.severity),
        title=trigger.description,
        description=trigger.description,
        recommendation=fix_recommendation(trigger.category),
        owner=trigger.recommended_owner,
        effort=estimate_effort(trigger.category),
    )


def category_status(score: float, max_score: float) -> CategoryStatus:
    if max_score <= 0:
        return CategoryStatus.FAIL
    ratio = score / max_score
    if ratio >= PASS_RATIO:
        return CategoryStatus.PASS
    if ratio >= WARN_RATIO:
        return CategoryStatus.WARN
    return CategoryStatus.FAIL


def compute_weighted_score(categories: Iterable[CategoryScore]) -> float:
    """Σ score × weight, clamped to [0, 10] in case overridden weights sum above 1."""
    total = sum(cs.weighted_contribution for cs in categories)
    return min(max(total, 0.0), MAX_WEIGHTED_SCORE)


def count_findings(findings: Iterable[Finding]) -> FindingCounts:
    counts = FindingCounts()
    for finding in findings:
        setattr(counts, finding.severity.value, getattr(counts, finding.severity.value) + 1)
        counts.total += 1
    return counts


def decide(weighted_score: float, findings: Iterable[Finding]) -> Decision:
    """Apply the verdict policy. Reject conditions are checked before any score threshold."""
    counts = count_findings(findings)

    if counts.critical:
        status = DecisionStatus.REJECT
        rationale = f"{counts.critical} blocking finding(s) must be resolved before approval"
    elif weighted_score < REJECT_THRESHOLD:
        status = DecisionStatus.REJECT
        rationale = f"Weighted score {weighted_score:.1f} is below the minimum of {REJECT_THRESHOLD:.1f}"
    elif weighted_score >= APPROVE_THRESHOLD:
        status = DecisionStatus.APPROVE
        rationale = f"Weighted score {weighted_score:.1f} meets the approval threshold of {APPROVE_THRESHOLD:.1f}"
    elif weighted_score >= REVISE_THRESHOLD:
        status = DecisionStatus.REVISE
        rationale = f"Weighted score {weighted_score:.1f} requires targeted revisions before approval"
    else:
        status = DecisionStatus.HUMAN_REVIEW
        rationale = f"Weighted score {weighted_score:.1f} is below {REVISE_THRESHOLD:.1f}; human review required"

    return Decision(status=status, rationale=rationale, finding_counts=counts)


def _action(finding: Finding) -> Action:
    return Action(
        finding_id=finding.id,
        category=finding.category,
        severity=finding.severity,
        action=finding.recommendation or finding.title,
        owner=finding.owner,
        effort=finding.effort,
    )


def build_next_steps(findings: Iterable[Finding], rerun_command: str = "") -> NextSteps:
    """Critical findings are immediate; the rest are recommended, most severe first."""
    findings = list(findings)
    immediate = [_action(f) for f in findings if f.severity == Severity.CRITICAL]
    remainder = sorted(
        (f for f in findings if f.severity != Severity.CRITICAL),
        key=lambda f: SEVERITY_RANK[f.severity],
    )
    return NextSteps(
        immediate=immediate,
        recommended=[_action(f) for f in remainder],
        rerun_command=rerun_command,
    )


def generate_evaluation_summary(report: EvaluationReport) -> str:
    review = report.review_type.upper()
    parts = [f"Overall score: {report.weighted_score:.1f}/10"]

    if report.decision and report.decision.finding_counts.critical:
        parts.append(f"{report.decision.finding_counts.critical} blocking issues found")

    scored = [cs for cs in report.categories if cs.status != CategoryStatus.PENDING]
    strong = [cs for cs in scored if cs.score >= 8]
    weak = [cs for cs in scored if cs.score < 6]
    if strong:
        parts.append(f"{len(strong)} categories are strong")
    if weak:
        parts.append(
            f"{len(weak)} categories need improvement ("
            + ", ".join(category_name(cs.category) for cs in weak)
            + ")"
        )

    verdicts = {
        DecisionStatus.APPROVE: f"{review} is ready for approval",
        DecisionStatus.REVISE: f"{review} needs targeted revisions before approval",
        DecisionStatus.REJECT: f"{review} has blocking issues that must be resolved",
        DecisionStatus.HUMAN_REVIEW: f"{review} requires human review due to low overall score",
    }
    if report.decision:
        parts.append(verdicts[report.decision.status])

    return ". ".join(parts) + "."


def finalize_report(report: EvaluationReport, rerun_command: str = "") -> EvaluationReport:
    """Compute score, decision, next steps and summary; return a new finalized report.

    Pending categories keep their status and contribute their (zero) score.
    """
    categories = [
        cs
        if cs.status == CategoryStatus.PENDING
        else cs.model_copy(update={"status": category_status(cs.score, cs.max_score)})
        for cs in report.categories
    ]
    weighted = compute_weighted_score(categories)
    decision = decide(weighted, report.findings)

    finalized = report.model_copy(
        update={
            "categories": categories,
            "weighted_score": weighted,
            "decision": decision,
            "next_steps": build_next_steps(report.findings, rerun_command),
            "finalized": True,
        }
    )
    finalized.summary = generate_evaluation_summary(finalized)

    logger.info(
        "Evaluation finalized",
        document=report.metadata.document,
        weighted_score=round(weighted, 2),
        decision=decision.status.value,
        findings=decision.finding_counts.total,
    )
    return finalized
