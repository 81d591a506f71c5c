"""Deterministic rubric scoring — one 0–10 score per category from document structure."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from prdgrade.evaluation.categories import category_name, category_owner, standard_categories
from prdgrade.logger import get_logger
from prdgrade.models.evaluation import (
    Category,
    CategoryAssessment,
    CategoryScore,
    RevisionTrigger,
    TriggerSeverity,
)
from prdgrade.models.prd import (
    ESSENTIAL_NFR_CATEGORIES,
    AlternativeType,
    EvidenceStrength,
    PRDDocument,
)

logger = get_logger(__name__)

MAX_CATEGORY_SCORE = 10.0
BLOCKER_THRESHOLD = 3.0
MAJOR_THRESHOLD = 5.0
REVISION_THRESHOLD = 7.0
CONFIDENT = 0.7
UNKNOWN_CATEGORY_SCORE = 5.0

# Lower bound of each justification band, highest first.
_JUSTIFICATION_BANDS: tuple[tuple[float, str], ...] = (
    (8.0, "{name} is strong and well-documented"),
    (6.0, "{name} is adequate but could be improved"),
    (4.0, "{name} has significant gaps that should be addressed"),
    (2.0, "{name} is weak and requires substantial work"),
    (0.0, "{name} is missing or fundamentally incomplete"),
)

# Optional section checked by a category, and the justification used when it is absent.
_ABSENT_SECTION_JUSTIFICATIONS: dict[str, tuple[str, str]] = {
    "market_awareness": ("market", "No market information defined"),
    "ux_coverage": ("ux_requirements", "No UX requirements defined"),
    "technical_feasibility": ("technical_architecture", "No technical architecture defined"),
}

CategoryScorer = Callable[[PRDDocument], tuple[float, list[str]]]

_CATEGORY_SCORERS: dict[str, CategoryScorer] = {}


def category_scorer(category_id: str) -> Callable[[CategoryScorer], CategoryScorer]:
    """Register a function returning ``(points, evidence)`` for a category."""

    def decorator(fn: CategoryScorer) -> CategoryScorer:
        _CATEGORY_SCORERS[category_id] = fn
        return fn

    return decorator


def justification_for(category_id: str, score: float, doc: PRDDocument | None = None) -> str:
    absent = _ABSENT_SECTION_JUSTIFICATIONS.get(category_id)
    if doc is not None and absent is not None and getattr(doc, absent[0]) is None:
        return absent[1]

    name = category_name(category_id)
    for lower_bound, template in _JUSTIFICATION_BANDS:
        if score >= lower_bound:
            return template.format(name=name)
    return _JUSTIFICATION_BANDS[-1][1].format(name=name)


def trigger_severity(score: float) -> TriggerSeverity | None:
    """Severity of the revision trigger raised for ``score``, or None if no revision is needed."""
    if score <= BLOCKER_THRESHOLD:
        return TriggerSeverity.BLOCKER
    if score < MAJOR_THRESHOLD:
        return TriggerSeverity.MAJOR
    if score < REVISION_THRESHOLD:
        return TriggerSeverity.MINOR
    return None


# ────────────────────────────── Category scorers ─────────────────────────────


@category_scorer("problem_definition")
def _problem_definition(doc: PRDDocument) -> tuple[float, list[str]]:
    points = 0.0
    evidence: list[str] = []

    has_statement = bool(doc.executive_summary.problem_statement)
    if has_statement:
        points += 3
        evidence.append("Problem statement present in executive summary")

    problem = doc.problem
    if problem is None:
        if doc.executive_summary.expected_outcomes:
            points += 1
            evidence.append("Expected outcomes defined")
        return points, evidence

    if problem.statement and not has_statement:
        points += 3
        evidence.append("Detailed problem statement present")
    if problem.user_impact:
        points += 2
        evidence.append("User impact documented")
    if problem.evidence:
        points += 2
        evidence.append(f"{len(problem.evidence)} evidence sources")
        if any(e.strength == EvidenceStrength.HIGH.value for e in problem.evidence):
            points += 0.5
    if problem.confidence >= CONFIDENT:
        points += 1
        evidence.append(f"Confidence: {problem.confidence * 100:.0f}%")
    if problem.root_causes:
        points += 1
        evidence.append(f"{len(problem.root_causes)} root causes identified")
    return points, evidence


@category_scorer("user_understanding")
def _user_understanding(doc: PRDDocument) -> tuple[float, list[str]]:
    points = 0.0
    evidence: list[str] = []
    personas = doc.personas

    if personas:
        points += 3
        evidence.append(f"{len(personas)} personas defined")
        if any(p.pain_points for p in personas):
            points += 2
            evidence.append("Pain points documented")
        if any(p.behaviors for p in personas):
            points += 1
            evidence.append("Behaviors documented")
        if any(p.is_primary for p in personas):
            points += 1
            evidence.append("Primary persona identified")
        if len(personas) >= 3:
            points += 1
            evidence.append("Multiple personas (3+)")

    if doc.user_stories:
        points += 2
        evidence.append(f"{len(doc.user_stories)} user stories")
    return points, evidence


@category_scorer("market_awareness")
def _market_awareness(doc: PRDDocument) -> tuple[float, list[str]]:
    market = doc.market
    if market is None:
        return 0.0, []

    points = 0.0
    evidence: list[str] = []
    if market.alternatives:
        points += 4
        evidence.append(f"{len(market.alternatives)} alternatives analyzed")
        kinds = {alt.type for alt in market.alternatives}
        has_competitor = AlternativeType.COMPETITOR.value in kinds
        has_workaround = bool(
            kinds & {AlternativeType.WORKAROUND.value, AlternativeType.DO_NOTHING.value}
        )
        if has_competitor and has_workaround:
            points += 2
            evidence.append("Both competitors and alternatives covered")
    if market.differentiation:
        points += 3
        evidence.append(f"{len(market.differentiation)} differentiation points")
    if market.market_risks:
        points += 1
        evidence.append("Market risks identified")
    return points, evidence


@category_scorer("solution_fit")
def _solution_fit(doc: PRDDocument) -> tuple[float, list[str]]:
    points = 0.0
    evidence: list[str] = []

    if doc.executive_summary.proposed_solution:
        points += 2
        evidence.append("Proposed solution in executive summary")

    solution = doc.solution
    if solution is None:
        return points, evidence

    options = solution.solution_options
    if options:
        points += 3
        evidence.append(f"{len(options)} solution options")
        if len(options) >= 2:
            points += 1
            evidence.append("Multiple options considered")
    if solution.selected_solution_id:
        points += 2
        evidence.append("Solution selected")
    if solution.solution_rationale:
        points += 2
        evidence.append("Selection rationale provided")
    if any(opt.problems_addressed for opt in options):
        points += 1
        evidence.append("Problem mapping present")
    if solution.confidence >= CONFIDENT:
        points += 1
        evidence.append(f"Confidence: {solution.confidence * 100:.0f}%")
    return points, evidence


@category_scorer("scope_discipline")
def _scope_discipline(doc: PRDDocument) -> tuple[float, list[str]]:
    points = 0.0
    evidence: list[str] = []

    okrs = doc.objectives.okrs
    if okrs:
        points += 3
        evidence.append(f"{len(okrs)} OKRs defined")
    if doc.out_of_scope:
        points += 4
        evidence.append(f"{len(doc.out_of_scope)} out-of-scope items defined")
    key_results = doc.objectives.key_results
    if key_results:
        points += 2
        evidence.append(f"{len(key_results)} key results defined")
    if doc.solution is not None and any(o.tradeoffs for o in doc.solution.solution_options):
        points += 1
        evidence.append("Tradeoffs documented")
    return points, evidence


@category_scorer("requirements_quality")
def _requirements_quality(doc: PRDDocument) -> tuple[float, list[str]]:
    points = 0.0
    evidence: list[str] = []

    functional = doc.requirements.functional
    if functional:
        points += 3
        evidence.append(f"{len(functional)} functional requirements")
        if any(r.acceptance_criteria for r in functional):
            points += 2
            evidence.append("Acceptance criteria present")
        if any(r.user_story_ids for r in functional):
            points += 1
            evidence.append("Traceability to user stories")
        if any(r.priority for r in functional):
            points += 1
            evidence.append("Priorities assigned")

    non_functional = doc.requirements.non_functional
    if non_functional:
        points += 2
        evidence.append(f"{len(non_functional)} NFRs")
        covered = {nfr.category for nfr in non_functional}
        if sum(1 for c in ESSENTIAL_NFR_CATEGORIES if c.value in covered) >= 2:
            points += 1
            evidence.append("Essential NFR categories covered")
    return points, evidence


@category_scorer("ux_coverage")
def _ux_coverage(doc: PRDDocument) -> tuple[float, list[str]]:
    ux = doc.ux_requirements
    if ux is None:
        return 0.0, []

    points = 0.0
    evidence: list[str] = []
    if ux.design_principles:
        points += 2
        evidence.append("Design principles defined")
    if ux.wireframes:
        points += 2
        evidence.append(f"{len(ux.wireframes)} wireframes")
    if ux.interaction_flows:
        points += 3
        evidence.append(f"{len(ux.interaction_flows)} interaction flows")
    if ux.accessibility.standard:
        points += 2
        evidence.append("Accessibility requirements defined")
    if ux.brand_guidelines:
        points += 1
        evidence.append("Brand guidelines referenced")
    return points, evidence


@category_scorer("technical_feasibility")
def _technical_feasibility(doc: PRDDocument) -> tuple[float, list[str]]:
    arch = doc.technical_architecture
    if arch is None:
        return 0.0, []

    points = 0.0
    evidence: list[str] = []
    if arch.overview:
        points += 2
        evidence.append("Architecture overview present")
    if arch.system_diagram:
        points += 2
        evidence.append("System diagram provided")
    if arch.integration_points:
        points += 2
        evidence.append(f"{len(arch.integration_points)} integration points")
    if arch.technology_stack.is_defined:
        points += 2
        evidence.append("Technology stack defined")
    if arch.security_design:
        points += 1
        evidence.append("Security design addressed")
    if arch.scalability_design:
        points += 1
        evidence.append("Scalability design addressed")
    return points, evidence


@category_scorer("metrics_quality")
def _metrics_quality(doc: PRDDocument) -> tuple[float, list[str]]:
    key_results = doc.objectives.key_results
    if not key_results:
        return 0.0, []

    points = 4.0
    evidence = [f"{len(key_results)} key results defined"]
    if any(kr.target for kr in key_results):
        points += 2
        evidence.append("Targets defined for key results")
    if any(kr.baseline for kr in key_results):
        points += 2
        evidence.append("Baselines documented")
    if any(kr.measurement_method for kr in key_results):
        points += 2
        evidence.append("Measurement methods specified")
    return points, evidence


@category_scorer("risk_management")
def _risk_management(doc: PRDDocument) -> tuple[float, list[str]]:
    points = 0.0
    evidence: list[str] = []
    section = doc.assumptions

    if section is not None and section.assumptions:
        points += 3
        evidence.append(f"{len(section.assumptions)} assumptions documented")
        if any(a.validated for a in section.assumptions):
            points += 1
            evidence.append("Some assumptions validated")
    if doc.risks:
        points += 3
        evidence.append(f"{len(doc.risks)} risks identified")
        if any(r.mitigation for r in doc.risks):
            points += 1
            evidence.append("Mitigations documented")
    if section is not None and section.constraints:
        points += 2
        evidence.append(f"{len(section.constraints)} constraints documented")
    return points, evidence


# ────────────────────────────── Assessment ───────────────────────────────────


def score_category(doc: PRDDocument, category: Category) -> CategoryScore:
    scorer = _CATEGORY_SCORERS.get(category.id)
    if scorer is None:
        return CategoryScore(
            category=category.id,
            score=UNKNOWN_CATEGORY_SCORE,
            max_score=MAX_CATEGORY_SCORE,
            weight=category.weight,
            justification="No deterministic scorer for this category",
        )

    points, evidence = scorer(doc)
    score = min(max(points, 0.0), MAX_CATEGORY_SCORE)
    return CategoryScore(
        category=category.id,
        score=score,
        max_score=MAX_CATEGORY_SCORE,
        weight=category.weight,
        justification=justification_for(category.id, score, doc),
        evidence=evidence,
    )


def score_document(
    doc: PRDDocument, categories: Iterable[Category] | None = None
) -> CategoryAssessment:
    """Score ``doc`` against each category (the standard rubric by default)."""
    categories = list(categories) if categories is not None else standard_categories()

    assessment = CategoryAssessment()
    total_weight = 0.0
    weighted_total = 0.0

    for category in categories:
        cs = score_category(doc, category)
        assessment.category_scores.append(cs)
        weighted_total += cs.score * category.weight
        total_weight += category.weight

        if cs.score <= BLOCKER_THRESHOLD:
            assessment.blockers.append(f"{category.id}: {cs.justification}")

        severity = trigger_severity(cs.score)
        if severity is not None:
            assessment.revision_triggers.append(
                RevisionTrigger(
                    issue_id=f"REV-{len(assessment.revision_triggers) + 1}",
                    category=category.id,
                    severity=severity.value,
                    description=cs.justification,
                    recommended_owner=category_owner(category.id),
                )
            )

    if total_weight > 0:
        assessment.weighted_score = weighted_total / total_weight

    logger.debug(
        "Categories scored",
        categories=len(assessment.category_scores),
        weighted_score=round(assessment.weighted_score, 2),
        blockers=len(assessment.blockers),
    )
    return assessment
