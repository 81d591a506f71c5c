"""Rubric category registry.

The standard table is configuration: ten categories whose weights sum to
1.0. Custom document sections join the rubric at ``CUSTOM_CATEGORY_WEIGHT``
each. Nothing in this module renormalizes implicitly; callers that add
categories or override weights call ``renormalize_weights`` themselves.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from prdgrade.models.evaluation import Category
from prdgrade.models.prd import PRDDocument

CUSTOM_CATEGORY_PREFIX = "custom:"
CUSTOM_CATEGORY_WEIGHT = 0.05
CUSTOM_CATEGORY_OWNER = "prd-lead"

_STANDARD_CATEGORIES: tuple[Category, ...] = (
    Category(
        id="problem_definition",
        name="Problem Definition",
        description="Clarity of problem statement, supporting evidence, root cause analysis, and user impact",
        weight=0.20,
        owner="problem-discovery",
    ),
    Category(
        id="solution_fit",
        name="Solution Fit",
        description="Quality of solution options, selection rationale, and alignment with problem",
        weight=0.15,
        owner="solution-ideation",
    ),
    Category(
        id="user_understanding",
        name="User Understanding",
        description="Depth of personas, user stories, pain points, and behavioral insights",
        weight=0.10,
        owner="user-research",
    ),
    Category(
        id="market_awareness",
        name="Market Awareness",
        description="Competitive analysis, alternatives assessment, and differentiation",
        weight=0.10,
        owner="market-intel",
    ),
    Category(
        id="scope_discipline",
        name="Scope Discipline",
        description="Clear objectives, out-of-scope items, and success criteria",
        weight=0.10,
        owner="prd-lead",
    ),
    Category(
        id="requirements_quality",
        name="Requirements Quality",
        description="Functional and non-functional requirements with acceptance criteria",
        weight=0.10,
        owner="requirements",
    ),
    Category(
        id="metrics_quality",
        name="Metrics Quality",
        description="Success metrics with targets, baselines, and measurement methods",
        weight=0.10,
        owner="metrics-success",
    ),
    Category(
        id="ux_coverage",
        name="UX Coverage",
        description="Design principles, wireframes, interaction flows, and accessibility",
        weight=0.05,
        owner="ux-journey",
    ),
    Category(
        id="technical_feasibility",
        name="Technical Feasibility",
        description="Architecture overview, integrations, technology stack, and security design",
        weight=0.05,
        owner="tech-feasibility",
    ),
    Category(
        id="risk_management",
        name="Risk Management",
        description="Assumptions, constraints, risks, and mitigations",
        weight=0.05,
        owner="risk-compliance",
    ),
)

_BY_ID: dict[str, Category] = {c.id: c for c in _STANDARD_CATEGORIES}


def standard_categories() -> list[Category]:
    """Return the standard PRD rubric categories."""
    return list(_STANDARD_CATEGORIES)


def categories_for_document(doc: PRDDocument) -> list[Category]:
    """Standard categories plus one ``custom:<id>`` category per custom section."""
    categories = standard_categories()
    for section in doc.custom_sections:
        categories.append(
            Category(
                id=CUSTOM_CATEGORY_PREFIX + section.id,
                name=section.title or section.id,
                description=section.description,
                weight=CUSTOM_CATEGORY_WEIGHT,
                owner=CUSTOM_CATEGORY_OWNER,
            )
        )
    return categories


def apply_weight_overrides(
    categories: Iterable[Category], weights: Mapping[str, float]
) -> list[Category]:
    """Replace weights for the categories named in ``weights``.

    Overrides replace, they do not renormalize. Ids not in ``categories``
    are ignored. A weight outside (0, 1] raises ``ValidationError``.
    """
    return [
        Category(**{**c.model_dump(), "weight": weights[c.id]}) if c.id in weights else c
        for c in categories
    ]


def renormalize_weights(categories: Iterable[Category]) -> list[Category]:
    """Scale weights proportionally so they sum to 1.0."""
    categories = list(categories)
    total = total_weight(categories)
    if total <= 0:
        return categories
    return [c.model_copy(update={"weight": c.weight / total}) for c in categories]


def total_weight(categories: Iterable[Category]) -> float:
    return sum(c.weight for c in categories)


def category_name(category_id: str) -> str:
    """Human-readable name; custom categories show their section id."""
    if category_id in _BY_ID:
        return _BY_ID[category_id].name
    if category_id.startswith(CUSTOM_CATEGORY_PREFIX):
        return category_id[len(CUSTOM_CATEGORY_PREFIX):]
    return category_id


def category_owner(category_id: str) -> str:
    category = _BY_ID.get(category_id)
    return category.owner if category else CUSTOM_CATEGORY_OWNER


def category_descriptions() -> dict[str, str]:
    """Map of category id to description, e.g. as context for an external judge."""
    return {c.id: c.description for c in _STANDARD_CATEGORIES}


def category_owners() -> dict[str, str]:
    return {c.id: c.owner for c in _STANDARD_CATEGORIES}
