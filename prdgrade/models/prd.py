"""Pydantic models for Product Requirements Documents (the scoring input).

Field names are snake_case in Python and camelCase on the wire. Every
collection defaults to empty and every optional section defaults to ``None``
so that a partial draft (or ``{}``) is always a valid document.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class _SnakeModel(BaseModel):
    """Sections whose wire format uses snake_case keys (roadmap, market, solution)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class NFRCategory(str, Enum):
    PERFORMANCE = "performance"
    SCALABILITY = "scalability"
    RELIABILITY = "reliability"
    AVAILABILITY = "availability"
    SECURITY = "security"
    MULTI_TENANCY = "multi_tenancy"
    OBSERVABILITY = "observability"
    MAINTAINABILITY = "maintainability"
    USABILITY = "usability"
    COMPATIBILITY = "compatibility"
    COMPLIANCE = "compliance"
    DISASTER_RECOVERY = "disaster_recovery"
    COST_EFFICIENCY = "cost_efficiency"
    PORTABILITY = "portability"
    TESTABILITY = "testability"
    EXTENSIBILITY = "extensibility"
    INTEROPERABILITY = "interoperability"
    LOCALIZATION = "localization"


ESSENTIAL_NFR_CATEGORIES: tuple[NFRCategory, ...] = (
    NFRCategory.PERFORMANCE,
    NFRCategory.SECURITY,
    NFRCategory.RELIABILITY,
)


class EvidenceStrength(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AlternativeType(str, Enum):
    COMPETITOR = "competitor"
    WORKAROUND = "workaround"
    DO_NOTHING = "do_nothing"
    INTERNAL_TOOL = "internal_tool"


# ────────────────────────────── Metadata ─────────────────────────────────────


class Person(_CamelModel):
    name: str = ""
    email: str = ""
    role: str = ""


class Metadata(_CamelModel):
    id: str = ""
    title: str = ""
    version: str = ""
    status: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    authors: list[Person] = Field(default_factory=list)
    reviewers: list[Person] = Field(default_factory=list)
    approvers: list[Person] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class ExecutiveSummary(_CamelModel):
    problem_statement: str = ""
    proposed_solution: str = ""
    expected_outcomes: list[str] = Field(default_factory=list)
    target_audience: str = ""
    value_proposition: str = ""


# ────────────────────────────── Objectives ───────────────────────────────────


class PhaseTarget(_CamelModel):
    phase_id: str = ""
    target: str = ""
    status: str = ""
    actual: str = ""


class KeyResult(_CamelModel):
    id: str = ""
    title: str = ""
    description: str = ""
    owner: str = ""
    metric: str = ""
    baseline: str = ""
    target: str = ""
    current: str = ""
    unit: str = ""
    measurement_method: str = ""
    phase_targets: list[PhaseTarget] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class Objective(_CamelModel):
    id: str = ""
    title: str = ""
    description: str = ""
    rationale: str = ""
    owner: str = ""
    timeframe: str = ""
    key_results: list[KeyResult] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class OKR(_CamelModel):
    objective: Objective = Field(default_factory=Objective)
    key_results: list[KeyResult] = Field(default_factory=list, alias="key_results")

    @property
    def all_key_results(self) -> list[KeyResult]:
        """Key results attached to the objective, falling back to the OKR-level list."""
        return self.objective.key_results or self.key_results


class Objectives(_CamelModel):
    okrs: list[OKR] = Field(default_factory=list)

    @property
    def key_results(self) -> list[KeyResult]:
        return [kr for okr in self.okrs for kr in okr.all_key_results]


# ────────────────────────────── Personas & Stories ───────────────────────────


class Persona(_CamelModel):
    id: str = ""
    name: str = ""
    role: str = ""
    description: str = ""
    goals: list[str] = Field(default_factory=list)
    pain_points: list[str] = Field(default_factory=list)
    behaviors: list[str] = Field(default_factory=list)
    technical_proficiency: str = ""
    motivations: list[str] = Field(default_factory=list)
    quote: str = ""
    is_primary: bool = False
    tags: list[str] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return bool(
            self.id
            and self.name
            and self.role
            and self.description
            and self.goals
            and self.pain_points
        )


class AcceptanceCriterion(_CamelModel):
    id: str = ""
    description: str = ""
    given: str = ""
    when: str = ""
    then: str = ""


class UserStory(_CamelModel):
    id: str = ""
    persona_id: str = ""
    title: str = ""
    as_a: str = ""
    i_want: str = ""
    so_that: str = ""
    acceptance_criteria: list[AcceptanceCriterion] = Field(default_factory=list)
    priority: str = ""
    phase_id: str = ""
    story_points: int | None = None
    epic: str = ""
    tags: list[str] = Field(default_factory=list)


# ────────────────────────────── Requirements ─────────────────────────────────


class FunctionalRequirement(_CamelModel):
    id: str = ""
    title: str = ""
    description: str = ""
    category: str = ""
    priority: str = ""  # MoSCoW: must / should / could / wont
    user_story_ids: list[str] = Field(default_factory=list)
    acceptance_criteria: list[AcceptanceCriterion] = Field(default_factory=list)
    phase_id: str = ""
    dependencies: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class NonFunctionalRequirement(_CamelModel):
    id: str = ""
    category: str = ""  # NFRCategory value
    title: str = ""
    description: str = ""
    metric: str = ""
    target: str = ""
    measurement_method: str = ""
    priority: str = ""
    phase_id: str = ""
    current_baseline: str = ""
    tags: list[str] = Field(default_factory=list)


class Requirements(_CamelModel):
    functional: list[FunctionalRequirement] = Field(default_factory=list)
    non_functional: list[NonFunctionalRequirement] = Field(default_factory=list)


# ────────────────────────────── Roadmap ──────────────────────────────────────


class Deliverable(_SnakeModel):
    id: str = ""
    title: str = ""
    description: str = ""
    type: str = ""
    status: str = ""
    tags: list[str] = Field(default_factory=list)


class Phase(_SnakeModel):
    id: str = ""
    name: str = ""
    type: str = ""
    start_date: datetime | None = None
    end_date: datetime | None = None
    goals: list[str] = Field(default_factory=list)
    deliverables: list[Deliverable] = Field(default_factory=list)
    success_criteria: list[str] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    status: str = ""
    tags: list[str] = Field(default_factory=list)


class Roadmap(_SnakeModel):
    phases: list[Phase] = Field(default_factory=list)


# ────────────────────────────── Optional sections ────────────────────────────


class Assumption(_CamelModel):
    id: str = ""
    description: str = ""
    rationale: str = ""
    risk: str = ""
    validated: bool = False


class Constraint(_CamelModel):
    id: str = ""
    type: str = ""
    description: str = ""
    impact: str = ""
    mitigation: str = ""


class Dependency(_CamelModel):
    id: str = ""
    name: str = ""
    description: str = ""
    type: str = ""
    owner: str = ""
    status: str = ""


class AssumptionsConstraints(_CamelModel):
    assumptions: list[Assumption] = Field(default_factory=list)
    constraints: list[Constraint] = Field(default_factory=list)
    dependencies: list[Dependency] = Field(default_factory=list)


class Integration(_CamelModel):
    id: str = ""
    name: str = ""
    type: str = ""
    description: str = ""
    protocol: str = ""


class Technology(_CamelModel):
    name: str = ""
    version: str = ""
    purpose: str = ""


class TechnologyStack(_CamelModel):
    frontend: list[Technology] = Field(default_factory=list)
    backend: list[Technology] = Field(default_factory=list)
    database: list[Technology] = Field(default_factory=list)
    infrastructure: list[Technology] = Field(default_factory=list)
    devops: list[Technology] = Field(default_factory=list)
    monitoring: list[Technology] = Field(default_factory=list)

    @property
    def is_defined(self) -> bool:
        return any(
            (
                self.frontend,
                self.backend,
                self.database,
                self.infrastructure,
                self.devops,
                self.monitoring,
            )
        )


class TechnicalArchitecture(_CamelModel):
    overview: str = ""
    system_diagram: str = ""
    data_model: str = ""
    integration_points: list[Integration] = Field(default_factory=list)
    technology_stack: TechnologyStack = Field(default_factory=TechnologyStack)
    security_design: str = ""
    scalability_design: str = ""


class Wireframe(_CamelModel):
    id: str = ""
    title: str = ""
    url: str = ""


class InteractionFlow(_CamelModel):
    id: str = ""
    title: str = ""
    description: str = ""
    steps: list[str] = Field(default_factory=list)


class AccessibilitySpec(_CamelModel):
    standard: str = ""
    requirements: list[str] = Field(default_factory=list)
    testing_approach: str = ""


class UXRequirements(_CamelModel):
    design_principles: list[str] = Field(default_factory=list)
    wireframes: list[Wireframe] = Field(default_factory=list)
    interaction_flows: list[InteractionFlow] = Field(default_factory=list)
    accessibility: AccessibilitySpec = Field(default_factory=AccessibilitySpec)
    brand_guidelines: str = ""
    design_system: str = ""


class Risk(_CamelModel):
    id: str = ""
    description: str = ""
    probability: str = ""
    impact: str = ""
    mitigation: str = ""
    owner: str = ""
    status: str = ""
    tags: list[str] = Field(default_factory=list)


class GlossaryTerm(_CamelModel):
    term: str = ""
    definition: str = ""
    acronym: str = ""


class CustomSection(_CamelModel):
    id: str
    title: str = ""
    description: str = ""
    content: Any = None


# ────────────────────────────── Problem / Market / Solution ──────────────────


class Evidence(_CamelModel):
    type: str = ""
    source: str = ""
    summary: str = ""
    sample_size: int = 0
    strength: str = ""  # EvidenceStrength value


class ProblemDefinition(_CamelModel):
    id: str = ""
    statement: str = ""
    user_impact: str = ""
    evidence: list[Evidence] = Field(default_factory=list)
    confidence: float = 0.0
    root_causes: list[str] = Field(default_factory=list)
    affected_segments: list[str] = Field(default_factory=list)


class Alternative(_SnakeModel):
    id: str = ""
    name: str = ""
    type: str = ""  # AlternativeType value
    description: str = ""
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    why_not_chosen: str = ""


class MarketDefinition(_SnakeModel):
    alternatives: list[Alternative] = Field(default_factory=list)
    differentiation: list[str] = Field(default_factory=list)
    market_risks: list[str] = Field(default_factory=list)


class SolutionOption(_SnakeModel):
    id: str = ""
    name: str = ""
    description: str = ""
    problems_addressed: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    tradeoffs: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    estimated_effort: str = ""


class SolutionDefinition(_SnakeModel):
    solution_options: list[SolutionOption] = Field(default_factory=list)
    selected_solution_id: str = ""
    solution_rationale: str = ""
    confidence: float = 0.0

    def selected_solution(self) -> SolutionOption | None:
        if not self.selected_solution_id:
            return None
        for option in self.solution_options:
            if option.id == self.selected_solution_id:
                return option
        return None


# ────────────────────────────── Document ─────────────────────────────────────


class PRDDocument(_CamelModel):
    """A Product Requirements Document.

    The first seven sections are required by the completeness rubric; the
    rest are optional and may be absent.
    """

    metadata: Metadata = Field(default_factory=Metadata)
    executive_summary: ExecutiveSummary = Field(default_factory=ExecutiveSummary)
    objectives: Objectives = Field(default_factory=Objectives)
    personas: list[Persona] = Field(default_factory=list)
    user_stories: list[UserStory] = Field(default_factory=list)
    requirements: Requirements = Field(default_factory=Requirements)
    roadmap: Roadmap = Field(default_factory=Roadmap)

    assumptions: AssumptionsConstraints | None = None
    out_of_scope: list[str] = Field(default_factory=list)
    technical_architecture: TechnicalArchitecture | None = None
    ux_requirements: UXRequirements | None = None
    risks: list[Risk] = Field(default_factory=list)
    glossary: list[GlossaryTerm] = Field(default_factory=list)
    custom_sections: list[CustomSection] = Field(default_factory=list)

    problem: ProblemDefinition | None = None
    market: MarketDefinition | None = None
    solution: SolutionDefinition | None = None
