"""Pydantic models for rubric evaluation reports."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"
    PENDING = "pending"


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Effort(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DecisionStatus(str, Enum):
    APPROVE = "approve"
    REVISE = "revise"
    REJECT = "reject"
    HUMAN_REVIEW = "human_review"


class TriggerSeverity(str, Enum):
    BLOCKER = "blocker"
    MAJOR = "major"
    MINOR = "minor"


# ────────────────────────────── Rubric ───────────────────────────────────────


class Category(BaseModel):
    """One weighted rubric dimension. Immutable configuration."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    weight: float = Field(gt=0.0, le=1.0)
    owner: str = ""


class CategoryScore(_ReportModel):
    category: str
    score: float = Field(default=0.0, ge=0.0, le=10.0)
    max_score: float = 10.0
    weight: float = Field(default=0.0, ge=0.0)
    status: CategoryStatus = CategoryStatus.PENDING
    justification: str = ""
    evidence: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def weighted_contribution(self) -> float:
        return self.score * self.weight


class RevisionTrigger(_ReportModel):
    """An issue raised by the deterministic category scorer."""

    issue_id: str
    category: str
    severity: str  # TriggerSeverity value; unknown values map to low findings
    description: str
    recommended_owner: str = ""


class CategoryAssessment(_ReportModel):
    """Raw output of the deterministic category scorer."""

    category_scores: list[CategoryScore] = Field(default_factory=list)
    weighted_score: float = 0.0
    blockers: list[str] = Field(default_factory=list)
    revision_triggers: list[RevisionTrigger] = Field(default_factory=list)


# ────────────────────────────── Findings & Decision ──────────────────────────


class Finding(_ReportModel):
    id: str
    category: str
    severity: Severity
    title: str
    description: str = ""
    recommendation: str = ""
    owner: str = ""
    effort: Effort = Effort.MEDIUM


class FindingCounts(_ReportModel):
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    total: int = 0


class Decision(_ReportModel):
    status: DecisionStatus
    rationale: str = ""
    finding_counts: FindingCounts = Field(default_factory=FindingCounts)


class Action(_ReportModel):
    finding_id: str
    category: str
    severity: Severity
    action: str
    owner: str = ""
    effort: Effort = Effort.MEDIUM


class NextSteps(_ReportModel):
    immediate: list[Action] = Field(default_factory=list)
    recommended: list[Action] = Field(default_factory=list)
    rerun_command: str = ""


# ────────────────────────────── Report ───────────────────────────────────────


class ReportMetadata(_ReportModel):
    document: str = ""
    document_id: str = ""
    document_title: str = ""
    document_version: str = ""
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    generated_by: str = ""


class EvaluationReport(_ReportModel):
    """Full structured rubric evaluation of one document."""

    review_type: str = "prd"
    metadata: ReportMetadata = Field(default_factory=ReportMetadata)
    categories: list[CategoryScore] = Field(default_factory=list)
    findings: list[Finding] = Field(default_factory=list)
    weighted_score: float = Field(default=0.0, ge=0.0, le=10.0)
    decision: Decision | None = None
    next_steps: NextSteps = Field(default_factory=NextSteps)
    summary: str = ""
    finalized: bool = False

    def category(self, category_id: str) -> CategoryScore | None:
        for cs in self.categories:
            if cs.category == category_id:
                return cs
        return None
