"""Pydantic models for PRD completeness reports."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SectionStatus(str, Enum):
    COMPLETE = "complete"
    PARTIAL = "partial"
    MISSING = "missing"


class RecommendPriority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Grade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class SectionScore(_ReportModel):
    """Completeness score for one document section."""

    name: str
    score: float = Field(default=0.0, ge=0.0, le=100.0)
    max_points: float
    required: bool
    status: SectionStatus = SectionStatus.MISSING
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class Recommendation(_ReportModel):
    section: str
    priority: RecommendPriority
    message: str
    guidance: str | None = None


class CompletenessReport(_ReportModel):
    """Result of a completeness check over a whole document."""

    overall_score: float = Field(default=0.0, ge=0.0, le=100.0)
    grade: Grade = Grade.F
    sections: list[SectionScore] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)
    summary: str = ""
    required_complete: int = 0
    required_total: int = 0
    optional_complete: int = 0
    optional_total: int = 0

    def recommendations_by_priority(self, priority: RecommendPriority) -> list[Recommendation]:
        return [r for r in self.recommendations if r.priority == priority]
