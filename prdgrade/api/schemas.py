"""Pydantic request/response models for the API — provides typed contracts + OpenAPI docs."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prdgrade.models.evaluation import DecisionStatus, EvaluationReport
from prdgrade.models.prd import PRDDocument


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Health ───────────────────────────────────────────────────────────────────


class HealthResponse(BaseModel):
    status: str
    environment: str


# ── Evaluation ───────────────────────────────────────────────────────────────


class EvaluationRequest(_ApiModel):
    document: PRDDocument
    filename: str = ""
    persist: bool = False


class EvaluationResponse(_ApiModel):
    report_id: str | None = None
    report: EvaluationReport


class TemplateRequest(_ApiModel):
    document: PRDDocument
    filename: str = ""
    weights: dict[str, float] = Field(default_factory=dict)
    renormalize: bool = False


# ── Reports ──────────────────────────────────────────────────────────────────


class ReportListEntry(_ApiModel):
    report_id: str
    filename: str
    document: str = ""
    weighted_score: float | None = None
    decision: DecisionStatus | None = None
    generated_at: datetime | None = None


class ReportListResponse(_ApiModel):
    reports: list[ReportListEntry]
