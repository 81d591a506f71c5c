"""API v1 router — all /api/v1/* endpoints."""

from __future__ import annotations

import re
from pathlib import Path

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from prdgrade.api.schemas import (
    EvaluationRequest,
    EvaluationResponse,
    ReportListEntry,
    ReportListResponse,
    TemplateRequest,
)
from prdgrade.config import get_settings
from prdgrade.evaluation.completeness import check_completeness
from prdgrade.evaluation.evaluator import generate_evaluation_template, score_to_evaluation
from prdgrade.evaluation.validation import validate_document
from prdgrade.logger import get_logger
from prdgrade.models.completeness import CompletenessReport
from prdgrade.models.evaluation import EvaluationReport
from prdgrade.models.prd import PRDDocument
from prdgrade.models.validation import ValidationResult
from prdgrade.reporting.json_reporter import (
    REPORT_FILE_PREFIX,
    load_evaluation_report,
    report_path,
    save_json_report,
)

logger = get_logger(__name__)
settings = get_settings()

router = APIRouter(prefix="/api/v1", tags=["v1"])

_REPORT_ID = re.compile(r"[A-Za-z0-9_-]+")


# ── PRD Assessment ───────────────────────────────────────────────────────────


@router.post("/prd/completeness", response_model=CompletenessReport)
async def prd_completeness(document: PRDDocument):
    """Score each section of a PRD and grade its overall completeness."""
    report = check_completeness(document)
    logger.info("Completeness requested", document_id=document.metadata.id, grade=report.grade.value)
    return report


@router.post("/prd/validate", response_model=ValidationResult)
async def prd_validate(document: PRDDocument):
    """Check required metadata, duplicate IDs, cross-references and tag format."""
    return validate_document(document)


@router.post("/prd/evaluation", response_model=EvaluationResponse)
async def prd_evaluation(body: EvaluationRequest):
    """Run the deterministic rubric evaluation; optionally persist the report."""
    report = score_to_evaluation(body.document, body.filename, settings=settings)

    report_id = None
    if body.persist:
        path = save_json_report(report, settings.report_dir)
        report_id = path.stem[len(REPORT_FILE_PREFIX):]

    return EvaluationResponse(report_id=report_id, report=report)


@router.post("/prd/template", response_model=EvaluationReport)
async def prd_template(body: TemplateRequest):
    """Return an unscored evaluation template for an external judge."""
    try:
        return generate_evaluation_template(
            body.document,
            body.filename,
            weights=body.weights,
            renormalize=body.renormalize,
            settings=settings,
        )
    except ValidationError as exc:
        raise HTTPException(422, f"Invalid category weights: {exc.errors()[0]['msg']}")


# ── Report Endpoints ─────────────────────────────────────────────────────────


@router.get("/reports", response_model=ReportListResponse)
async def list_reports():
    """List all saved evaluation reports with summary info."""
    report_dir = Path(settings.report_dir)
    reports: list[ReportListEntry] = []
    if not report_dir.exists():
        return ReportListResponse(reports=reports)

    for f in sorted(report_dir.glob(f"{REPORT_FILE_PREFIX}*.json"), reverse=True):
        entry = ReportListEntry(report_id=f.stem[len(REPORT_FILE_PREFIX):], filename=f.name)
        try:
            report = load_evaluation_report(f)
        except (OSError, ValidationError) as exc:
            logger.warning("Unreadable report skipped", file=f.name, error=str(exc))
        else:
            entry.document = report.metadata.document
            entry.weighted_score = report.weighted_score
            entry.decision = report.decision.status if report.decision else None
            entry.generated_at = report.metadata.generated_at
        reports.append(entry)
    return ReportListResponse(reports=reports)


@router.get("/reports/{report_id}", response_model=EvaluationReport)
async def get_report_detail(report_id: str):
    """Get a saved evaluation report."""
    if not _REPORT_ID.fullmatch(report_id):
        raise HTTPException(404, "Report not found")

    path = report_path(settings.report_dir, report_id)
    if not path.exists():
        raise HTTPException(404, "Report not found")
    try:
        return load_evaluation_report(path)
    except ValidationError as exc:
        logger.error("Stored report is invalid", report_id=report_id, error=str(exc))
        raise HTTPException(500, "Failed to read report")
