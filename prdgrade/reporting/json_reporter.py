"""JSON report generator — serializes, saves and reloads assessment reports."""

from __future__ import annotations

import json
import uuid
from pathlib import Path
from typing import Any, Union

from prdgrade.logger import get_logger
from prdgrade.models.completeness import CompletenessReport
from prdgrade.models.evaluation import EvaluationReport

logger = get_logger(__name__)

Report = Union[CompletenessReport, EvaluationReport]

REPORT_FILE_PREFIX = "report_"


def report_to_dict(report: Report) -> dict[str, Any]:
    """Return the JSON-compatible, camelCase representation of ``report``."""
    return report.model_dump(mode="json", by_alias=True)


def report_to_json(report: Report, indent: int | None = 2) -> str:
    return json.dumps(report_to_dict(report), indent=indent, ensure_ascii=False)


def report_path(output_dir: str | Path, report_id: str) -> Path:
    return Path(output_dir) / f"{REPORT_FILE_PREFIX}{report_id}.json"


def save_json_report(
    report: Report,
    output_dir: str | Path,
    report_id: str | None = None,
) -> Path:
    """Serialize and save the report as JSON.

    A random 12-character id is assigned when ``report_id`` is not given.
    Returns the path to the saved file.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    report_id = report_id or uuid.uuid4().hex[:12]
    path = report_path(output_dir, report_id)

    with open(path, "w", encoding="utf-8") as f:
        f.write(report_to_json(report))

    logger.info("JSON report saved", path=str(path), report_type=type(report).__name__)
    return path


def load_completeness_report(path: str | Path) -> CompletenessReport:
    """Load a saved completeness report. Raises FileNotFoundError or ValidationError."""
    with open(path, encoding="utf-8") as f:
        return CompletenessReport.model_validate_json(f.read())


def load_evaluation_report(path: str | Path) -> EvaluationReport:
    """Load a saved evaluation report. Raises FileNotFoundError or ValidationError."""
    with open(path, encoding="utf-8") as f:
        return EvaluationReport.model_validate_json(f.read())
