"""Text renderers: a fixed-width completeness report and a rich evaluation panel."""

from __future__ import annotations

from io import StringIO

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from prdgrade.evaluation.categories import category_name
from prdgrade.models.completeness import (
    CompletenessReport,
    RecommendPriority,
    SectionScore,
    SectionStatus,
)
from prdgrade.models.evaluation import CategoryStatus, DecisionStatus, EvaluationReport

RULE_WIDTH = 61
BOX_WIDTH = 72

_SECTION_ICONS: dict[SectionStatus, str] = {
    SectionStatus.COMPLETE: "[+]",
    SectionStatus.PARTIAL: "[~]",
    SectionStatus.MISSING: "[ ]",
}

# Low-priority suggestions are left out of the text view.
_PRIORITY_HEADINGS: tuple[tuple[RecommendPriority, str, str], ...] = (
    (RecommendPriority.CRITICAL, "CRITICAL (must fix):", "[!]"),
    (RecommendPriority.HIGH, "HIGH (should fix):", "[*]"),
    (RecommendPriority.MEDIUM, "MEDIUM (consider):", "[-]"),
)

_CATEGORY_ICONS: dict[CategoryStatus, str] = {
    CategoryStatus.PASS: "PASS",
    CategoryStatus.WARN: "WARN",
    CategoryStatus.FAIL: "FAIL",
    CategoryStatus.PENDING: "....",
}

_DECISION_LABELS: dict[DecisionStatus, str] = {
    DecisionStatus.APPROVE: "APPROVE",
    DecisionStatus.REVISE: "REVISE",
    DecisionStatus.REJECT: "REJECT",
    DecisionStatus.HUMAN_REVIEW: "HUMAN REVIEW",
}


# ── Completeness ─────────────────────────────────────────────────────────────


def _section_line(section: SectionScore) -> str:
    icon = _SECTION_ICONS[section.status]
    return f"  {icon} {section.name:<25} {section.score:5.1f}% ({section.status.value})"


def format_completeness_report(report: CompletenessReport) -> str:
    """Render a completeness report as a fixed-width text block."""
    heavy = "=" * RULE_WIDTH
    light = "-" * RULE_WIDTH

    lines = [
        heavy,
        "PRD COMPLETENESS REPORT",
        heavy,
        "",
        f"Overall Score: {report.overall_score:.1f}% (Grade: {report.grade.value})",
        f"Required Sections: {report.required_complete}/{report.required_total} complete",
        f"Optional Sections: {report.optional_complete}/{report.optional_total} complete",
        "",
        light,
        "SECTION BREAKDOWN",
        light,
        "",
        "Required Sections:",
        *(_section_line(s) for s in report.sections if s.required),
        "",
        "Optional Sections:",
        *(_section_line(s) for s in report.sections if not s.required),
    ]

    if report.recommendations:
        lines += ["", light, "RECOMMENDATIONS", light, ""]
        for priority, heading, marker in _PRIORITY_HEADINGS:
            recs = report.recommendations_by_priority(priority)
            if not recs:
                continue
            lines.append(heading)
            lines += [f"  {marker} {rec.section}: {rec.message}" for rec in recs]
            lines.append("")

    lines.append(heavy)
    return "\n".join(lines) + "\n"


# ── Evaluation ───────────────────────────────────────────────────────────────


def _category_table(report: EvaluationReport) -> Table:
    table = Table(box=None, expand=True, pad_edge=False, show_edge=False)
    table.add_column("Category", style="cyan", ratio=1)
    table.add_column("Score", justify="right")
    table.add_column("Weight", justify="right")
    for cs in report.categories:
        icon = _CATEGORY_ICONS[cs.status]
        table.add_row(
            Text(f"[{icon}] {category_name(cs.category)}"),
            f"{cs.score:4.1f}/{cs.max_score:.0f}",
            f"{cs.weight:.2f}",
        )
    return table


def _next_step_lines(report: EvaluationReport) -> list[Text]:
    steps = report.next_steps
    lines = [
        Text(f"! {category_name(action.category)}: {action.action}", style="red")
        for action in steps.immediate
    ]
    lines += [
        Text(f"- [{action.severity.value}] {category_name(action.category)}: {action.action}")
        for action in steps.recommended
    ]
    if steps.rerun_command:
        lines += [Text(), Text(f"Re-run: {steps.rerun_command}", style="dim")]
    return lines


def render_evaluation_report(report: EvaluationReport) -> str:
    """Render an evaluation report as a boxed terminal view.

    Long lines wrap inside the panel; nothing is truncated.
    """
    meta = report.metadata
    title = meta.document_title or meta.document or "(untitled)"
    decision = _DECISION_LABELS[report.decision.status] if report.decision else "NOT FINALIZED"

    parts: list[RenderableType] = [
        Text(f"{report.review_type.upper()} EVALUATION: {title}", style="bold"),
        Text(f"Version {meta.document_version or '-'}   Generated by {meta.generated_by or '-'}"),
        Rule(),
        Text(f"Weighted score: {report.weighted_score:.1f}/10   Decision: {decision}", style="bold"),
    ]
    if report.decision:
        counts = report.decision.finding_counts
        parts += [
            Text(report.decision.rationale),
            Text(
                f"Findings: {counts.critical} critical, {counts.high} high, "
                f"{counts.medium} medium, {counts.low} low"
            ),
        ]

    parts += [Rule("CATEGORIES"), _category_table(report)]

    steps = report.next_steps
    if steps.immediate or steps.recommended:
        parts += [Rule("NEXT STEPS"), *_next_step_lines(report)]

    if report.summary:
        parts += [Rule(), Text(report.summary)]

    buffer = StringIO()
    console = Console(
        file=buffer,
        width=BOX_WIDTH,
        color_system=None,
        force_terminal=False,
        force_jupyter=False,
        highlight=False,
    )
    console.print(Panel(Group(*parts), width=BOX_WIDTH))
    return buffer.getvalue()
