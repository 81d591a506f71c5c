"""Per-section completeness scorers.

Each scorer awards points for a handful of presence and depth checks,
converts them to a 0–100 percentage of its own budget, and reports issues
(missing or weak content) and suggestions (optional enhancements). Scorers
are registered by section id in evaluation order; the aggregator only ever
iterates the registry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from prdgrade.models.completeness import SectionScore, SectionStatus
from prdgrade.models.prd import ESSENTIAL_NFR_CATEGORIES, PRDDocument

COMPLETE_THRESHOLD = 80.0
PARTIAL_THRESHOLD = 40.0

REQUIRED_SECTION_POINTS = 10.0
OPTIONAL_SECTION_POINTS = 5.0

DETAILED_TEXT_LENGTH = 100


def section_status(score: float) -> SectionStatus:
    if score >= COMPLETE_THRESHOLD:
        return SectionStatus.COMPLETE
    if score >= PARTIAL_THRESHOLD:
        return SectionStatus.PARTIAL
    return SectionStatus.MISSING


def _ratio(part: int, whole: int) -> float:
    return part / whole if whole else 0.0


class SectionScorer(ABC):
    """Scores one section of a document."""

    key: ClassVar[str]
    name: ClassVar[str]
    required: ClassVar[bool]
    max_points: ClassVar[float]

    @abstractmethod
    def score(self, doc: PRDDocument) -> SectionScore:
        ...

    def _result(
        self,
        points: float,
        budget: float,
        issues: list[str] | None = None,
        suggestions: list[str] | None = None,
    ) -> SectionScore:
        points = min(max(points, 0.0), budget)
        return self._fixed(points / budget * 100 if budget else 0.0, issues, suggestions)

    def _fixed(
        self,
        score: float,
        issues: list[str] | None = None,
        suggestions: list[str] | None = None,
    ) -> SectionScore:
        score = min(max(score, 0.0), 100.0)
        return SectionScore(
            name=self.name,
            score=score,
            max_points=self.max_points,
            required=self.required,
            status=section_status(score),
            issues=issues or [],
            suggestions=suggestions or [],
        )

    def _absent(self, suggestion: str) -> SectionScore:
        return self._fixed(0.0, suggestions=[suggestion])


class _RequiredSection(SectionScorer):
    required = True
    max_points = REQUIRED_SECTION_POINTS


class _OptionalSection(SectionScorer):
    required = False
    max_points = OPTIONAL_SECTION_POINTS


# ────────────────────────────── Required sections ────────────────────────────


class MetadataScorer(_RequiredSection):
    key = "metadata"
    name = "Metadata"

    def score(self, doc: PRDDocument) -> SectionScore:
        meta = doc.metadata
        checks = (
            (meta.id, "Missing document ID"),
            (meta.title, "Missing document title"),
            (meta.version, "Missing version number"),
            (meta.status, "Missing document status"),
            (meta.authors, "No authors specified"),
        )
        points = 0.0
        issues: list[str] = []
        for present, issue in checks:
            if present:
                points += 1
            else:
                issues.append(issue)

        suggestions: list[str] = []
        if not meta.reviewers:
            suggestions.append("Consider adding reviewers for accountability")
        if not meta.tags:
            suggestions.append("Consider adding tags for discoverability")

        return self._result(points, 5.0, issues, suggestions)


class ExecutiveSummaryScorer(_RequiredSection):
    key = "executive_summary"
    name = "Executive Summary"

    def score(self, doc: PRDDocument) -> SectionScore:
        summary = doc.executive_summary
        points = 0.0
        issues: list[str] = []
        suggestions: list[str] = []

        if summary.problem_statement:
            if len(summary.problem_statement) >= DETAILED_TEXT_LENGTH:
                points += 1.5
            else:
                points += 0.75
                issues.append("Problem statement is brief; consider expanding with more context")
        else:
            issues.append("Missing problem statement - this is critical for stakeholder alignment")

        if summary.proposed_solution:
            if len(summary.proposed_solution) >= DETAILED_TEXT_LENGTH:
                points += 1.5
            else:
                points += 0.75
                issues.append("Proposed solution is brief; consider adding more detail")
        else:
            issues.append("Missing proposed solution")

        outcomes = len(summary.expected_outcomes)
        if outcomes >= 3:
            points += 1
        elif outcomes > 0:
            points += 0.5
            issues.append("Consider adding more expected outcomes (recommend 3+)")
        else:
            issues.append("Missing expected outcomes")

        if summary.value_proposition:
            points += 0.5
        else:
            suggestions.append("Consider adding a value proposition")

        if summary.target_audience:
            points += 0.5
        else:
            suggestions.append("Consider specifying the target audience")

        return self._result(points, 5.0, issues, suggestions)


class ObjectivesScorer(_RequiredSection):
    key = "objectives"
    name = "Objectives"

    def score(self, doc: PRDDocument) -> SectionScore:
        okrs = doc.objectives.okrs
        key_results = doc.objectives.key_results
        points = 0.0
        issues: list[str] = []

        if len(okrs) >= 2:
            points += 2
        elif okrs:
            points += 1
            issues.append("Consider adding more OKRs (recommend 2+)")
        else:
            issues.append("Missing OKRs - define objectives and key results")

        if len(key_results) >= 3:
            points += 2
        elif key_results:
            points += 1
            issues.append("Consider adding more key results (recommend 3+)")
        elif okrs:
            issues.append("OKRs missing key results - how will you measure success?")

        # One issue per OKR: the first key result without a target.
        for okr in okrs:
            for kr in okr.all_key_results:
                if not kr.target:
                    issues.append(f"Key result '{kr.description or kr.title}' missing target value")
                    break

        if any(kr.phase_targets for kr in key_results):
            points += 2
        elif okrs:
            issues.append("Consider adding phase targets to key results for roadmap alignment")

        return self._result(points, 6.0, issues)


class PersonasScorer(_RequiredSection):
    key = "personas"
    name = "Personas"

    def score(self, doc: PRDDocument) -> SectionScore:
        personas = doc.personas
        points = 0.0
        issues: list[str] = []
        suggestions: list[str] = []

        if len(personas) >= 3:
            points += 2
        elif len(personas) == 2:
            points += 1.5
        elif len(personas) == 1:
            points += 1
            issues.append("Only one persona defined; consider adding more for broader coverage")
        else:
            issues.append("No personas defined - this is critical for user-centered design")

        for persona in personas:
            gaps = []
            if not persona.goals:
                gaps.append("missing goals")
            if not persona.pain_points:
                gaps.append("missing pain points")
            if not persona.description:
                gaps.append("missing description")
            issues.extend(f"Persona '{persona.name}': {gap}" for gap in gaps)

        points += 1.5 * sum(1 for p in personas if p.is_complete)

        if personas and not any(p.is_primary for p in personas):
            suggestions.append("Consider marking one persona as primary")

        return self._result(points, 6.0, issues, suggestions)


class UserStoriesScorer(_RequiredSection):
    key = "user_stories"
    name = "User Stories"

    def score(self, doc: PRDDocument) -> SectionScore:
        stories = doc.user_stories
        count = len(stories)
        points = 0.0
        issues: list[str] = []

        if count >= 10:
            points += 2
        elif count >= 5:
            points += 1.5
        elif count > 0:
            points += 1
            issues.append("Limited user stories; consider adding more for comprehensive coverage")
        else:
            issues.append("No user stories defined")

        if count:
            persona_ids = {p.id for p in doc.personas if p.id}
            phase_ids = {p.id for p in doc.roadmap.phases if p.id}

            ac_ratio = _ratio(sum(1 for s in stories if s.acceptance_criteria), count)
            if ac_ratio >= 0.9:
                points += 2
            elif ac_ratio >= 0.5:
                points += 1
                issues.append(f"{ac_ratio * 100:.0f}% of stories have acceptance criteria; aim for 90%+")
            else:
                issues.append(f"Only {ac_ratio * 100:.0f}% of stories have acceptance criteria")

            persona_ratio = _ratio(sum(1 for s in stories if s.persona_id in persona_ids), count)
            if persona_ratio >= 0.9:
                points += 1
            elif persona_ratio >= 0.5:
                points += 0.5
                issues.append("Some user stories not linked to valid personas")
            else:
                issues.append("Most user stories not linked to valid personas")

            phase_ratio = _ratio(sum(1 for s in stories if s.phase_id in phase_ids), count)
            if phase_ratio >= 0.9:
                points += 1
            elif phase_ratio >= 0.5:
                points += 0.5
                issues.append("Some user stories not linked to roadmap phases")

        return self._result(points, 6.0, issues)


class RequirementsScorer(_RequiredSection):
    key = "requirements"
    name = "Requirements"

    def score(self, doc: PRDDocument) -> SectionScore:
        functional = len(doc.requirements.functional)
        non_functional = len(doc.requirements.non_functional)
        points = 0.0
        issues: list[str] = []

        if functional >= 10:
            points += 2
        elif functional >= 5:
            points += 1.5
        elif functional > 0:
            points += 1
            issues.append("Limited functional requirements; consider adding more detail")
        else:
            issues.append("No functional requirements defined")

        if non_functional >= 5:
            points += 2
        elif non_functional >= 3:
            points += 1.5
        elif non_functional > 0:
            points += 1
            issues.append("Limited non-functional requirements; consider performance, security, scalability")
        else:
            issues.append("No non-functional requirements defined")

        covered = {nfr.category for nfr in doc.requirements.non_functional}
        missing = [c.value for c in ESSENTIAL_NFR_CATEGORIES if c.value not in covered]
        if not missing:
            points += 2
        elif len(missing) < len(ESSENTIAL_NFR_CATEGORIES):
            points += 1
            issues.append(f"Missing NFR categories: {', '.join(missing)}")
        else:
            issues.append("Missing essential NFR categories: performance, security, reliability")

        return self._result(points, 6.0, issues)


class RoadmapScorer(_RequiredSection):
    key = "roadmap"
    name = "Roadmap"

    def score(self, doc: PRDDocument) -> SectionScore:
        phases = doc.roadmap.phases
        count = len(phases)
        points = 0.0
        issues: list[str] = []

        if count >= 3:
            points += 2
        elif count == 2:
            points += 1.5
        elif count == 1:
            points += 1
            issues.append("Only one phase defined; consider breaking into milestones")
        else:
            issues.append("No roadmap phases defined")

        if count:
            # (phases with the attribute, full credit, partial issue, none issue)
            checks = (
                (
                    sum(1 for p in phases if p.deliverables),
                    1.5,
                    "Some phases missing deliverables",
                    "Phases missing deliverables",
                ),
                (
                    sum(1 for p in phases if p.success_criteria),
                    1.5,
                    "Some phases missing success criteria",
                    "Phases missing success criteria - how will you know when done?",
                ),
                (
                    sum(1 for p in phases if p.goals),
                    1.0,
                    "Some phases missing goals",
                    "Phases missing goals",
                ),
            )
            for with_attr, credit, partial_issue, none_issue in checks:
                if with_attr == count:
                    points += credit
                elif with_attr > 0:
                    points += credit / 2
                    issues.append(partial_issue)
                else:
                    issues.append(none_issue)

        return self._result(points, 6.0, issues)


# ────────────────────────────── Optional sections ────────────────────────────


class AssumptionsScorer(_OptionalSection):
    key = "assumptions"
    name = "Assumptions & Constraints"

    def score(self, doc: PRDDocument) -> SectionScore:
        section = doc.assumptions
        if section is None:
            return self._absent("Consider documenting assumptions and constraints")

        points = 0.0
        suggestions: list[str] = []

        if len(section.assumptions) >= 3:
            points += 2
        elif section.assumptions:
            points += 1
            suggestions.append("Consider documenting more assumptions")

        if len(section.constraints) >= 2:
            points += 1.5
        elif section.constraints:
            points += 0.75

        if section.dependencies:
            points += 0.5

        return self._result(points, 4.0, suggestions=suggestions)


class OutOfScopeScorer(_OptionalSection):
    key = "out_of_scope"
    name = "Out of Scope"

    def score(self, doc: PRDDocument) -> SectionScore:
        count = len(doc.out_of_scope)
        if count == 0:
            return self._absent(
                "Consider documenting what's explicitly out of scope to prevent scope creep"
            )
        if count >= 5:
            return self._fixed(100.0)
        if count >= 3:
            return self._fixed(80.0)
        return self._fixed(60.0)


class TechnicalArchitectureScorer(_OptionalSection):
    key = "technical_architecture"
    name = "Technical Architecture"

    def score(self, doc: PRDDocument) -> SectionScore:
        arch = doc.technical_architecture
        if arch is None:
            return self._absent(
                "Consider adding technical architecture overview for engineering context"
            )

        points = 0.0
        if arch.overview:
            points += 1
        if arch.integration_points:
            points += 1
        if arch.system_diagram:
            points += 1
        if arch.security_design:
            points += 0.5
        if arch.scalability_design:
            points += 0.5

        return self._result(points, 4.0)


class UXRequirementsScorer(_OptionalSection):
    key = "ux_requirements"
    name = "UX Requirements"

    def score(self, doc: PRDDocument) -> SectionScore:
        ux = doc.ux_requirements
        if ux is None:
            return self._absent("Consider adding UX requirements for user-facing products")

        points = 0.0
        if ux.design_principles:
            points += 1
        if ux.wireframes:
            points += 1.5
        if ux.interaction_flows:
            points += 1
        if ux.accessibility.standard:
            points += 0.5

        return self._result(points, 4.0)


class RisksScorer(_OptionalSection):
    key = "risks"
    name = "Risks"

    def score(self, doc: PRDDocument) -> SectionScore:
        count = len(doc.risks)
        if count == 0:
            return self._absent("Consider documenting project risks and mitigations")

        mitigated = sum(1 for r in doc.risks if r.mitigation)
        if count >= 5 and mitigated == count:
            return self._fixed(100.0)
        if count >= 3 and _ratio(mitigated, count) >= 0.8:
            return self._fixed(80.0)
        if count >= 2:
            issues = []
            if mitigated < count:
                issues.append("Some risks missing mitigation strategies")
            return self._fixed(60.0, issues)
        return self._fixed(40.0)


class GlossaryScorer(_OptionalSection):
    key = "glossary"
    name = "Glossary"

    def score(self, doc: PRDDocument) -> SectionScore:
        count = len(doc.glossary)
        if count == 0:
            return self._absent("Consider adding a glossary for domain-specific terms")
        if count >= 10:
            return self._fixed(100.0)
        if count >= 5:
            return self._fixed(80.0)
        return self._fixed(60.0)


# ────────────────────────────── Registry ─────────────────────────────────────


SECTION_SCORERS: dict[str, SectionScorer] = {}


def register_section_scorer(scorer: SectionScorer) -> SectionScorer:
    """Add a scorer to the registry; re-registering a key replaces it in place."""
    SECTION_SCORERS[scorer.key] = scorer
    return scorer


for _scorer in (
    MetadataScorer(),
    ExecutiveSummaryScorer(),
    ObjectivesScorer(),
    PersonasScorer(),
    UserStoriesScorer(),
    RequirementsScorer(),
    RoadmapScorer(),
    AssumptionsScorer(),
    OutOfScopeScorer(),
    TechnicalArchitectureScorer(),
    UXRequirementsScorer(),
    RisksScorer(),
    GlossaryScorer(),
):
    register_section_scorer(_scorer)


def score_section(key: str, doc: PRDDocument) -> SectionScore:
    """Score a single section by registry key. Raises ``KeyError`` for unknown keys."""
    return SECTION_SCORERS[key].score(doc)
