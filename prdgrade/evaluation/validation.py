"""Structural validation of a PRD: required metadata, unique IDs,
cross-references between sections and kebab-case tags.

Validation is independent of scoring. A document can be invalid and still
be scored, and a valid document can score poorly.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from prdgrade.logger import get_logger
from prdgrade.models.prd import PRDDocument
from prdgrade.models.validation import ValidationResult

logger = get_logger(__name__)

MIN_TITLE_LENGTH = 5

# Lowercase alphanumeric segments joined by single hyphens: "mvp", "phase-1", "2024-q1".
TAG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


# ── Tags ─────────────────────────────────────────────────────────────────────


def tag_error(tag: str) -> str | None:
    """Return why ``tag`` is not kebab-case, or None if it is."""
    if tag == "":
        return "tag cannot be empty"
    if not TAG_PATTERN.match(tag):
        return (
            f'invalid tag "{tag}": must be lowercase alphanumeric with hyphens '
            "(e.g., 'my-tag', 'phase-1')"
        )
    return None


def validate_tags(tags: Iterable[str]) -> list[str]:
    return [err for err in map(tag_error, tags) if err is not None]


# ── Validator ────────────────────────────────────────────────────────────────


class PRDValidator:
    """Collects errors and warnings for one document."""

    def __init__(self, doc: PRDDocument) -> None:
        self.doc = doc
        self.result = ValidationResult()

    def run(self) -> ValidationResult:
        self._check_metadata()
        self._check_sections()
        self._check_ids()
        self._check_traceability()
        self._check_tags()
        return self.result

    # ── Required content ─────────────────────────────────────────

    def _check_metadata(self) -> None:
        meta = self.doc.metadata
        if not meta.id:
            self.result.add_error("metadata.id", "Document ID is required")

        if not meta.title:
            self.result.add_error("metadata.title", "Title is required")
        elif len(meta.title) < MIN_TITLE_LENGTH:
            self.result.add_error("metadata.title", "Title must be at least 5 characters")

        if not meta.authors:
            self.result.add_warning("metadata.authors", "No authors specified")

        if not meta.status:
            self.result.add_error("metadata.status", "Status is required")

    def _check_sections(self) -> None:
        doc = self.doc
        if not doc.executive_summary.problem_statement:
            self.result.add_warning("executive_summary.problem_statement", "Problem statement is empty")
        if not doc.executive_summary.proposed_solution:
            self.result.add_warning("executive_summary.proposed_solution", "Proposed solution is empty")

        if not doc.objectives.okrs:
            self.result.add_warning("objectives", "No OKRs defined")
        for i, okr in enumerate(doc.objectives.okrs):
            if not okr.all_key_results:
                self.result.add_warning(f"objectives.okrs[{i}]", "OKR has no key results defined")

        if not doc.personas:
            self.result.add_warning("personas", "No personas defined")
        if not doc.user_stories:
            self.result.add_warning("user_stories", "No user stories defined")

    # ── IDs ──────────────────────────────────────────────────────

    def _id_locations(self) -> list[tuple[str, str]]:
        """Every ``(id, location)`` pair in document order; empty IDs are skipped."""
        doc = self.doc
        pairs: list[tuple[str, str]] = []

        for i, okr in enumerate(doc.objectives.okrs):
            pairs.append((okr.objective.id, f"objectives.okrs[{i}].objective.id"))
            for j, kr in enumerate(okr.all_key_results):
                pairs.append((kr.id, f"objectives.okrs[{i}].key_results[{j}].id"))
        pairs += [(p.id, f"personas[{i}].id") for i, p in enumerate(doc.personas)]
        pairs += [(s.id, f"user_stories[{i}].id") for i, s in enumerate(doc.user_stories)]
        pairs += [
            (r.id, f"requirements.functional[{i}].id")
            for i, r in enumerate(doc.requirements.functional)
        ]
        pairs += [
            (r.id, f"requirements.non_functional[{i}].id")
            for i, r in enumerate(doc.requirements.non_functional)
        ]
        pairs += [(p.id, f"roadmap.phases[{i}].id") for i, p in enumerate(doc.roadmap.phases)]
        if doc.problem is not None:
            pairs.append((doc.problem.id, "problem.id"))
        if doc.market is not None:
            pairs += [
                (a.id, f"market.alternatives[{i}].id") for i, a in enumerate(doc.market.alternatives)
            ]
        if doc.solution is not None:
            pairs += [
                (o.id, f"solution.solution_options[{i}].id")
                for i, o in enumerate(doc.solution.solution_options)
            ]
        return [(id_, loc) for id_, loc in pairs if id_]

    def _check_ids(self) -> None:
        seen: dict[str, str] = {}
        for id_, location in self._id_locations():
            if id_ in seen:
                self.result.add_error(location, f"Duplicate ID '{id_}' (also at {seen[id_]})")
            seen[id_] = location

    # ── Cross-references ─────────────────────────────────────────

    def _defined_ids(self) -> set[str]:
        doc = self.doc
        ids: set[str] = set()
        for okr in doc.objectives.okrs:
            ids.add(okr.objective.id)
            ids.update(kr.id for kr in okr.all_key_results)
        ids.update(p.id for p in doc.personas)
        ids.update(s.id for s in doc.user_stories)
        ids.update(p.id for p in doc.roadmap.phases)
        if doc.problem is not None:
            ids.add(doc.problem.id)
        if doc.solution is not None:
            ids.update(o.id for o in doc.solution.solution_options)
        ids.discard("")
        return ids

    def _check_traceability(self) -> None:
        doc = self.doc
        defined = self._defined_ids()

        for i, story in enumerate(doc.user_stories):
            if story.persona_id and story.persona_id not in defined:
                self.result.add_warning(
                    f"user_stories[{i}].persona_id",
                    f"Reference to undefined persona: {story.persona_id}",
                )
            if story.phase_id and story.phase_id not in defined:
                self.result.add_warning(
                    f"user_stories[{i}].phase_id",
                    f"Reference to undefined phase: {story.phase_id}",
                )

        for i, req in enumerate(doc.requirements.functional):
            for story_id in req.user_story_ids:
                if story_id and story_id not in defined:
                    self.result.add_warning(
                        f"requirements.functional[{i}].user_story_ids",
                        f"Reference to undefined user story: {story_id}",
                    )
            if req.phase_id and req.phase_id not in defined:
                self.result.add_warning(
                    f"requirements.functional[{i}].phase_id",
                    f"Reference to undefined phase: {req.phase_id}",
                )

        solution = doc.solution
        if solution is None:
            return
        for i, option in enumerate(solution.solution_options):
            for problem_id in option.problems_addressed:
                if problem_id and problem_id not in defined:
                    self.result.add_warning(
                        f"solution.solution_options[{i}].problems_addressed",
                        f"Reference to undefined problem: {problem_id}",
                    )
        if solution.selected_solution_id and solution.selected_solution() is None:
            self.result.add_error(
                "solution.selected_solution_id",
                f"Selected solution '{solution.selected_solution_id}' not found in solution options",
            )

    # ── Tags ─────────────────────────────────────────────────────

    def _tag_locations(self) -> list[tuple[list[str], str]]:
        doc = self.doc
        groups: list[tuple[list[str], str]] = [(doc.metadata.tags, "metadata.tags")]
        groups += [(p.tags, f"personas[{i}].tags") for i, p in enumerate(doc.personas)]
        groups += [(s.tags, f"user_stories[{i}].tags") for i, s in enumerate(doc.user_stories)]
        groups += [
            (r.tags, f"requirements.functional[{i}].tags")
            for i, r in enumerate(doc.requirements.functional)
        ]
        groups += [
            (r.tags, f"requirements.non_functional[{i}].tags")
            for i, r in enumerate(doc.requirements.non_functional)
        ]
        for i, phase in enumerate(doc.roadmap.phases):
            groups.append((phase.tags, f"roadmap.phases[{i}].tags"))
            groups += [
                (d.tags, f"roadmap.phases[{i}].deliverables[{j}].tags")
                for j, d in enumerate(phase.deliverables)
            ]
        for i, okr in enumerate(doc.objectives.okrs):
            groups.append((okr.objective.tags, f"objectives.okrs[{i}].objective.tags"))
            groups += [
                (kr.tags, f"objectives.okrs[{i}].key_results[{j}].tags")
                for j, kr in enumerate(okr.all_key_results)
            ]
        groups += [(r.tags, f"risks[{i}].tags") for i, r in enumerate(doc.risks)]
        return groups

    def _check_tags(self) -> None:
        for tags, location in self._tag_locations():
            for message in validate_tags(tags):
                self.result.add_error(location, message)


def validate_document(doc: PRDDocument | None) -> ValidationResult:
    """Check ``doc`` for structural problems. ``None`` validates as an empty document."""
    doc = doc if doc is not None else PRDDocument()
    result = PRDValidator(doc).run()
    logger.info(
        "Document validated",
        document_id=doc.metadata.id,
        valid=result.valid,
        errors=len(result.errors),
        warnings=len(result.warnings),
    )
    return result
