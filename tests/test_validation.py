"""Tests for structural PRD validation."""

from __future__ import annotations

import pytest

from prdgrade.evaluation.validation import tag_error, validate_document, validate_tags
from prdgrade.models.prd import PRDDocument


def _issues(issues) -> list[tuple[str, str]]:
    return [(i.field, i.message) for i in issues]


class TestTags:
    @pytest.mark.parametrize("tag", ["mvp", "phase-1", "2024-q1", "backend-api"])
    def test_valid(self, tag):
        assert tag_error(tag) is None

    @pytest.mark.parametrize("tag", ["MVP", "phase_1", "-mvp", "mvp-", "phase--1", "two words"])
    def test_invalid(self, tag):
        assert tag_error(tag) == (
            f'invalid tag "{tag}": must be lowercase alphanumeric with hyphens '
            "(e.g., 'my-tag', 'phase-1')"
        )

    def test_empty(self):
        assert tag_error("") == "tag cannot be empty"

    def test_validate_tags_collects_all(self):
        assert len(validate_tags(["ok", "Bad", "", "fine-1"])) == 2


class TestWellFormedDocuments:
    def test_full_document_clean(self, full_prd):
        result = validate_document(full_prd)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_minimal_document_warns_about_okrs(self, minimal_prd):
        result = validate_document(minimal_prd)
        assert result.valid
        assert _issues(result.warnings) == [("objectives", "No OKRs defined")]


class TestRequiredContent:
    def test_empty_document(self, empty_prd):
        result = validate_document(empty_prd)
        assert not result.valid
        assert _issues(result.errors) == [
            ("metadata.id", "Document ID is required"),
            ("metadata.title", "Title is required"),
            ("metadata.status", "Status is required"),
        ]
        assert _issues(result.warnings) == [
            ("metadata.authors", "No authors specified"),
            ("executive_summary.problem_statement", "Problem statement is empty"),
            ("executive_summary.proposed_solution", "Proposed solution is empty"),
            ("objectives", "No OKRs defined"),
            ("personas", "No personas defined"),
            ("user_stories", "No user stories defined"),
        ]

    def test_none_treated_as_empty(self, empty_prd):
        assert validate_document(None) == validate_document(empty_prd)

    def test_short_title(self, full_prd_payload):
        data = full_prd_payload
        data["metadata"]["title"] = "PRD"
        result = validate_document(PRDDocument.model_validate(data))
        assert _issues(result.errors) == [("metadata.title", "Title must be at least 5 characters")]

    def test_five_character_title_accepted(self, full_prd_payload):
        data = full_prd_payload
        data["metadata"]["title"] = "Billy"
        assert validate_document(PRDDocument.model_validate(data)).valid

    def test_okr_without_key_results_warns(self, full_prd_payload):
        data = full_prd_payload
        data["objectives"]["okrs"].append({"objective": {"id": "O3", "title": "Grow"}})
        result = validate_document(PRDDocument.model_validate(data))
        assert result.valid
        assert _issues(result.warnings) == [("objectives.okrs[2]", "OKR has no key results defined")]


class TestDuplicateIds:
    def test_duplicate_persona(self, full_prd_payload):
        data = full_prd_payload
        data["personas"][2]["id"] = "P1"
        result = validate_document(PRDDocument.model_validate(data))
        assert not result.valid
        assert _issues(result.errors) == [
            ("personas[2].id", "Duplicate ID 'P1' (also at personas[0].id)")
        ]

    def test_duplicates_across_sections(self, full_prd_payload):
        data = full_prd_payload
        data["roadmap"]["phases"][0]["id"] = "KR1"
        result = validate_document(PRDDocument.model_validate(data))
        assert (
            "roadmap.phases[0].id",
            "Duplicate ID 'KR1' (also at objectives.okrs[0].key_results[0].id)",
        ) in _issues(result.errors)

    def test_duplicate_solution_option(self, full_prd_payload):
        data = full_prd_payload
        data["solution"]["solution_options"][1]["id"] = "S1"
        result = validate_document(PRDDocument.model_validate(data))
        assert _issues(result.errors) == [
            (
                "solution.solution_options[1].id",
                "Duplicate ID 'S1' (also at solution.solution_options[0].id)",
            )
        ]

    def test_duplicate_alternative(self, full_prd_payload):
        data = full_prd_payload
        data["market"]["alternatives"][1]["id"] = "PB1"
        result = validate_document(PRDDocument.model_validate(data))
        assert _issues(result.errors) == [
            ("market.alternatives[1].id", "Duplicate ID 'PB1' (also at problem.id)")
        ]

    def test_empty_ids_ignored(self):
        doc = PRDDocument.model_validate({"personas": [{"name": "A"}, {"name": "B"}]})
        assert not any("Duplicate" in i.message for i in validate_document(doc).errors)


class TestTraceability:
    def test_story_to_undefined_persona_and_phase(self, full_prd_payload):
        data = full_prd_payload
        data["userStories"][0].update(personaId="P9", phaseId="PH9")
        result = validate_document(PRDDocument.model_validate(data))
        assert result.valid
        assert _issues(result.warnings) == [
            ("user_stories[0].persona_id", "Reference to undefined persona: P9"),
            ("user_stories[0].phase_id", "Reference to undefined phase: PH9"),
        ]

    def test_requirement_to_undefined_story_and_phase(self, full_prd_payload):
        data = full_prd_payload
        data["requirements"]["functional"][1].update(userStoryIds=["US-99"], phaseId="PH7")
        result = validate_document(PRDDocument.model_validate(data))
        assert _issues(result.warnings) == [
            ("requirements.functional[1].user_story_ids", "Reference to undefined user story: US-99"),
            ("requirements.functional[1].phase_id", "Reference to undefined phase: PH7"),
        ]

    def test_solution_to_undefined_problem(self, full_prd_payload):
        data = full_prd_payload
        data["solution"]["solution_options"][0]["problems_addressed"] = ["PB1", "PB2"]
        result = validate_document(PRDDocument.model_validate(data))
        assert _issues(result.warnings) == [
            ("solution.solution_options[0].problems_addressed", "Reference to undefined problem: PB2")
        ]

    def test_selected_solution_missing_is_error(self, full_prd_payload):
        data = full_prd_payload
        data["solution"]["selected_solution_id"] = "S9"
        result = validate_document(PRDDocument.model_validate(data))
        assert not result.valid
        assert _issues(result.errors) == [
            ("solution.selected_solution_id", "Selected solution 'S9' not found in solution options")
        ]


class TestTagLocations:
    def test_invalid_tags_reported_per_location(self, full_prd_payload):
        data = full_prd_payload
        data["metadata"]["tags"] = ["Support"]
        data["userStories"][3]["tags"] = ["mvp", "Phase 1"]
        data["roadmap"]["phases"][1]["deliverables"][0]["tags"] = [""]
        data["objectives"]["okrs"][0]["objective"]["keyResults"][1]["tags"] = ["kr_2"]
        data["risks"][4]["tags"] = ["-vendor"]
        result = validate_document(PRDDocument.model_validate(data))
        assert not result.valid
        assert [i.field for i in result.errors] == [
            "metadata.tags",
            "user_stories[3].tags",
            "roadmap.phases[1].deliverables[0].tags",
            "objectives.okrs[0].key_results[1].tags",
            "risks[4].tags",
        ]
        assert result.errors[2].message == "tag cannot be empty"

    def test_valid_tags_everywhere(self, full_prd_payload):
        data = full_prd_payload
        data["personas"][0]["tags"] = ["tier-1"]
        data["requirements"]["nonFunctional"][0]["tags"] = ["perf"]
        data["roadmap"]["phases"][0]["tags"] = ["2026-q1"]
        assert validate_document(PRDDocument.model_validate(data)).valid


class TestSerialization:
    def test_json_shape(self, empty_prd):
        data = validate_document(empty_prd).model_dump(mode="json")
        assert set(data) == {"valid", "errors", "warnings"}
        assert data["errors"][0] == {"field": "metadata.id", "message": "Document ID is required"}
