"""Test configuration and shared fixtures."""

import os
import sys
from pathlib import Path

import pytest

# Ensure the project root is on PYTHONPATH
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT))

# Set test environment variables before anything else imports config
os.environ.setdefault("PRDGRADE_ENVIRONMENT", "development")
os.environ.setdefault("PRDGRADE_LOG_LEVEL", "WARNING")

from prdgrade.models.prd import PRDDocument  # noqa: E402

_LONG_PROBLEM = (
    "Support engineers spend up to forty minutes per ticket searching three disconnected "
    "knowledge bases, which delays first responses and drives customer churn."
)
_LONG_SOLUTION = (
    "A unified search assistant that indexes all knowledge bases, ranks answers by ticket "
    "context and suggests replies directly inside the support console."
)


def _persona(pid: str, name: str, primary: bool = False) -> dict:
    return {
        "id": pid,
        "name": name,
        "role": "Support Engineer",
        "description": f"{name} handles tier-one tickets across all regions.",
        "goals": ["Resolve tickets quickly"],
        "painPoints": ["Searching several tools for one answer"],
        "behaviors": ["Keeps many browser tabs open"],
        "isPrimary": primary,
    }


def _story(n: int, persona_id: str, phase_id: str) -> dict:
    return {
        "id": f"US-{n}",
        "personaId": persona_id,
        "title": f"Story {n}",
        "asA": "support engineer",
        "iWant": "to find answers in one place",
        "soThat": "I can respond faster",
        "acceptanceCriteria": [{"id": f"AC-{n}", "description": "Results appear in under 2s"}],
        "priority": "must",
        "phaseId": phase_id,
    }


def _key_result(kid: str, description: str, phase_id: str = "") -> dict:
    kr = {
        "id": kid,
        "description": description,
        "baseline": "40 min",
        "target": "10 min",
        "measurementMethod": "Ticket timestamps",
    }
    if phase_id:
        kr["phaseTargets"] = [{"phaseId": phase_id, "target": "20 min"}]
    return kr


def _phase(pid: str, name: str) -> dict:
    return {
        "id": pid,
        "name": name,
        "goals": [f"Ship {name}"],
        "deliverables": [{"id": f"{pid}-D1", "title": f"{name} release"}],
        "success_criteria": [f"{name} adopted by pilot team"],
    }


def full_prd_data() -> dict:
    """A camelCase PRD that completes every section and every rubric category."""
    personas = [_persona("P1", "Avery", primary=True), _persona("P2", "Blake"), _persona("P3", "Casey")]
    phases = [_phase("PH1", "MVP"), _phase("PH2", "Beta"), _phase("PH3", "GA")]
    return {
        "metadata": {
            "id": "PRD-001",
            "title": "Unified Support Search",
            "version": "1.0.0",
            "status": "draft",
            "createdAt": "2026-01-05T09:00:00Z",
            "authors": [{"name": "Jordan Lee", "email": "jordan@example.com"}],
            "reviewers": [{"name": "Sam Park"}],
            "tags": ["support", "search"],
        },
        "executiveSummary": {
            "problemStatement": _LONG_PROBLEM,
            "proposedSolution": _LONG_SOLUTION,
            "expectedOutcomes": ["Faster responses", "Lower churn", "Happier engineers"],
            "targetAudience": "Tier-one support engineers",
            "valueProposition": "One search box for every answer",
        },
        "objectives": {
            "okrs": [
                {
                    "objective": {
                        "id": "O1",
                        "title": "Cut time to first response",
                        "keyResults": [
                            _key_result("KR1", "Median search time", phase_id="PH1"),
                            _key_result("KR2", "First response time"),
                        ],
                    }
                },
                {
                    "objective": {
                        "id": "O2",
                        "title": "Improve answer quality",
                        "keyResults": [_key_result("KR3", "Reopened tickets")],
                    }
                },
            ]
        },
        "personas": personas,
        "userStories": [_story(n, f"P{n % 3 + 1}", f"PH{n % 3 + 1}") for n in range(1, 11)],
        "requirements": {
            "functional": [
                {
                    "id": f"FR-{n}",
                    "title": f"Requirement {n}",
                    "priority": "must",
                    "userStoryIds": [f"US-{n}"],
                    "acceptanceCriteria": [{"id": f"FR-{n}-AC", "description": "Verified"}],
                }
                for n in range(1, 11)
            ],
            "nonFunctional": [
                {"id": "NFR-1", "category": "performance", "title": "p95 under 2s"},
                {"id": "NFR-2", "category": "security", "title": "SSO only"},
                {"id": "NFR-3", "category": "reliability", "title": "99.9% uptime"},
                {"id": "NFR-4", "category": "scalability", "title": "10k concurrent users"},
                {"id": "NFR-5", "category": "observability", "title": "Tracing on all calls"},
            ],
        },
        "roadmap": {"phases": phases},
        "assumptions": {
            "assumptions": [
                {"id": "A1", "description": "Knowledge bases expose APIs", "validated": True},
                {"id": "A2", "description": "Engineers use the console"},
                {"id": "A3", "description": "Content is mostly English"},
            ],
            "constraints": [
                {"id": "C1", "description": "No new vendors"},
                {"id": "C2", "description": "Launch before Q3"},
            ],
            "dependencies": [{"id": "D1", "name": "Identity service"}],
        },
        "outOfScope": ["Voice support", "Mobile app", "Billing", "Chatbots", "Translation"],
        "technicalArchitecture": {
            "overview": "Indexer, ranking service and console plugin",
            "systemDiagram": "https://example.com/diagram.png",
            "integrationPoints": [{"id": "I1", "name": "Wiki API"}],
            "technologyStack": {"backend": [{"name": "Python"}]},
            "securityDesign": "Per-tenant encryption",
            "scalabilityDesign": "Horizontally scaled workers",
        },
        "uxRequirements": {
            "designPrinciples": ["One box, zero clicks"],
            "wireframes": [{"id": "W1", "title": "Search panel"}],
            "interactionFlows": [{"id": "F1", "title": "Search to reply"}],
            "accessibility": {"standard": "WCAG 2.1 AA"},
            "brandGuidelines": "Console design system",
        },
        "risks": [
            {"id": f"R{n}", "description": f"Risk {n}", "mitigation": f"Mitigation {n}"}
            for n in range(1, 6)
        ],
        "glossary": [{"term": f"Term {n}", "definition": f"Definition {n}"} for n in range(1, 11)],
        "problem": {
            "id": "PB1",
            "statement": _LONG_PROBLEM,
            "userImpact": "Slow responses for every customer",
            "evidence": [{"type": "survey", "source": "Q4 survey", "strength": "high"}],
            "confidence": 0.8,
            "rootCauses": ["Fragmented knowledge bases"],
        },
        "market": {
            "alternatives": [
                {"id": "ALT1", "name": "Vendor search", "type": "competitor"},
                {"id": "ALT2", "name": "Manual bookmarks", "type": "workaround"},
            ],
            "differentiation": ["Ticket-aware ranking"],
            "market_risks": ["Vendor bundling"],
        },
        "solution": {
            "solution_options": [
                {
                    "id": "S1",
                    "name": "Unified search",
                    "problems_addressed": ["PB1"],
                    "tradeoffs": ["Indexing cost"],
                },
                {"id": "S2", "name": "Better wiki"},
            ],
            "selected_solution_id": "S1",
            "solution_rationale": "Addresses the root cause directly",
            "confidence": 0.75,
        },
    }


def minimal_prd_data() -> dict:
    """Required metadata plus one persona, one user story, one requirement and one phase."""
    return {
        "metadata": {
            "id": "PRD-MIN",
            "title": "Minimal PRD",
            "version": "0.1.0",
            "status": "draft",
            "authors": [{"name": "Jordan Lee"}],
        },
        "executiveSummary": {
            "problemStatement": "Search is slow.",
            "proposedSolution": "Make it fast.",
        },
        "personas": [_persona("P1", "Avery")],
        "userStories": [_story(1, "P1", "PH1")],
        "requirements": {"functional": [{"id": "FR-1", "title": "Search"}]},
        "roadmap": {"phases": [{"id": "PH1", "name": "MVP"}]},
    }


@pytest.fixture
def empty_prd() -> PRDDocument:
    return PRDDocument()


@pytest.fixture
def minimal_prd() -> PRDDocument:
    return PRDDocument.model_validate(minimal_prd_data())


@pytest.fixture
def full_prd() -> PRDDocument:
    return PRDDocument.model_validate(full_prd_data())


@pytest.fixture
def full_prd_payload() -> dict:
    return full_prd_data()
