"""Pydantic models for PRD structural validation results."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """One problem found at a dotted document path, e.g. ``personas[0].id``."""

    field: str
    message: str


class ValidationResult(BaseModel):
    """Errors make a document invalid; warnings never do."""

    valid: bool = True
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)

    def add_error(self, field: str, message: str) -> None:
        self.valid = False
        self.errors.append(ValidationIssue(field=field, message=message))

    def add_warning(self, field: str, message: str) -> None:
        self.warnings.append(ValidationIssue(field=field, message=message))
