"""Serializable validation outcome shared by the CLI and HTTP layers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from formsmith.utils.errors import ValidationFailure


class ValidationReport(BaseModel):
    """Outcome of validating one submission."""

    model_config = ConfigDict(extra="forbid")

    passed: bool
    field: str | None = None
    rule: str | None = None
    message: str | None = None

    @classmethod
    def success(cls) -> ValidationReport:
        return cls(passed=True)

    @classmethod
    def from_failure(cls, failure: ValidationFailure) -> ValidationReport:
        return cls(
            passed=False,
            field=failure.field.name,
            rule=failure.rule_name,
            message=str(failure),
        )
