"""Custom exceptions for form construction and validation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from formsmith.elements.base import Field


class ConfigurationError(ValueError):
    """Raised when templates, fields, rules or form setup are misconfigured."""


class RequestForgeryError(Exception):
    """Raised when the CSRF token of a submission cannot be verified."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"CSRF validation failed: {reason}")
        self.reason = reason


class ValidationFailure(Exception):
    """Raised when a field value fails one of its validation rules."""

    def __init__(self, field: Field, rule_name: str) -> None:
        label = field.label or field.name
        super().__init__(f'Validation for field "{label}" failed rule "{rule_name}"')
        self.field = field
        self.rule_name = rule_name
