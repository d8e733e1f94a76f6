"""Field validation against parsed rule declarations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from formsmith.utils.errors import ConfigurationError, ValidationFailure
from formsmith.validation.checks import CHECKS, is_blank
from formsmith.validation.rules import BuiltinRule, Rule, RuleKind, parse_rules

if TYPE_CHECKING:
    from formsmith.elements.base import Field


class Validation:
    """Validate the current value of one field.

    ``Required`` is not dispatched like other rules: it decides what happens to
    blank values. A blank required value fails with ``Required``; a blank
    optional value passes without running any other rule. Non-blank values run
    every rule in declaration order and stop at the first failure.
    """

    def __init__(self, field: Field) -> None:
        declarations = field.rules
        if not declarations:
            raise ConfigurationError(f'Validation rules have not been provided for "{field.name}"')

        rules = parse_rules(declarations)
        self._field = field
        # Any rule named Required, predicate or not, only sets the flag.
        self._is_required = any(rule.name == RuleKind.REQUIRED.value for rule in rules)
        self._rules = [rule for rule in rules if rule.name != RuleKind.REQUIRED.value]

    def __call__(self) -> None:
        self.validate()

    @property
    def field(self) -> Field:
        return self._field

    @property
    def is_required(self) -> bool:
        return self._is_required

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def validate(self) -> None:
        """Raise ValidationFailure for the first rule the field value breaks."""

        value = self._field.value

        if is_blank(value):
            if self._is_required:
                raise ValidationFailure(self._field, RuleKind.REQUIRED.value)
            return

        for rule in self._rules:
            if isinstance(rule, BuiltinRule):
                result = CHECKS[rule.kind](value, *rule.arguments)
            else:
                result = rule.predicate(value)
            if not result:
                raise ValidationFailure(self._field, rule.name)
