"""Rule declarations and their canonical parsed forms."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from formsmith.utils.errors import ConfigurationError

Predicate = Callable[[Any], object]
RuleDeclaration = Union[str, Predicate, tuple[str, Predicate]]
RuleDeclarations = Union[Sequence[RuleDeclaration], Mapping[str, Union[str, Predicate]]]

_RULE_RE = re.compile(r"^([a-zA-Z0-9_]+)\((.+?)\)$")


class RuleKind(str, Enum):
    """Built-in rule names accepted in declarations."""

    ALPHA = "Alpha"
    ALPHA_NUM = "AlphaNum"
    BETWEEN = "Between"
    EMAIL = "Email"
    EQUALS = "Equals"
    FLOAT = "Float"
    INTEGER = "Integer"
    LENGTH = "Length"
    MAX = "Max"
    MAX_LENGTH = "MaxLength"
    MIN = "Min"
    MIN_LENGTH = "MinLength"
    NUMERIC = "Numeric"
    REQUIRED = "Required"


_ARITY: dict[RuleKind, int] = {
    RuleKind.ALPHA: 0,
    RuleKind.ALPHA_NUM: 0,
    RuleKind.BETWEEN: 2,
    RuleKind.EMAIL: 0,
    RuleKind.EQUALS: 1,
    RuleKind.FLOAT: 0,
    RuleKind.INTEGER: 0,
    RuleKind.LENGTH: 1,
    RuleKind.MAX: 1,
    RuleKind.MAX_LENGTH: 1,
    RuleKind.MIN: 1,
    RuleKind.MIN_LENGTH: 1,
    RuleKind.NUMERIC: 0,
    RuleKind.REQUIRED: 0,
}

SUPPORTED_RULES: tuple[str, ...] = tuple(kind.value for kind in RuleKind)


@dataclass(frozen=True)
class BuiltinRule:
    """A named built-in check with raw string arguments."""

    kind: RuleKind
    arguments: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def method(self) -> str:
        return f"check{self.kind.value}"


@dataclass(frozen=True)
class PredicateRule:
    """A caller-supplied check invoked with the field value."""

    name: str
    predicate: Predicate


Rule = Union[BuiltinRule, PredicateRule]


def parse_rule(declaration: str) -> BuiltinRule:
    """Parse ``Name`` or ``Name(arg1,arg2)`` into a built-in rule.

    Arguments are split on commas and kept as raw strings; checks coerce them
    when they run.
    """

    name = declaration
    arguments: tuple[str, ...] = ()
    match = _RULE_RE.match(declaration)
    if match is not None:
        name = match.group(1)
        arguments = tuple(match.group(2).split(","))

    try:
        kind = RuleKind(name)
    except ValueError as exc:
        raise ConfigurationError(f'Unknown rule: "{name}"') from exc

    expected = _ARITY[kind]
    if len(arguments) != expected:
        raise ConfigurationError(
            f'Rule "{name}" expects {expected} argument(s), got {len(arguments)}'
        )
    return BuiltinRule(kind=kind, arguments=arguments)


def parse_rules(declarations: RuleDeclarations) -> list[Rule]:
    """Parse rule declarations in order.

    A later rule with the same name replaces the earlier one at its original
    position.
    """

    rules: dict[str, Rule] = {}
    for rule in _iter_rules(declarations):
        rules[rule.name] = rule
    return list(rules.values())


def _iter_rules(declarations: RuleDeclarations) -> Iterator[Rule]:
    if isinstance(declarations, str):
        yield parse_rule(declarations)
        return

    if isinstance(declarations, Mapping):
        for key, value in declarations.items():
            if isinstance(value, str):
                yield parse_rule(value)
            elif callable(value):
                yield PredicateRule(name=str(key), predicate=value)
            else:
                raise ConfigurationError(f"Unsupported rule declaration for {key!r}")
        return

    for item in declarations:
        if isinstance(item, str):
            yield parse_rule(item)
        elif isinstance(item, tuple) and len(item) == 2 and callable(item[1]):
            yield PredicateRule(name=str(item[0]), predicate=item[1])
        elif callable(item):
            yield PredicateRule(name=getattr(item, "__name__", repr(item)), predicate=item)
        else:
            raise ConfigurationError(f"Unsupported rule declaration: {item!r}")
