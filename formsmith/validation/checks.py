"""Built-in value checks dispatched by rule kind."""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from types import MappingProxyType

from formsmith.utils.errors import ConfigurationError
from formsmith.utils.text import is_numeric
from formsmith.validation.rules import RuleKind

Check = Callable[..., bool]

_EMAIL_RE = re.compile(
    r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,63}"
)
_INTEGER_RE = re.compile(r"0|-?[1-9][0-9]*")
_ALPHA_RE = re.compile(r"[a-zA-ZÀ-ÿ]+")
_ALPHA_NUM_RE = re.compile(r"[a-zA-ZÀ-ÿ0-9]+")


def is_blank(value: object) -> bool:
    """Return True when the trimmed value is empty and not numeric."""

    if value is None:
        return True
    if is_numeric(value):
        return False
    return str(value).strip() == ""


def check_email(value: object) -> bool:
    text = str(value)
    if len(text) > 254:
        return False
    local, _, _ = text.partition("@")
    return len(local) <= 64 and _EMAIL_RE.fullmatch(text) is not None


def check_min_length(value: object, length: str) -> bool:
    return len(str(value)) >= _int_argument(length, RuleKind.MIN_LENGTH)


def check_max_length(value: object, length: str) -> bool:
    return len(str(value)) <= _int_argument(length, RuleKind.MAX_LENGTH)


def check_length(value: object, length: str) -> bool:
    return len(str(value)) == _int_argument(length, RuleKind.LENGTH)


def check_min(value: object, minimum: str) -> bool:
    if not is_numeric(value):
        return False
    return float(value) >= _number_argument(minimum, RuleKind.MIN)


def check_max(value: object, maximum: str) -> bool:
    if not is_numeric(value):
        return False
    return float(value) <= _number_argument(maximum, RuleKind.MAX)


def check_between(value: object, minimum: str, maximum: str) -> bool:
    if not is_numeric(value):
        return False
    number = float(value)
    lower = _number_argument(minimum, RuleKind.BETWEEN)
    upper = _number_argument(maximum, RuleKind.BETWEEN)
    return lower <= number <= upper


def check_numeric(value: object) -> bool:
    return is_numeric(value)


def check_integer(value: object) -> bool:
    """Accept ints and canonical integer strings such as ``"42"`` or ``"-7"``."""

    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, str) and _INTEGER_RE.fullmatch(value) is not None


def check_float(value: object) -> bool:
    """Accept numbers and unpadded numeric strings with a finite float value."""

    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if not isinstance(value, str) or value != value.strip() or not is_numeric(value):
        return False
    return math.isfinite(float(value))


def check_alpha(value: object) -> bool:
    return _ALPHA_RE.fullmatch(str(value)) is not None


def check_alpha_num(value: object) -> bool:
    return _ALPHA_NUM_RE.fullmatch(str(value)) is not None


def check_equals(value: object, match: str) -> bool:
    return value == match


def check_required(value: object) -> bool:
    return not is_blank(value)


CHECKS: MappingProxyType[RuleKind, Check] = MappingProxyType(
    {
        RuleKind.ALPHA: check_alpha,
        RuleKind.ALPHA_NUM: check_alpha_num,
        RuleKind.BETWEEN: check_between,
        RuleKind.EMAIL: check_email,
        RuleKind.EQUALS: check_equals,
        RuleKind.FLOAT: check_float,
        RuleKind.INTEGER: check_integer,
        RuleKind.LENGTH: check_length,
        RuleKind.MAX: check_max,
        RuleKind.MAX_LENGTH: check_max_length,
        RuleKind.MIN: check_min,
        RuleKind.MIN_LENGTH: check_min_length,
        RuleKind.NUMERIC: check_numeric,
        RuleKind.REQUIRED: check_required,
    }
)


def _int_argument(raw: str, kind: RuleKind) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f'Rule "{kind.value}" expects an integer, got "{raw}"') from exc


def _number_argument(raw: str, kind: RuleKind) -> float:
    if not is_numeric(raw):
        raise ConfigurationError(f'Rule "{kind.value}" expects a number, got "{raw}"')
    return float(raw)
