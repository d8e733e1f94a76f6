"""Token merge and class-folding for field formats."""

from __future__ import annotations

import re
from collections.abc import Mapping

from formsmith.elements.attributes import AttributeMap
from formsmith.templates.format_parser import parse_format
from formsmith.utils.text import sanitize

FOLDED_CLASS_TOKEN = "_folded_class"

# Whole attribute names only: ``data-value="{value}"`` is not a value attribute.
_VALUE_ATTRIBUTE_RE = re.compile(r'\s*(?<![\w:-])value="\{value\}"')
_ATTRIBUTES_TOKEN_RE = re.compile(r"\s*(?<![\w:-])\{attributes\}")


def merge(format: str, data: Mapping[str, object]) -> str:
    """Replace ``{token}`` placeholders of a format with data values.

    Substituted values are never scanned again, so a value containing another
    token's text stays literal. Tokens without data are left untouched.
    """

    pieces: list[str] = []
    for segment in parse_format(format).segments:
        if segment.kind == "token" and segment.name in data:
            value = data[segment.name]
            pieces.append("" if value is None else str(value))
        else:
            pieces.append(segment.text)
    return "".join(pieces)


def merge_class_attribute(
    tag: str, format: str, attributes: Mapping[str, str]
) -> tuple[str, AttributeMap, dict[str, str]]:
    """Fold a caller ``class`` attribute into the class written on the format's tag.

    Returns a new format, a new attribute map and extra token data for
    ``merge``. When both sides define ``class`` the format's class gains a
    ``{_folded_class}`` token carrying the escaped caller value, and ``class``
    is dropped from the returned attributes; otherwise the format and
    attributes are returned unchanged with no extra data. The caller value
    goes through ``merge`` as data, so braces in it are never substituted.
    Other attributes present on both sides are not reconciled.
    """

    remaining: AttributeMap = dict(attributes)
    inline = parse_format(format, tag).inline_attribute("class")
    if inline is None or "class" not in remaining:
        return format, remaining, {}

    token = f"{{{FOLDED_CLASS_TOKEN}}}"
    merged_value = f"{inline.value} {token}" if inline.value else token
    replacement = f'{inline.name}="{merged_value}"'
    folded = {FOLDED_CLASS_TOKEN: sanitize(remaining.pop("class"))}
    return format[: inline.start] + replacement + format[inline.end :], remaining, folded


def strip_value_attribute(format: str) -> str:
    """Remove the ``value="{value}"`` attribute and its leading whitespace."""

    return _VALUE_ATTRIBUTE_RE.sub("", format)


def strip_attributes_token(format: str) -> str:
    """Remove the ``{attributes}`` token and its leading whitespace."""

    return _ATTRIBUTES_TOKEN_RE.sub("", format)
