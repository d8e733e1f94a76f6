"""Attribute normalization and serialization for form elements."""

from __future__ import annotations

from collections.abc import Mapping

from formsmith.utils.text import sanitize

AttributeMap = dict[str, str]


def normalize_attributes(raw: Mapping[str, object] | None) -> AttributeMap:
    """Flatten attribute declarations one level deep.

    Nested mappings expand into ``parent-child`` keys, so ``{"data": {"format": "x"}}``
    becomes ``{"data-format": "x"}``. Later entries overwrite earlier entries that
    derive the same key. ``None`` yields an empty map.
    """

    attributes: AttributeMap = {}
    if not raw:
        return attributes

    for key, value in raw.items():
        if isinstance(value, Mapping):
            for child_key, child_value in value.items():
                attributes[f"{key}-{child_key}"] = _attribute_value(child_value)
        else:
            attributes[str(key)] = _attribute_value(value)
    return attributes


def serialize_attributes(attributes: Mapping[str, object] | None) -> str:
    """Render attributes as ``name="value"`` pairs joined by single spaces."""

    if not attributes:
        return ""
    return " ".join(f'{sanitize(key)}="{sanitize(value)}"' for key, value in attributes.items())


def _attribute_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)
