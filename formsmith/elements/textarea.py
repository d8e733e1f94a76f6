"""Textarea element."""

from __future__ import annotations

from formsmith.elements.base import Field


class Textarea(Field):
    """Multi-line text field; the value is rendered as the element body."""

    tag = "textarea"
    default_format = (
        '<label for="{id}">{label}</label>'
        '<textarea id="{id}" name="{name}" {attributes}>{value}</textarea>'
    )
