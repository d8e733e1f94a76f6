"""Input element with optional datalist suggestions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from formsmith.elements.attributes import AttributeMap
from formsmith.elements.base import Field
from formsmith.utils.errors import ConfigurationError
from formsmith.utils.text import sanitize

INPUT_TYPES = frozenset(
    {
        "button",
        "checkbox",
        "color",
        "date",
        "datetime",
        "datetime-local",
        "email",
        "file",
        "hidden",
        "image",
        "month",
        "number",
        "password",
        "radio",
        "range",
        "reset",
        "search",
        "submit",
        "tel",
        "text",
        "time",
        "url",
        "week",
    }
)


class Input(Field):
    tag = "input"
    default_format = (
        '<label for="{id}">{label}</label>'
        '<input type="{type}" id="{id}" name="{name}" value="{value}" {attributes}>{datalist}'
    )

    def __init__(
        self,
        type: str,
        name: str,
        label: str | None = None,
        value: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        if type not in INPUT_TYPES:
            raise ConfigurationError(f'Unsupported input type "{type}" provided')

        self._type = type
        self.options: list[str] = list((params or {}).get("list") or [])
        super().__init__(name, label, value, params)

    @property
    def type(self) -> str:
        return self._type

    def datalist(self, attributes: AttributeMap) -> str:
        """Build the datalist markup and point the ``list`` attribute at it."""

        if not self.options:
            return ""

        list_id = f"{self.id or self.name}-list"
        attributes["list"] = list_id
        pieces = [f'<datalist id="{sanitize(list_id)}">']
        pieces.extend(f'<option value="{sanitize(option)}">' for option in self.options)
        pieces.append("</datalist>")
        return "".join(pieces)

    def parameters(self, attributes: AttributeMap) -> dict[str, Any]:
        data = super().parameters(attributes)
        data["type"] = self.type
        data["datalist"] = self.datalist(attributes)
        return data
