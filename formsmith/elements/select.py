"""Select element with options and option groups."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from formsmith.elements.attributes import AttributeMap, serialize_attributes
from formsmith.elements.base import Field
from formsmith.utils.text import sanitize

OptionSpec = Mapping[str, Any]


class Select(Field):
    """Drop-down field.

    Options are ``{"value": ..., "label": ...}`` mappings; an option without a
    value submits its label. A mapping with a ``group`` list renders an
    ``<optgroup>`` and may set ``disabled``. The option whose value equals the
    field value is marked selected.
    """

    tag = "select"
    default_format = (
        '<label for="{id}">{label}</label>'
        '<select id="{id}" name="{name}" {attributes}>{options}</select>'
    )

    def __init__(
        self,
        name: str,
        label: str | None = None,
        value: Any = None,
        options: Sequence[OptionSpec] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        self.options: list[OptionSpec] = list(options or [])
        super().__init__(name, label, value, params)

    def build_options(self) -> str:
        pieces: list[str] = []
        for option in self.options:
            if "group" in option:
                pieces.append(self.build_option_group(option))
            else:
                pieces.append(self.build_option(option))
        return "".join(pieces)

    def build_option(self, option: OptionSpec) -> str:
        label = option["label"]
        value = option.get("value", label)
        selected = 'selected="selected" ' if self.value == value else ""
        return f'<option {selected}value="{sanitize(value)}">{sanitize(label)}</option>'

    def build_option_group(self, group: OptionSpec) -> str:
        attributes = {"disabled": "disabled"} if group.get("disabled") else {}
        prefix = f"{serialize_attributes(attributes)} " if attributes else ""
        pieces = [f'<optgroup {prefix}label="{sanitize(group["label"])}">']
        pieces.extend(self.build_option(option) for option in group["group"])
        pieces.append("</optgroup>")
        return "".join(pieces)

    def parameters(self, attributes: AttributeMap) -> dict[str, Any]:
        data = super().parameters(attributes)
        data["options"] = self.build_options()
        return data
