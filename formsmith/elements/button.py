"""Button element."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from formsmith.elements.attributes import AttributeMap
from formsmith.elements.base import Field
from formsmith.utils.errors import ConfigurationError

BUTTON_TYPES = frozenset({"submit", "reset", "button"})


class Button(Field):
    tag = "button"
    default_format = (
        '<button type="{type}" id="{id}" name="{name}" value="{value}" {attributes}>{label}</button>'
    )

    def __init__(
        self,
        type: str,
        name: str,
        label: str | None = None,
        value: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        if type not in BUTTON_TYPES:
            raise ConfigurationError(f'Unsupported button type "{type}" provided')

        self._type = type
        super().__init__(name, label, value, params)

    @property
    def type(self) -> str:
        return self._type

    def parameters(self, attributes: AttributeMap) -> dict[str, Any]:
        data = super().parameters(attributes)
        data["type"] = self.type
        return data
