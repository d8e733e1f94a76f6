"""Shared field behavior: parameters, validation wiring and rendering."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from formsmith.elements.attributes import AttributeMap, normalize_attributes, serialize_attributes
from formsmith.templates.merger import (
    merge,
    merge_class_attribute,
    strip_attributes_token,
    strip_value_attribute,
)
from formsmith.utils.errors import ConfigurationError
from formsmith.utils.text import is_empty, sanitize, slug
from formsmith.validation.rules import RuleDeclarations
from formsmith.validation.validator import Validation

if TYPE_CHECKING:
    from formsmith.templates.registry import TemplateRegistry


class Field:
    """Base class for one form control.

    ``params`` accepts ``attributes`` (one-level nested mapping) and ``rules``
    (rule declarations). Declaring ``rules`` attaches a Validation immediately,
    so unknown rule names fail at construction.
    """

    tag: ClassVar[str] = ""
    default_format: ClassVar[str] = ""

    def __init__(
        self,
        name: str,
        label: str | None = None,
        value: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        self.name = name
        self.label = label
        self.value = value
        self.id: str | None = None
        self.form_id: str | None = None
        self.attributes: AttributeMap = {}
        self.rules: RuleDeclarations | None = None
        self.validation: Validation | None = None

        params = params or {}
        if params.get("rules") is not None:
            self.set_validation(params["rules"])
        if params.get("attributes") is not None:
            self.set_attributes(params["attributes"])

    @property
    def type(self) -> str | None:
        return None

    def set_attributes(self, attributes: Mapping[str, Any] | None) -> None:
        self.attributes = normalize_attributes(attributes)

    def set_validation(self, rules: RuleDeclarations) -> None:
        self.rules = rules
        self.validation = Validation(self)

    def assign_to(self, form_id: str) -> None:
        """Attach the field to a form and derive its element id."""

        self.form_id = form_id
        self.id = slug(f"{form_id}-{self.name}")

    def parameters(self, attributes: AttributeMap) -> dict[str, Any]:
        """Build the token data for one render.

        ``attributes`` is the render-scoped copy of the field attributes;
        subclasses may add entries to it.
        """

        return {
            "id": self.id or "",
            "label": self.label or "",
            "name": sanitize(self.name),
            "value": self.value,
        }

    def render(self, registry: TemplateRegistry | None = None) -> str:
        """Render the field markup using a registered or default format."""

        format = registry.resolve(self.tag, self.type) if registry is not None else None
        format = format or self.default_format
        if not format:
            raise ConfigurationError(f"No format available for field kind: {self.tag}")

        attributes = dict(self.attributes)
        data = self.parameters(attributes)

        if is_empty(data.get("value")):
            format = strip_value_attribute(format)
            data["value"] = ""
        else:
            data["value"] = sanitize(data["value"])

        if attributes:
            format, attributes, folded = merge_class_attribute(self.tag, format, attributes)
            data.update(folded)
        if attributes:
            data["attributes"] = serialize_attributes(attributes)
        else:
            format = strip_attributes_token(format)
            data["attributes"] = ""

        return merge(format, data)
