"""Declarative form definitions loaded from YAML or JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from formsmith.forms.builder import FormBuilder
from formsmith.forms.session import SessionStore
from formsmith.templates.registry import TemplateRegistry
from formsmith.utils.errors import ConfigurationError


class FieldDefinition(BaseModel):
    """One field entry of a form definition."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    kind: Literal["input", "textarea", "select", "button"]
    name: str
    type: str | None = None
    label: str | None = None
    value: str | int | float | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    rules: list[str] | None = None
    options: list[dict[str, Any]] = Field(default_factory=list)
    datalist: list[str] = Field(default_factory=list, alias="list")

    def params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.attributes:
            params["attributes"] = self.attributes
        if self.rules is not None:
            params["rules"] = self.rules
        if self.datalist:
            params["list"] = self.datalist
        return params


class FormDefinition(BaseModel):
    """Form-level settings plus ordered fields."""

    model_config = ConfigDict(extra="forbid")

    id: str
    method: Literal["get", "post"] = "post"
    action: str = ""
    attributes: dict[str, Any] = Field(default_factory=dict)
    fields: list[FieldDefinition] = Field(default_factory=list)


def load_form_definition(path: Path) -> FormDefinition:
    """Load a form definition; ``.json`` files are read as JSON, others as YAML."""

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Form definition not found: {path}") from exc

    try:
        raw = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Invalid form definition syntax: {path}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Form definition must contain a mapping: {path}")

    try:
        return FormDefinition.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid form definition schema: {path}") from exc


def build_form(
    definition: FormDefinition,
    registry: TemplateRegistry | None = None,
    session: SessionStore | None = None,
) -> FormBuilder:
    """Assemble a FormBuilder from a definition."""

    form = FormBuilder(
        definition.id,
        definition.method,
        definition.action,
        registry=registry,
        attributes=definition.attributes,
    )

    for item in definition.fields:
        params = item.params()
        if item.kind == "input":
            form.with_input(item.type or "text", item.name, item.label, item.value, params)
        elif item.kind == "textarea":
            form.with_textarea(item.name, item.label, item.value, params)
        elif item.kind == "select":
            form.with_select(item.name, item.label, item.value, item.options, params)
        else:
            form.with_button(item.type or "submit", item.name, item.label, item.value, params)

    if session is not None:
        form.with_session(session)
    return form
