"""Template configuration loading from YAML."""

from __future__ import annotations

from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from formsmith.templates.registry import TemplateRegistry
from formsmith.utils.errors import ConfigurationError


class TemplateConfig(BaseModel):
    """Field formats keyed by kind; ``input`` maps input types to formats."""

    model_config = ConfigDict(extra="forbid")

    input: dict[str, str] = Field(default_factory=dict)
    textarea: str | None = None
    button: str | None = None
    select: str | None = None


def default_templates_path() -> Path:
    return Path(__file__).with_name("bootstrap.yaml")


def load_template_config(path: Path | None = None) -> TemplateConfig:
    """Load and validate a template configuration file."""

    config_path = path or default_templates_path()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Template file not found: {config_path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in template file: {config_path}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Template file must contain a mapping: {config_path}")

    try:
        return TemplateConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid template schema: {config_path}") from exc


def build_registry(config: TemplateConfig) -> TemplateRegistry:
    registry = TemplateRegistry()
    for variant, format in config.input.items():
        registry.set_format("input", format, variant)
    for kind in ("textarea", "button", "select"):
        format = getattr(config, kind)
        if format is not None:
            registry.set_format(kind, format)
    return registry


def load_registry(path: Path | None = None) -> TemplateRegistry:
    """Load a template file into a registry; defaults to the bundled Bootstrap formats."""

    return build_registry(load_template_config(path))
