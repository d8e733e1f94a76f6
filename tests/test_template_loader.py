from __future__ import annotations

from pathlib import Path

import pytest

from formsmith.templates.loader import load_registry, load_template_config
from formsmith.utils.errors import ConfigurationError


def test_load_default_templates() -> None:
    registry = load_registry()

    assert registry.input_variants() == ["checkbox", "default", "hidden"]
    default_input = registry.resolve("input", "email")
    assert default_input is not None
    assert 'class="form-control"' in default_input
    assert "{datalist}" in default_input
    assert registry.resolve("textarea") is not None
    assert registry.resolve("button") is not None
    assert registry.resolve("select") is not None


def test_load_custom_templates(tmp_path: Path) -> None:
    path = tmp_path / "templates.yaml"
    path.write_text(
        """
input:
  default: '<input type="{type}" name="{name}" {attributes}>'
button: '<button {attributes}>{label}</button>'
""",
        encoding="utf-8",
    )

    registry = load_registry(path)

    assert registry.resolve("input", "text") == '<input type="{type}" name="{name}" {attributes}>'
    assert registry.resolve("button") == "<button {attributes}>{label}</button>"
    assert registry.resolve("select") is None


def test_load_templates_raises_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Template file not found"):
        load_template_config(tmp_path / "missing.yaml")


def test_load_templates_raises_for_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "templates.yaml"
    path.write_text("input: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_template_config(path)


def test_load_templates_raises_for_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "templates.yaml"
    path.write_text("- input\n- textarea\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="must contain a mapping"):
        load_template_config(path)


def test_load_templates_raises_for_unknown_kind(tmp_path: Path) -> None:
    path = tmp_path / "templates.yaml"
    path.write_text("fieldset: '<fieldset>'\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid template schema"):
        load_template_config(path)


def test_load_templates_raises_for_unsupported_input_type(tmp_path: Path) -> None:
    path = tmp_path / "templates.yaml"
    path.write_text("input:\n  toggle: '<input>'\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Unsupported input type"):
        load_registry(path)
