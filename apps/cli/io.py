"""CLI I/O helpers for input loading and atomic output writing."""

from __future__ import annotations

import importlib
import json
import tempfile
from pathlib import Path
from typing import Any

from formsmith.utils.errors import ConfigurationError

yaml = importlib.import_module("yaml")


def load_input_values(path: Path) -> dict[str, Any]:
    """Load submitted values from a JSON (``.json``) or YAML mapping."""

    text = path.read_text(encoding="utf-8")
    try:
        raw = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Invalid input file syntax: {path}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Input file must contain a mapping: {path}")
    return {str(key): value for key, value in raw.items()}


def write_markup_atomic(path: Path, markup: str) -> None:
    """Write rendered markup atomically using a temporary file + replace."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        delete=False,
        prefix=f"{path.name}.",
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        tmp.write(markup)

    tmp_path.replace(path)


def dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
