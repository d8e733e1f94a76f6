"""Format registry keyed by field kind and input type."""

from __future__ import annotations

from collections.abc import Callable

from formsmith.elements.input import INPUT_TYPES
from formsmith.utils.errors import ConfigurationError

FIELD_KINDS = ("input", "textarea", "button", "select")
DEFAULT_VARIANT = "default"


class TemplateRegistry:
    """Hold one format per field kind, plus per-type variants for inputs.

    The registry is filled during setup and only read afterwards.
    """

    def __init__(self) -> None:
        self._input: dict[str, str] = {}
        self._formats: dict[str, str] = {}

    def set_format(self, kind: str, format: str, variant: str | None = None) -> None:
        if kind not in FIELD_KINDS:
            raise ConfigurationError(f"No such field kind: {kind}")
        if kind == "input":
            self.set_input(format, variant or DEFAULT_VARIANT)
            return
        if variant is not None:
            raise ConfigurationError(f"Format variants are only supported for input, not {kind}")
        self._formats[kind] = format

    def set_input(self, format: str, type: str = DEFAULT_VARIANT) -> None:
        if type != DEFAULT_VARIANT and type not in INPUT_TYPES:
            raise ConfigurationError(f'Unsupported input type "{type}" provided')
        self._input[type] = format

    def set_textarea(self, format: str) -> None:
        self._formats["textarea"] = format

    def set_button(self, format: str) -> None:
        self._formats["button"] = format

    def set_select(self, format: str) -> None:
        self._formats["select"] = format

    def get_input(self, type: str | None = None) -> str | None:
        if type is not None and type in self._input:
            return self._input[type]
        return self._input.get(DEFAULT_VARIANT)

    def get_textarea(self, type: str | None = None) -> str | None:
        return self._formats.get("textarea")

    def get_button(self, type: str | None = None) -> str | None:
        return self._formats.get("button")

    def get_select(self, type: str | None = None) -> str | None:
        return self._formats.get("select")

    def resolve(self, tag: str, type: str | None = None) -> str | None:
        """Return the registered format for a tag/type pair.

        ``None`` means nothing is registered for a known kind, so callers fall
        back to the field's compiled-in default format.
        """

        getters: dict[str, Callable[[str | None], str | None]] = {
            "input": self.get_input,
            "textarea": self.get_textarea,
            "button": self.get_button,
            "select": self.get_select,
        }
        try:
            getter = getters[tag]
        except KeyError as exc:
            raise ConfigurationError(f"No such field kind: {tag}") from exc
        return getter(type)

    def input_variants(self) -> list[str]:
        """Return registered input variants in stable order."""

        return sorted(self._input)
