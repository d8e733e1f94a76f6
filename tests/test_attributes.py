from __future__ import annotations

import re

from formsmith.elements.attributes import normalize_attributes, serialize_attributes

_PAIR_RE = re.compile(r'([^\s=]+)="([^"]*)"')


def _parse_line(line: str) -> dict[str, str]:
    return {match.group(1): match.group(2) for match in _PAIR_RE.finditer(line)}


def test_normalize_flattens_nested_mappings_one_level() -> None:
    result = normalize_attributes(
        {
            "class": "required",
            "data": {"format": "email", "hint": "Use a valid address"},
            "aria": {"required": "true"},
        }
    )

    assert result == {
        "class": "required",
        "data-format": "email",
        "data-hint": "Use a valid address",
        "aria-required": "true",
    }
    assert list(result) == ["class", "data-format", "data-hint", "aria-required"]


def test_normalize_none_returns_empty_map() -> None:
    assert normalize_attributes(None) == {}


def test_normalize_later_derived_key_overwrites_earlier() -> None:
    result = normalize_attributes({"data-format": "text", "data": {"format": "email"}})

    assert result == {"data-format": "email"}


def test_normalize_is_idempotent_on_flat_maps() -> None:
    flat = {"class": "a", "id": "b", "data-x": "1"}

    once = normalize_attributes(flat)

    assert normalize_attributes(once) == once == flat


def test_serialize_escapes_quote_characters() -> None:
    line = serialize_attributes({"title": "a \"b\" & 'c' <d>"})

    assert line == 'title="a &quot;b&quot; &amp; &#x27;c&#x27; &lt;d&gt;"'


def test_serialize_empty_map_returns_empty_string() -> None:
    assert serialize_attributes({}) == ""
    assert serialize_attributes(None) == ""


def test_serialize_round_trip_preserves_order() -> None:
    attributes = {"class": "form-control", "data-format": "email", "placeholder": "Your name"}

    line = serialize_attributes(attributes)

    assert line == 'class="form-control" data-format="email" placeholder="Your name"'
    assert _parse_line(line) == attributes
    assert list(_parse_line(line)) == list(attributes)
