from __future__ import annotations

from formsmith.templates.merger import (
    merge,
    merge_class_attribute,
    strip_attributes_token,
    strip_value_attribute,
)


def test_merge_replaces_every_occurrence() -> None:
    result = merge('<label for="{id}">{label}</label><input id="{id}">', {"id": "f-a", "label": "A"})

    assert result == '<label for="f-a">A</label><input id="f-a">'


def test_merge_does_not_substitute_recursively() -> None:
    result = merge("{first}|{second}", {"first": "{second}", "second": "two"})

    assert result == "{second}|two"


def test_merge_leaves_unknown_tokens_literal() -> None:
    assert merge("{known} {unknown}", {"known": "k"}) == "k {unknown}"


def test_merge_renders_none_as_empty_string() -> None:
    assert merge("[{value}]", {"value": None}) == "[]"


def test_class_folding_merges_format_and_caller_class() -> None:
    attributes = {"class": "required", "data-format": "email"}

    format, remaining, folded = merge_class_attribute(
        "input", '<input class="form-control" {attributes}>', attributes
    )

    assert merge(format, folded) == '<input class="form-control required" {attributes}>'
    assert format.count("class=") == 1
    assert remaining == {"data-format": "email"}
    assert attributes == {"class": "required", "data-format": "email"}


def test_class_folding_with_empty_format_class_uses_caller_value() -> None:
    format, remaining, folded = merge_class_attribute(
        "select", '<select class="" {attributes}>', {"class": "required"}
    )

    assert merge(format, folded) == '<select class="required" {attributes}>'
    assert remaining == {}


def test_folded_caller_class_is_not_substituted() -> None:
    format, _, folded = merge_class_attribute(
        "input", '<input class="form-control" name="{name}">', {"class": "{name} x"}
    )

    assert merge(format, {"name": "q", **folded}) == (
        '<input class="form-control {name} x" name="q">'
    )


def test_format_class_tokens_are_still_substituted() -> None:
    format, _, folded = merge_class_attribute(
        "input", '<input class="field-{type}">', {"class": "required"}
    )

    assert merge(format, {"type": "email", **folded}) == '<input class="field-email required">'


def test_class_folding_skipped_when_format_has_no_class() -> None:
    source = '<input type="{type}" {attributes}>'

    format, remaining, folded = merge_class_attribute("input", source, {"class": "required"})

    assert format == source
    assert remaining == {"class": "required"}
    assert folded == {}


def test_class_folding_skipped_when_caller_has_no_class() -> None:
    source = '<input class="form-control" {attributes}>'

    format, remaining, folded = merge_class_attribute("input", source, {"id": "x"})

    assert format == source
    assert remaining == {"id": "x"}
    assert folded == {}


def test_non_class_attributes_are_not_reconciled() -> None:
    source = '<input placeholder="From format" {attributes}>'

    format, remaining, _ = merge_class_attribute("input", source, {"placeholder": "From caller"})

    assert format == source
    assert remaining == {"placeholder": "From caller"}


def test_class_folding_only_touches_target_tag() -> None:
    source = '<div class="form-group"><input type="{type}" class="form-control" {attributes}></div>'

    format, _, folded = merge_class_attribute("input", source, {"class": "required"})

    assert merge(format, folded) == (
        '<div class="form-group"><input type="{type}" class="form-control required" {attributes}></div>'
    )


def test_strip_value_attribute_removes_leading_whitespace() -> None:
    assert strip_value_attribute('<input name="{name}" value="{value}" id="{id}">') == (
        '<input name="{name}" id="{id}">'
    )


def test_strip_value_attribute_keeps_suffixed_attribute_names() -> None:
    source = '<input name="{name}" data-value="{value}" value="{value}" {attributes}>'

    assert strip_value_attribute(source) == (
        '<input name="{name}" data-value="{value}" {attributes}>'
    )


def test_strip_attributes_token_removes_leading_whitespace() -> None:
    assert strip_attributes_token('<input id="{id}" {attributes}>') == '<input id="{id}">'


def test_strip_attributes_token_requires_token_boundary() -> None:
    assert strip_attributes_token('<input data-{attributes} {attributes}>') == (
        '<input data-{attributes}>'
    )
