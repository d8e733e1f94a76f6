from __future__ import annotations

import logging
import re

import pytest

from formsmith.forms.builder import FormBuilder
from formsmith.forms.csrf import session_key
from formsmith.forms.session import InMemorySessionStore
from formsmith.templates.loader import load_registry
from formsmith.utils.errors import ConfigurationError, RequestForgeryError, ValidationFailure

_TOKEN_RE = re.compile(r'name="csrf" value="([^"]+)"')


def _login_form(method: str = "post") -> FormBuilder:
    return (
        FormBuilder("Login Form", method, "/processor", attributes={"class": "form"})
        .with_input(
            "email",
            "email",
            "Email",
            params={"rules": ["Required", "MinLength(5)", "MaxLength(25)", "Email"]},
        )
        .with_input("text", "name", "Name", "John Smith")
        .with_button("submit", "submit", "Save")
    )


def test_builder_slugs_id_and_assigns_fields() -> None:
    form = _login_form()

    assert form.id == "login-form"
    assert [field.name for field in form.elements] == ["email", "name", "submit"]
    assert form.elements[0].id == "login-form-email"


def test_builder_rejects_unsupported_method() -> None:
    with pytest.raises(ConfigurationError, match='Unsupported form method "put"'):
        FormBuilder("f", "put", "/")


def test_open_and_close() -> None:
    form = _login_form()

    assert form.open() == '<form id="login-form" method="post" action="/processor" class="form">'
    assert form.close() == "</form>"
    assert FormBuilder("f", "get", "/search").open() == '<form id="f" method="get" action="/search">'


def test_render_wraps_all_fields() -> None:
    html = _login_form().render()

    assert html.startswith('<form id="login-form"')
    assert html.endswith("</form>")
    assert 'name="email"' in html
    assert 'value="John Smith"' in html
    assert _login_form()() == html


def test_render_with_registry_uses_registered_formats() -> None:
    form = FormBuilder("f", "get", "/", registry=load_registry())
    form.with_input("text", "city", "City", params={"attributes": {"class": "required"}})

    html = form.element("city")

    assert 'class="form-control required"' in html
    assert html.startswith('<div class="form-group">')


def test_element_unknown_name_raises() -> None:
    with pytest.raises(ConfigurationError, match='No such element "missing"'):
        _login_form().element("missing")


def test_with_session_adds_csrf_field_for_post() -> None:
    session = InMemorySessionStore()
    form = _login_form().with_session(session)

    token = session.get(session_key("login-form"))
    assert token
    match = _TOKEN_RE.search(form.element("csrf"))
    assert match is not None
    assert match.group(1) == token


def test_with_session_keeps_existing_token() -> None:
    session = InMemorySessionStore({"login-form.csrf": "existing"})

    form = _login_form().with_session(session)

    assert form.token() == "existing"


def test_with_session_on_get_form_adds_no_token() -> None:
    session = InMemorySessionStore()
    form = _login_form("get").with_session(session)

    assert "csrf" not in [field.name for field in form.elements]
    form.validate({"email": "j.smith@example.com"})


def test_validate_passes_with_token_and_valid_values() -> None:
    session = InMemorySessionStore()
    form = _login_form().with_session(session)
    token = form.token()

    form.validate({"csrf": token, "email": "j.smith@example.com"})

    assert form.elements[0].value == "j.smith@example.com"


def test_validate_missing_input_value_fails_required() -> None:
    session = InMemorySessionStore()
    form = _login_form().with_session(session)

    with pytest.raises(ValidationFailure) as exc_info:
        form.validate({"csrf": form.token()})

    assert exc_info.value.rule_name == "Required"
    assert exc_info.value.field.name == "email"


@pytest.mark.parametrize(
    ("data", "reason"),
    [
        ({}, "Token missing from input"),
        ({"csrf": ""}, "Token in input is empty"),
        ({"csrf": "forged"}, "Token invalid"),
    ],
)
def test_validate_rejects_bad_tokens(
    data: dict[str, str], reason: str, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.WARNING, logger="formsmith.forms")
    form = _login_form().with_session(InMemorySessionStore())

    with pytest.raises(RequestForgeryError, match=reason) as exc_info:
        form.validate({**data, "email": "j.smith@example.com"})

    assert str(exc_info.value) == f"CSRF validation failed: {reason}"
    assert any(reason in record.getMessage() for record in caplog.records)


def test_verify_only_session_issues_no_token() -> None:
    session = InMemorySessionStore()
    form = _login_form().with_session(session, render_token=False)

    assert session.get(session_key("login-form")) is None
    assert "csrf" not in [field.name for field in form.elements]
    with pytest.raises(RequestForgeryError, match="Token missing from session"):
        form.validate({"csrf": "abc", "email": "j.smith@example.com"})


def test_validate_without_session_skips_token_check() -> None:
    form = _login_form()

    with pytest.raises(ValidationFailure) as exc_info:
        form.validate({"email": "ab"})

    assert exc_info.value.rule_name == "MinLength"


def test_token_without_session_raises() -> None:
    with pytest.raises(ConfigurationError, match="no session store"):
        _login_form().token()
