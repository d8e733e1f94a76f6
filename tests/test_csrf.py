from __future__ import annotations

import base64

import pytest

from formsmith.forms.csrf import issue_token, session_key, verify_token
from formsmith.forms.session import InMemorySessionStore
from formsmith.utils.errors import RequestForgeryError


def test_issue_token_creates_and_stores_random_token() -> None:
    session = InMemorySessionStore()

    token = issue_token(session, "login-form")

    assert session.get("login-form.csrf") == token
    assert len(base64.b64decode(token)) == 32
    assert issue_token(session, "login-form") == token


def test_tokens_are_scoped_per_form() -> None:
    session = InMemorySessionStore()

    first = issue_token(session, "a")
    second = issue_token(session, "b")

    assert first != second
    assert session_key("a") == "a.csrf"


def test_verify_token_accepts_matching_token() -> None:
    session = InMemorySessionStore({"f.csrf": "abc"})

    verify_token(session, "f", {"csrf": "abc"})


@pytest.mark.parametrize(
    ("stored", "data", "reason"),
    [
        ("abc", {}, "Token missing from input"),
        ("abc", {"csrf": None}, "Token missing from input"),
        ("abc", {"csrf": ""}, "Token in input is empty"),
        (None, {"csrf": "abc"}, "Token missing from session"),
        ("abc", {"csrf": "abd"}, "Token invalid"),
    ],
)
def test_verify_token_failures(stored: str | None, data: dict[str, object], reason: str) -> None:
    session = InMemorySessionStore({"f.csrf": stored} if stored else None)

    with pytest.raises(RequestForgeryError) as exc_info:
        verify_token(session, "f", data)

    assert exc_info.value.reason == reason
