"""CSRF token issue and verification against a session store."""

from __future__ import annotations

import base64
import hmac
import secrets
from collections.abc import Mapping

from formsmith.forms.session import SessionStore
from formsmith.utils.errors import RequestForgeryError

TOKEN_FIELD = "csrf"
_TOKEN_BYTES = 32


def session_key(form_id: str) -> str:
    return f"{form_id}.csrf"


def issue_token(session: SessionStore, form_id: str) -> str:
    """Return the session token for a form, creating one when absent."""

    key = session_key(form_id)
    token = session.get(key)
    if not token:
        token = base64.b64encode(secrets.token_bytes(_TOKEN_BYTES)).decode("ascii")
        session.set(key, token)
    return token


def verify_token(session: SessionStore, form_id: str, data: Mapping[str, object]) -> None:
    """Raise RequestForgeryError unless the submitted token matches the session."""

    if TOKEN_FIELD not in data or data[TOKEN_FIELD] is None:
        raise RequestForgeryError("Token missing from input")

    submitted = data[TOKEN_FIELD]
    if not submitted:
        raise RequestForgeryError("Token in input is empty")

    token = session.get(session_key(form_id))
    if not token:
        raise RequestForgeryError("Token missing from session")

    if not hmac.compare_digest(token.encode("utf-8"), str(submitted).encode("utf-8")):
        raise RequestForgeryError("Token invalid")
