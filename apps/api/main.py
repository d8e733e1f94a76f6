"""FastAPI harness serving and processing the example form."""

from __future__ import annotations

import json
import logging
import os
import secrets
import threading
import uuid
from collections import OrderedDict
from functools import lru_cache
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

from apps.api.example_form import build_example_form
from formsmith.forms.report import ValidationReport
from formsmith.forms.session import InMemorySessionStore
from formsmith.templates.loader import load_registry
from formsmith.templates.merger import merge
from formsmith.templates.registry import TemplateRegistry
from formsmith.utils.errors import ConfigurationError, RequestForgeryError, ValidationFailure

app = FastAPI(title="formsmith example", version="0.1.0")
logger = logging.getLogger("formsmith.api")

SESSION_COOKIE = "formsmith_session"
_DEFAULT_MAX_SESSIONS = 1024
REQUEST_ID_HEADER = "X-Formsmith-Request-Id"

_PAGE_FORMAT = (
    '<!DOCTYPE html><html lang="en"><head><meta charset="utf-8"><title>{title}</title>'
    '<link rel="stylesheet" href="https://maxcdn.bootstrapcdn.com/bootstrap/3.3.6/css/bootstrap.min.css">'
    '</head><body><div class="container"><h1>{title}</h1>'
    '<p class="lead">Basic example of a Bootstrap form</p>{form}</div></body></html>'
)

_sessions_lock = threading.Lock()
_sessions: OrderedDict[str, InMemorySessionStore] = OrderedDict()


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Ensure every response has a request id header."""

    request_id = uuid.uuid4().hex
    request.state.request_id = request_id
    try:
        response = await call_next(request)
    except Exception:  # noqa: BLE001
        logger.exception("unhandled error for request %s", request_id)
        _log_event(
            logging.ERROR,
            "error",
            request_id,
            error_code="INTERNAL_ERROR",
            status_code=500,
            path=request.url.path,
        )
        response = _error_response(
            status_code=500,
            error_code="INTERNAL_ERROR",
            message="internal server error",
            request_id=request_id,
        )
    response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    """Liveness endpoint."""

    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
async def show_form(request: Request) -> HTMLResponse:
    """Render the example form bound to the caller's session."""

    request_id = _request_id_from_request(request)
    session_id, session = _session_for(request)
    _log_event(logging.INFO, "start", request_id, path="/")

    form = build_example_form(_template_registry()).with_session(session)
    page = merge(_PAGE_FORMAT, {"title": "formsmith", "form": form.render()})

    response = HTMLResponse(content=page, headers={REQUEST_ID_HEADER: request_id})
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    _log_event(logging.INFO, "done", request_id, path="/", status_code=200)
    return response


@app.post("/processor", response_model=None)
async def process_form(request: Request) -> JSONResponse:
    """Validate a submission of the example form."""

    request_id = _request_id_from_request(request)
    session = _existing_session(request)
    submitted = await request.form()
    data: dict[str, Any] = {key: value for key, value in submitted.items() if isinstance(value, str)}
    _log_event(logging.INFO, "start", request_id, path="/processor", fields=sorted(data))

    form = build_example_form(_template_registry()).with_session(session, render_token=False)
    try:
        form.validate(data)
    except RequestForgeryError as exc:
        _log_event(logging.WARNING, "forgery_rejected", request_id, reason=exc.reason)
        return _error_response(
            status_code=403,
            error_code="REQUEST_FORGERY",
            message=str(exc),
            request_id=request_id,
        )
    except ValidationFailure as exc:
        report = ValidationReport.from_failure(exc)
        _log_event(
            logging.INFO,
            "validation_failed",
            request_id,
            field=report.field,
            rule=report.rule,
        )
        return _error_response(
            status_code=422,
            error_code="VALIDATION_FAILED",
            message=str(exc),
            request_id=request_id,
            detail={"field": report.field, "rule": report.rule},
        )

    _log_event(logging.INFO, "done", request_id, path="/processor", status_code=200)
    return JSONResponse(
        status_code=200,
        headers={REQUEST_ID_HEADER: request_id},
        content={"status": "ok", **ValidationReport.success().model_dump(mode="json")},
    )


@lru_cache(maxsize=1)
def _template_registry() -> TemplateRegistry:
    raw_path = os.getenv("FORMSMITH_TEMPLATES")
    try:
        return load_registry(Path(raw_path) if raw_path else None)
    except ConfigurationError:
        logger.error("failed to load templates from %s", raw_path or "bundled defaults")
        raise


def _session_for(request: Request) -> tuple[str, InMemorySessionStore]:
    """Return the caller's session, creating one and evicting the oldest past the cap."""

    session_id = request.cookies.get(SESSION_COOKIE)
    with _sessions_lock:
        if session_id and session_id in _sessions:
            _sessions.move_to_end(session_id)
            return session_id, _sessions[session_id]
        session_id = secrets.token_urlsafe(24)
        store = InMemorySessionStore()
        _sessions[session_id] = store
        while len(_sessions) > _max_sessions():
            _sessions.popitem(last=False)
        return session_id, store


def _existing_session(request: Request) -> InMemorySessionStore:
    """Return the caller's session without creating one.

    Unknown callers get a detached empty store, so verification reports the
    missing session token and nothing is added to the session map.
    """

    session_id = request.cookies.get(SESSION_COOKIE)
    with _sessions_lock:
        if session_id and session_id in _sessions:
            _sessions.move_to_end(session_id)
            return _sessions[session_id]
    return InMemorySessionStore()


def _max_sessions() -> int:
    raw = os.getenv("FORMSMITH_MAX_SESSIONS")
    if raw is None:
        return _DEFAULT_MAX_SESSIONS
    try:
        parsed = int(raw)
    except ValueError:
        return _DEFAULT_MAX_SESSIONS
    return parsed if parsed > 0 else _DEFAULT_MAX_SESSIONS


def _request_id_from_request(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    return uuid.uuid4().hex


def _dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def _log_event(level: int, event: str, request_id: str, **fields: Any) -> None:
    payload = {
        "event": event,
        "request_id": request_id,
        **fields,
    }
    logger.log(level, _dump_json(payload))


def _error_response(
    *,
    status_code: int,
    error_code: str,
    message: str,
    request_id: str,
    detail: dict[str, Any] | None = None,
) -> JSONResponse:
    payload_detail = dict(detail or {})
    payload_detail["request_id"] = request_id

    return JSONResponse(
        status_code=status_code,
        headers={REQUEST_ID_HEADER: request_id},
        content={
            "error_code": error_code,
            "message": message,
            "detail": payload_detail,
        },
    )
