"""Example login form served by the HTTP harness."""

from __future__ import annotations

from formsmith.forms.builder import FormBuilder
from formsmith.templates.registry import TemplateRegistry

STATUS_OPTIONS = [
    {"value": "", "label": "Please select..."},
    {"value": "active", "label": "Active"},
    {"value": "pending", "label": "Pending"},
    {"label": "Archived"},
    {
        "label": "Alternative",
        "disabled": True,
        "group": [
            {"value": "on", "label": "On"},
            {"label": "Off"},
        ],
    },
]


def is_not_disposable(value: object) -> bool:
    return "@example.org" not in str(value)


def build_example_form(registry: TemplateRegistry | None = None) -> FormBuilder:
    form = FormBuilder(
        "login-form",
        "post",
        "/processor",
        registry=registry,
        attributes={"class": "form", "data": {"foo": "bar"}},
    )
    return (
        form.with_input(
            "email",
            "email",
            "Email",
            "j.smith@example.com",
            {
                "attributes": {
                    "class": "required",
                    "data": {"format": "email", "hint": "Please use a valid email address"},
                    "aria": {"required": "true"},
                },
                "rules": [
                    "Required",
                    "MinLength(5)",
                    "MaxLength(25)",
                    "Email",
                    ("IsDisposable", is_not_disposable),
                ],
            },
        )
        .with_input("text", "name", "Name", "John Smith")
        .with_input(
            "password",
            "password",
            "Password",
            params={"rules": ["Integer", "Numeric", "Between(5,25)"]},
        )
        .with_input("checkbox", "remember_me", "Remember Me")
        .with_textarea("message", "Message", "This is a message.")
        .with_select(
            "status", "Status", "active", STATUS_OPTIONS, {"attributes": {"class": "required"}}
        )
        .with_input(
            "text",
            "location",
            "Location",
            params={
                "attributes": {"class": "required"},
                "list": ["London", "New York", "Paris"],
            },
        )
        .with_button("submit", "submit", "Save", params={"attributes": {"class": "btn-success"}})
    )
