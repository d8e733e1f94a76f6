"""Form assembly, rendering and submission validation."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from formsmith.elements.attributes import AttributeMap, normalize_attributes, serialize_attributes
from formsmith.elements.base import Field
from formsmith.elements.button import Button
from formsmith.elements.input import Input
from formsmith.elements.select import OptionSpec, Select
from formsmith.elements.textarea import Textarea
from formsmith.forms.csrf import TOKEN_FIELD, issue_token, verify_token
from formsmith.forms.session import SessionStore
from formsmith.templates.merger import merge, strip_attributes_token
from formsmith.templates.registry import TemplateRegistry
from formsmith.utils.errors import ConfigurationError, RequestForgeryError, ValidationFailure
from formsmith.utils.text import slug

logger = logging.getLogger("formsmith.forms")

FORM_METHODS = ("get", "post")
_OPEN_FORMAT = '<form id="{id}" method="{method}" action="{action}" {attributes}>'


class FormBuilder:
    """Collect fields for one form and drive rendering and validation.

    The builder is owned by a single request: ``with_*`` methods add to it in
    place and return it for chaining.
    """

    def __init__(
        self,
        form_id: str,
        method: str,
        action: str,
        registry: TemplateRegistry | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        if method not in FORM_METHODS:
            raise ConfigurationError(f'Unsupported form method "{method}" provided')

        self.id = slug(form_id)
        self.method = method
        self.action = action
        self.registry = registry
        self.attributes: AttributeMap = normalize_attributes(attributes)
        self.session: SessionStore | None = None
        self._elements: dict[str, Field] = {}

    def __call__(self) -> str:
        return self.render()

    @property
    def elements(self) -> list[Field]:
        return list(self._elements.values())

    @property
    def is_forgery_protected(self) -> bool:
        return self.session is not None and self.method == "post"

    def push(self, field: Field) -> FormBuilder:
        field.assign_to(self.id)
        self._elements[field.name] = field
        return self

    def with_input(
        self,
        type: str,
        name: str,
        label: str | None = None,
        value: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> FormBuilder:
        return self.push(Input(type, name, label, value, params))

    def with_textarea(
        self,
        name: str,
        label: str | None = None,
        value: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> FormBuilder:
        return self.push(Textarea(name, label, value, params))

    def with_select(
        self,
        name: str,
        label: str | None = None,
        value: Any = None,
        options: Sequence[OptionSpec] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> FormBuilder:
        return self.push(Select(name, label, value, options, params))

    def with_button(
        self,
        type: str,
        name: str,
        label: str | None = None,
        value: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> FormBuilder:
        return self.push(Button(type, name, label, value, params))

    def with_session(self, session: SessionStore, render_token: bool = True) -> FormBuilder:
        """Attach a session store; POST forms then carry a hidden CSRF token.

        With ``render_token=False`` the store is only used to verify
        submissions, so no token is issued into it.
        """

        self.session = session
        if render_token and self.is_forgery_protected:
            self.push(Input("hidden", TOKEN_FIELD, None, self.token()))
        return self

    def token(self) -> str:
        if self.session is None:
            raise ConfigurationError(f'Form "{self.id}" has no session store')
        return issue_token(self.session, self.id)

    def element(self, name: str) -> str:
        """Render one field by name."""

        try:
            field = self._elements[name]
        except KeyError as exc:
            raise ConfigurationError(f'No such element "{name}" in form "{self.id}"') from exc
        return field.render(self.registry)

    def open(self) -> str:
        format = _OPEN_FORMAT if self.attributes else strip_attributes_token(_OPEN_FORMAT)
        return merge(
            format,
            {
                "id": self.id,
                "method": self.method,
                "action": self.action,
                "attributes": serialize_attributes(self.attributes),
            },
        )

    def close(self) -> str:
        return "</form>"

    def render(self) -> str:
        pieces = [self.open()]
        pieces.extend(field.render(self.registry) for field in self._elements.values())
        pieces.append(self.close())
        return "".join(pieces)

    def validate(self, data: Mapping[str, Any]) -> None:
        """Validate submitted values field by field, stopping at the first failure.

        Raises:
            RequestForgeryError: The CSRF token is missing or does not match.
            ValidationFailure: A field value broke one of its rules.
        """

        if self.session is not None and self.method == "post":
            try:
                verify_token(self.session, self.id, data)
            except RequestForgeryError as exc:
                logger.warning("form %s rejected: %s", self.id, exc.reason)
                raise

        for field in self._elements.values():
            if field.validation is None:
                continue
            field.value = data.get(field.name)
            try:
                field.validation()
            except ValidationFailure as exc:
                logger.debug("form %s field %s failed %s", self.id, field.name, exc.rule_name)
                raise
