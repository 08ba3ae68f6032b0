"""Utility functions for the application."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar, cast

from flask import current_app, request
from flask_wtf import FlaskForm

from .errors import ErrorKind, error

if TYPE_CHECKING:
    from .concepts import Concepts

EXTENSION_KEY = "circlefeed"


class ApiForm(FlaskForm):
    """Base form for JSON and form-encoded API bodies.

    CSRF is checked once per request by CSRFProtect, not per form.
    """

    class Meta:
        csrf = False


F = TypeVar("F", bound=ApiForm)


def bind_form(form_cls: type[F], from_query: bool = False) -> F:
    """Bind the request body (or query string) to ``form_cls`` and validate it.

    DELETE requests carrying a query string are bound from it, since many
    clients cannot send a body with DELETE.

    Raises:
        AppError: MALFORMED_INPUT naming the fields that failed.
    """
    if from_query or (request.method == "DELETE" and request.args):
        form = form_cls(formdata=request.args)
    else:
        form = form_cls()
    if not form.validate():
        raise error(ErrorKind.MALFORMED_INPUT, fields=", ".join(sorted(form.errors)))
    return form


def request_fields() -> dict[str, Any]:
    """The request body as a plain dict, from JSON or form encoding."""
    if request.is_json:
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise error(ErrorKind.MALFORMED_INPUT, fields="body")
        return body
    return request.form.to_dict()


def get_concepts() -> Concepts:
    """Return the services built for the current application."""
    return cast("Concepts", current_app.extensions[EXTENSION_KEY])
