"""Explicit route tables.

Each blueprint lists its routes in a ``ROUTES`` table of ``Route`` entries
instead of decorating view functions, and ``register`` adds them to the
blueprint at import time. Path parameters use Flask's converters and reach
the handler as keyword arguments; bodies and query strings are bound by the
handler itself through a form.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, NamedTuple

from flask import Blueprint


class Route(NamedTuple):
    """One entry of a routing table."""

    method: str
    rule: str
    handler: Callable[..., Any]
    endpoint: str | None = None


def register(bp: Blueprint, routes: Iterable[Route]) -> None:
    """Register every route of ``routes`` on ``bp``."""
    for route in routes:
        endpoint = route.endpoint or route.handler.__name__
        bp.add_url_rule(
            route.rule,
            endpoint=endpoint,
            view_func=route.handler,
            methods=[route.method],
        )

