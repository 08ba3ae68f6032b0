"""Routes for the user blueprint."""

from flask import g, jsonify
from flask_wtf.csrf import generate_csrf

from circlefeed.auth.decorators import login_required
from circlefeed.routing import Route, register
from circlefeed.utils import get_concepts

from . import bp


def get_session_user():
    """The logged in user, if any, and a CSRF token for mutating requests."""
    user = dict(g.user) if g.get("user") else None
    if user is not None:
        user.pop("password", None)
    return jsonify(user=user, csrf_token=generate_csrf())


@login_required
def get_users():
    return jsonify(get_concepts().users.get_users())


@login_required
def get_user(username):
    user = get_concepts().users.get_user_by_username(username)
    user.pop("password", None)
    return jsonify(user)


ROUTES = [
    Route("GET", "/session", get_session_user),
    Route("GET", "/users", get_users),
    Route("GET", "/users/<string:username>", get_user),
]

register(bp, ROUTES)
