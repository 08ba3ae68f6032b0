"""Decorators for protected routes."""

from functools import wraps

from flask import g

from circlefeed.errors import ErrorKind, error


def login_required(f=None):
    """Reject the request unless a user is attached to the session.

    Usage:
    @login_required
    def protected_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if g.get("user") is None:
                raise error(ErrorKind.NOT_LOGGED_IN)
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator


def current_user_id():
    """Id of the logged in user."""
    return g.user["id"]
