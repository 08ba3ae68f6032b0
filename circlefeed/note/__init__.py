"""The note blueprint."""

from flask import Blueprint

bp = Blueprint("note", __name__, url_prefix="/api/notes")

from . import routes  # noqa: E402

__all__ = ["routes"]
