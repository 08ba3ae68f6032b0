"""The link blueprint."""

from flask import Blueprint

bp = Blueprint("link", __name__, url_prefix="/api/links")

from . import routes  # noqa: E402

__all__ = ["routes"]
