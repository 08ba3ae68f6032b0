from flask import Blueprint, current_app, jsonify
from flask_wtf.csrf import CSRFError

from .errors import AppError, ErrorFamily
from .utils import get_concepts

error_handlers_bp = Blueprint("error_handlers", __name__)


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Render a concept error, resolving ids in its payload to names."""
    message = get_concepts().responses.error_message(error)
    if error.family is ErrorFamily.NOT_FOUND:
        current_app.logger.info(f"Not Found: {error.kind.value}: {message}")
    else:
        current_app.logger.warning(f"{error.kind.value}: {message}")
    return jsonify(msg=message, kind=error.kind.value), error.status_code


@error_handlers_bp.app_errorhandler(404)
def handle_404(e):
    """Handles generic 404 errors for routes that don't exist."""
    return jsonify(msg="Not found."), 404


@error_handlers_bp.app_errorhandler(405)
def handle_405(e):
    return jsonify(msg="Method not allowed."), 405


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    original = getattr(e, "original_exception", None) or e
    current_app.logger.error(f"Internal Server Error: {original}")
    return jsonify(msg="An unexpected error occurred."), 500


@error_handlers_bp.app_errorhandler(CSRFError)
def handle_csrf_error(e):
    """
    Handles CSRF errors, which usually indicate a session timeout or a client
    that did not send the token from /api/session.
    """
    current_app.logger.warning(f"CSRF Error: {e.description}")
    return jsonify(msg="Your session may have expired. Please try again."), 400
