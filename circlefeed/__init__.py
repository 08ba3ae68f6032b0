"""Initialize the Flask app, its extensions and the concept services."""

import json
import logging
import os

import firebase_admin
from firebase_admin import credentials, firestore
from flask import Flask, current_app, g, session
from werkzeug.middleware.proxy_fix import ProxyFix

from .concepts import build_concepts
from .extensions import csrf
from .utils import EXTENSION_KEY, get_concepts


def _load_credentials(app):
    """Find Firebase credentials: env JSON, then a local file, then ADC."""
    cred = None
    project_id = None

    # First, try to load from environment variable (for production)
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            cred_info = json.loads(cred_json)
            project_id = cred_info.get("project_id")
            cred = credentials.Certificate(cred_info)
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    # If env var fails or is not present, try loading from file (for local dev)
    if not cred:
        cred_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
        )
        if os.path.exists(cred_path):
            try:
                with open(cred_path, "r") as f:
                    cred_info = json.load(f)
                project_id = cred_info.get("project_id")
                cred = credentials.Certificate(cred_path)
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error loading credentials from file: {e}")

    # If both methods fail, fallback to default credentials
    if not cred:
        try:
            cred = credentials.ApplicationDefault()
            project_id = os.environ.get("FIREBASE_PROJECT_ID")
        except Exception as e:
            app.logger.error(
                f"Could not find any valid credentials (env, file, or default): {e}"
            )

    return cred, project_id


def _init_firebase(app):
    cred, project_id = _load_credentials(app)
    if cred and not firebase_admin._apps:
        try:
            options = {"projectId": project_id} if project_id else None
            firebase_admin.initialize_app(cred, options)
        except ValueError:
            # This can happen if the app is already initialized, which is fine.
            app.logger.info("Firebase app already initialized.")


def create_app(test_config=None, db=None):
    """Create and configure an instance of the Flask application.

    ``db`` is the Firestore client the services use; when omitted one is
    created from the initialized Firebase app.
    """
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        LOG_LEVEL=os.environ.get("LOG_LEVEL") or "INFO",
        WTF_CSRF_HEADERS=["X-CSRFToken", "X-CSRF-Token"],
    )

    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(logging.getLevelName(app.config["LOG_LEVEL"].upper()))

    # Initialize Firebase Admin SDK only if not in testing mode
    if not app.config.get("TESTING"):
        _init_firebase(app)

    if db is None:
        db = firestore.client()
    app.extensions[EXTENSION_KEY] = build_concepts(db)

    # Initialize extensions
    csrf.init_app(app)

    # Register blueprints
    from . import user as user_bp

    app.register_blueprint(user_bp.bp)

    from . import group as group_bp

    app.register_blueprint(group_bp.bp)

    from . import post as post_bp

    app.register_blueprint(post_bp.bp)

    from . import note as note_bp

    app.register_blueprint(note_bp.bp)

    from . import link as link_bp

    app.register_blueprint(link_bp.bp)

    from . import friend as friend_bp

    app.register_blueprint(friend_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.before_request
    def load_logged_in_user():
        """If a user_id is in the session, load the user and store it in g."""
        user_id = session.get("user_id")
        g.user = None
        if user_id is None:
            return

        g.user = get_concepts().users.get_user_by_id(user_id)
        if g.user is None:
            # User ID in session but no user in DB. Clear the session.
            session.clear()
            current_app.logger.warning(
                f"User {user_id} in session but not found in Firestore."
            )

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
