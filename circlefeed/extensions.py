"""Flask extensions for the application."""

from flask_wtf.csrf import CSRFProtect

csrf = CSRFProtect()
