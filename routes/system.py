"""System endpoints (health check)."""

from flask import Blueprint, current_app, jsonify

from middleware.auth import LOGIN_HANDLER_EXTENSION

system_bp = Blueprint("system", __name__)


@system_bp.route("/health", methods=["GET"])
def health_check():
    """Simple health-check route without authentication."""
    handler = current_app.extensions.get(LOGIN_HANDLER_EXTENSION)
    return jsonify({
        "status": "ok",
        "login_handler": "ok" if handler is not None else "missing",
        "login_link": handler.link() if handler is not None else None,
    }), 200
