"""
Global Flask error handling middleware.

All exceptions (custom or unexpected) are returned as JSON payloads:
{
    "status": "error",
    "error": "ErrorClassName",
    "message": "Human readable message",
    "details": { ... optional context ... }
}
"""

from flask import jsonify
from werkzeug.exceptions import HTTPException
from middleware.errors import BaseAppError
import traceback
import os


def register_error_handlers(app):
    """Attach all JSON error handlers to a Flask app instance."""

    @app.errorhandler(BaseAppError)
    def handle_custom_error(err):
        """Handle custom, domain-specific errors."""
        app.logger.error("%s: %s", err.__class__.__name__, err.message)
        response = jsonify(err.to_dict())
        response.status_code = err.code
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(err):
        """Catch-all handler for unexpected exceptions."""
        # Plain HTTP errors (404, 405, ...) keep Werkzeug's own response.
        if isinstance(err, HTTPException):
            return err

        app.logger.exception("Unhandled error")
        details = {}
        if app.debug or os.getenv("FLASK_DEBUG") == "1":
            details["traceback"] = traceback.format_exc()

        payload = {
            "status": "error",
            "error": err.__class__.__name__,
            "message": str(err) or "Unexpected internal error",
            "details": details
        }
        return jsonify(payload), 500
