# middleware/auth.py
from flask import Blueprint, current_app

from services.login_handler import LoginHandler

# Re-mounted at LOGIN_LINK by create_app; the form posts to the prefix itself
# and logout lives at <LOGIN_LINK>/logout, matching LoginHandler.link("logout").
auth_bp = Blueprint("auth", __name__, url_prefix="/Security/login")

LOGIN_HANDLER_EXTENSION = "login_handler"


def get_login_handler() -> LoginHandler:
    """Return the LoginHandler wired up by ``create_app``."""
    return current_app.extensions[LOGIN_HANDLER_EXTENSION]
