import importlib
import logging
import pkgutil
from typing import Any, Mapping, Optional

from flask import Blueprint, Flask

from config.settings import load_settings
from middleware.auth import LOGIN_HANDLER_EXTENSION, auth_bp
from repositories.member_repository import MemberRepository
from services.auth_service import Authenticator, MemberDirectoryAuthenticator, ensure_default_members
from services.login_handler import LoginHandler
from services.session_service import FlaskSessionStore, IdentityStore, SessionIdentityStore


def create_app(
    config: Optional[Mapping[str, Any]] = None,
    *,
    authenticator: Optional[Authenticator] = None,
    identity_store: Optional[IdentityStore] = None,
) -> Flask:
    """Flask application factory.

    ``config`` overrides settings read from the environment. Collaborators
    left as None get the defaults: a member directory seeded from ``MEMBERS``
    and a Flask-session identity store.
    """
    app = Flask(__name__)
    app.config.from_mapping(load_settings())
    if config:
        app.config.update(config)
    app.secret_key = app.config["SECRET_KEY"]

    if not app.debug:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    """Registration of error handlers."""
    from middleware.handlers import register_error_handlers
    register_error_handlers(app)

    if authenticator is None:
        repository = MemberRepository()
        ensure_default_members(repository, app.config.get("MEMBERS"), app.config.get("MEMBERS_FILE", ""))
        authenticator = MemberDirectoryAuthenticator(repository, locale=app.config.get("LOCALE"))
        if not repository.count():
            app.logger.warning("No members configured; every login attempt will be rejected.")

    login_link = app.config["LOGIN_LINK"].rstrip("/") or "/"
    app.extensions[LOGIN_HANDLER_EXTENSION] = LoginHandler(
        login_link,
        authenticator,
        identity_store or SessionIdentityStore(),
        FlaskSessionStore(),
        config=app.config,
    )

    # Auto-register all blueprints defined in routes/*.py
    from routes import __path__ as routes_path

    for _, module_name, _ in pkgutil.iter_modules(routes_path):
        module = importlib.import_module(f"routes.{module_name}")
        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if isinstance(obj, Blueprint) and obj.name not in app.blueprints:
                if obj is auth_bp:
                    # The login form lives at LOGIN_LINK, whatever it is configured to.
                    app.register_blueprint(obj, url_prefix=login_link)
                else:
                    app.register_blueprint(obj)

    return app


if __name__ == "__main__":
    from os import getenv

    app = create_app()
    app.run(
        host="0.0.0.0",
        port=int(getenv("PORT", 5000)),
        debug=getenv("FLASK_DEBUG", "0") == "1",
        use_reloader=False,
    )
