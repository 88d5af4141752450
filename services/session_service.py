# services/session_service.py
"""Session collaborators used by the login handler.

``SessionStore`` is the opaque per-request key/value store; ``IdentityStore``
binds an authenticated member to the current session. The Flask-backed
implementations delegate to :data:`flask.session` (a signed cookie), which is
per-request by construction.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from flask import session

from domain.models.member import Member

logger = logging.getLogger(__name__)

# Session key holding the id of the logged-in member.
LOGGED_IN_AS_KEY = "loggedInAs"


class SessionStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def clear(self, key: str) -> None: ...


class IdentityStore(Protocol):
    def log_in(self, member: Member, remember: bool = False, request_context: Any = None) -> None: ...

    def log_out(self, request_context: Any = None) -> None: ...


class FlaskSessionStore:
    """SessionStore over ``flask.session``; only usable inside a request."""

    def get(self, key: str, default: Any = None) -> Any:
        return session.get(key, default)

    def set(self, key: str, value: Any) -> None:
        session[key] = value

    def clear(self, key: str) -> None:
        session.pop(key, None)


class SessionIdentityStore:
    """Bind the member id to the Flask session.

    ``remember`` makes the session cookie permanent, so it outlives the
    browser session for ``PERMANENT_SESSION_LIFETIME``.
    """

    def log_in(self, member: Member, remember: bool = False, request_context: Any = None) -> None:
        session[LOGGED_IN_AS_KEY] = member.id
        session.permanent = bool(remember)
        logger.info("Member %s logged in (remember=%s)", member.id, bool(remember))

    def log_out(self, request_context: Any = None) -> None:
        member_id = session.pop(LOGGED_IN_AS_KEY, None)
        session.permanent = False
        if member_id is not None:
            logger.info("Member %s logged out", member_id)
