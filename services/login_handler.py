# services/login_handler.py
"""Login attempt orchestration and the post-login redirect decision.

A :class:`LoginHandler` forwards submitted credentials to an authenticator.
On success it binds the member through the identity store and decides where
the browser goes next; on failure it notifies ``authentication_failed``
receivers and keeps the non-secret form values in the session so the form can
be re-rendered pre-filled.

The handler keeps no per-request state of its own: everything request-scoped
arrives in the :class:`LoginAttempt` or lives in the session store.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional
from urllib.parse import urlsplit

from blinker import Namespace

from domain.models.login import (
    EMAIL_FIELD,
    LoginAttempt,
    LoginOutcome,
    MessageType,
    RedirectDecision,
    RedirectKind,
    SessionEcho,
    SessionMessage,
)
from domain.models.member import Member
from middleware.errors import BaseAppError, IdentityBindError
from services.auth_service import Authenticator, wrong_credentials_message
from services.session_service import IdentityStore, SessionStore
from utils.translation import translate
from utils.urls import add_back_url_param, anchor_site_relative, is_safe_redirect_url, join_links

logger = logging.getLogger(__name__)

_signals = Namespace()

#: Sent with ``attempt=<LoginAttempt>`` whenever the authenticator rejects a login.
authentication_failed = _signals.signal("authentication-failed")

SESSION_ECHO_EMAIL_KEY = "SessionForms.MemberLoginForm.Email"
SESSION_ECHO_REMEMBER_KEY = "SessionForms.MemberLoginForm.Remember"
LOGIN_REFERER_KEY = "Security.LoginReferer"


def _host_url(request_context: Any) -> Optional[str]:
    return getattr(request_context, "host_url", None)


class LoginHandler:
    """Handle login and logout requests for the member login form."""

    def __init__(
        self,
        link: str,
        authenticator: Authenticator,
        identity_store: IdentityStore,
        session_store: SessionStore,
        config: Optional[Mapping[str, Any]] = None,
        translator: Callable[..., str] = translate,
    ) -> None:
        self._link = link
        self.authenticator = authenticator
        self.identity_store = identity_store
        self.session_store = session_store
        self.config = config if config is not None else {}
        self.translator = translator

    def link(self, action: Optional[str] = None) -> str:
        """Return the URL of this handler, optionally joined with ``action``."""
        if action:
            return join_links(self._link, action)
        return self._link

    # ------------------------------------------------------------------
    # Login
    # ------------------------------------------------------------------

    def attempt_login(self, attempt: LoginAttempt) -> LoginOutcome:
        result = self.authenticator.authenticate(attempt.credentials)

        if not result.ok:
            return self._handle_failure(attempt, result.message)

        member = result.member
        self.perform_login(member, attempt)
        self.clear_session_echo()

        messages: List[SessionMessage] = []
        decision = self.decide_redirect(member, attempt.back_url, attempt.request_context, messages)
        self.session_store.clear(LOGIN_REFERER_KEY)
        logger.info("Member %s logged in, redirecting via %s", member.id, decision.kind.value)
        return LoginOutcome(success=True, redirect=decision, messages=messages)

    def _handle_failure(self, attempt: LoginAttempt, message: Optional[str]) -> LoginOutcome:
        logger.warning(
            "Failed login attempt for %r", attempt.credentials.get(EMAIL_FIELD, "<no identifier>")
        )
        self._notify_authentication_failed(attempt)

        if EMAIL_FIELD in attempt.credentials:
            self.write_session_echo(SessionEcho.from_credentials(attempt.credentials))

        text = message or wrong_credentials_message(self._locale)
        return LoginOutcome(
            success=False,
            redirect_to_form=True,
            messages=[SessionMessage(text=text, type=MessageType.BAD)],
        )

    def _notify_authentication_failed(self, attempt: LoginAttempt) -> None:
        # Each receiver is isolated: one failing listener must not affect the
        # request or the remaining listeners.
        for receiver in authentication_failed.receivers_for(self):
            try:
                receiver(self, attempt=attempt)
            except Exception:
                logger.exception("authentication_failed receiver %r raised", receiver)

    def perform_login(self, member: Member, attempt: LoginAttempt) -> Member:
        """Bind ``member`` to the session. Failures propagate as ``IdentityBindError``."""
        try:
            self.identity_store.log_in(member, attempt.remember, attempt.request_context)
        except BaseAppError:
            raise
        except Exception as exc:
            logger.exception("Identity store failed to log in member %s", member.id)
            raise IdentityBindError(details={"member": member.id, "reason": str(exc)}) from exc
        return member

    # ------------------------------------------------------------------
    # Redirect decision
    # ------------------------------------------------------------------

    def decide_redirect(
        self,
        member: Member,
        back_url: Optional[str] = None,
        request_context: Any = None,
        messages: Optional[List[SessionMessage]] = None,
    ) -> RedirectDecision:
        """Pick where to send ``member`` after a successful login.

        Rules, first match wins:

        1. expired password: the change-password page, carrying the back URL
        2. a back URL that passes :func:`is_safe_redirect_url`
        3. the configured ``DEFAULT_LOGIN_DEST``
        4. back to the referer captured when the form was shown, with a
           welcome message

        One-shot messages for the next page are appended to ``messages``.
        """
        if messages is None:
            messages = []

        valid_back_url = self.validated_back_url(back_url, request_context)

        if member.is_password_expired():
            messages.append(
                SessionMessage(
                    text=self._t(
                        "Member.PASSWORDEXPIRED",
                        "Your password has expired. Please choose a new one.",
                    ),
                    type=MessageType.GOOD,
                )
            )
            link = self.config.get("CHANGE_PASSWORD_URL") or join_links(self._security_root(), "changepassword")
            return RedirectDecision(
                kind=RedirectKind.CHANGE_PASSWORD,
                url=add_back_url_param(link, valid_back_url),
            )

        if valid_back_url:
            return RedirectDecision(kind=RedirectKind.BACK_URL, url=valid_back_url)

        default_dest = self.config.get("DEFAULT_LOGIN_DEST")
        if default_dest:
            return RedirectDecision(kind=RedirectKind.DEFAULT_DESTINATION, url=default_dest)

        messages.append(
            SessionMessage(
                text=self._t(
                    "Member.WELCOMEBACK",
                    "Welcome Back, {firstname}",
                    {"firstname": member.first_name},
                ),
                type=MessageType.GOOD,
            )
        )
        return RedirectDecision(
            kind=RedirectKind.REFERER_BACK,
            url=self._referer_back(None, request_context),
        )

    def validated_back_url(self, back_url: Optional[str], request_context: Any = None) -> Optional[str]:
        """Return ``back_url`` if it is safe to redirect to, else None."""
        back_url = anchor_site_relative(back_url)
        if not back_url:
            return None
        if is_safe_redirect_url(
            back_url,
            host_url=_host_url(request_context),
            allow_same_origin=bool(self.config.get("BACKURL_ALLOW_SAME_ORIGIN")),
        ):
            return back_url
        logger.debug("Ignoring unsafe back URL %r", back_url)
        return None

    # ------------------------------------------------------------------
    # Referer handling
    # ------------------------------------------------------------------

    def capture_referer(self, referer: Optional[str], request_context: Any = None) -> None:
        """Remember where the visitor came from when the login form is shown."""
        if referer and self._is_safe_referer(referer, request_context) and not self._is_own_link(referer):
            self.session_store.set(LOGIN_REFERER_KEY, referer)

    def _is_safe_referer(self, referer: Optional[str], request_context: Any) -> bool:
        # Browsers send absolute referers, so same-origin URLs are always allowed here.
        return is_safe_redirect_url(referer, host_url=_host_url(request_context), allow_same_origin=True)

    def _is_own_link(self, url: str) -> bool:
        return urlsplit(url).path.rstrip("/") == self._link.rstrip("/")

    def _referer_back(self, referer: Optional[str], request_context: Any) -> str:
        if referer and self._is_safe_referer(referer, request_context):
            return referer
        captured = self.session_store.get(LOGIN_REFERER_KEY)
        if captured and self._is_safe_referer(captured, request_context):
            return captured
        return self.link()

    # ------------------------------------------------------------------
    # Logout
    # ------------------------------------------------------------------

    def logout(self, request_context: Any = None, referer: Optional[str] = None) -> str:
        """End the session binding, then return the URL to send the browser back to."""
        self.identity_store.log_out(request_context)
        return self._referer_back(referer, request_context)

    # ------------------------------------------------------------------
    # Session echo
    # ------------------------------------------------------------------

    def write_session_echo(self, echo: SessionEcho) -> None:
        self.session_store.set(SESSION_ECHO_EMAIL_KEY, echo.email)
        self.session_store.set(SESSION_ECHO_REMEMBER_KEY, echo.remember)

    def clear_session_echo(self) -> None:
        self.session_store.clear(SESSION_ECHO_EMAIL_KEY)
        self.session_store.clear(SESSION_ECHO_REMEMBER_KEY)

    def session_echo(self) -> Optional[SessionEcho]:
        email = self.session_store.get(SESSION_ECHO_EMAIL_KEY)
        if email is None:
            return None
        return SessionEcho(email=email, remember=bool(self.session_store.get(SESSION_ECHO_REMEMBER_KEY)))

    # ------------------------------------------------------------------

    @property
    def _locale(self) -> Optional[str]:
        return self.config.get("LOCALE")

    def _t(self, key: str, template: str, params: Optional[Mapping[str, Any]] = None) -> str:
        return self.translator(key, template, params, locale=self._locale)

    def _security_root(self) -> str:
        return self._link.rstrip("/").rpartition("/")[0] or "/"
