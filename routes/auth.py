# routes/auth.py
from flask import (
    render_template, request, redirect,
    flash, current_app
)

from domain.models.login import BACK_URL_FIELD, LoginAttempt
from middleware.auth import auth_bp, get_login_handler


def _render_login_form(handler):
    """Render the login form, pre-filled from the session echo of a failed attempt."""
    echo = handler.session_echo()
    back_url = handler.validated_back_url(request.values.get(BACK_URL_FIELD), request)
    return render_template(
        "login.html",
        action=handler.link(),
        email=echo.email if echo else "",
        remember=echo.remember if echo else False,
        back_url=back_url or "",
    )


@auth_bp.route("", methods=["GET"])
def login():
    """Render the login form and remember where the visitor came from."""
    handler = get_login_handler()
    handler.capture_referer(request.referrer, request)
    return _render_login_form(handler)


@auth_bp.route("", methods=["POST"])
def do_login():
    """Handle the login form submission."""
    handler = get_login_handler()
    attempt = LoginAttempt(
        credentials=request.form.to_dict(),
        back_url=request.values.get(BACK_URL_FIELD),
        request_context=request,
    )
    outcome = handler.attempt_login(attempt)

    for message in outcome.messages:
        flash(message.text, message.category)

    if outcome.success:
        return redirect(outcome.redirect.url)

    current_app.logger.info("Login rejected, re-rendering form")
    return _render_login_form(handler)


@auth_bp.route("/logout", methods=["POST", "GET"])
def logout():
    """Log out the current member and send them back where they came from."""
    handler = get_login_handler()
    return redirect(handler.logout(request, request.referrer))
