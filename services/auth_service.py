# services/auth_service.py
"""Authenticator contract and the default member-directory authenticator.

The login handler only depends on :class:`Authenticator`. The directory
implementation below exists so the application runs out of the box: it looks
members up in a :class:`MemberRepository` seeded from configuration and checks
Werkzeug password hashes.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping, Optional, Protocol, Union

from pydantic import ValidationError as ModelValidationError
from werkzeug.security import check_password_hash, generate_password_hash

from domain.models.login import EMAIL_FIELD, PASSWORD_FIELD
from domain.models.member import AuthenticationResult, Member
from middleware.errors import ConfigurationError
from repositories.member_repository import MemberRepository
from utils.translation import translate

logger = logging.getLogger(__name__)


def wrong_credentials_message(locale: Optional[str] = None) -> str:
    return translate(
        "Member.ERRORWRONGCRED",
        "The provided details don't seem to be correct. Please try again.",
        locale=locale,
    )


class Authenticator(Protocol):
    def authenticate(self, credentials: Mapping[str, Any]) -> AuthenticationResult:
        """Return the matching member, or a failure message."""


class MemberDirectoryAuthenticator:
    """Authenticate ``Email``/``Password`` form data against a member repository."""

    def __init__(self, repository: MemberRepository, locale: Optional[str] = None) -> None:
        self.repository = repository
        self.locale = locale

    def authenticate(self, credentials: Mapping[str, Any]) -> AuthenticationResult:
        email = (credentials.get(EMAIL_FIELD) or "").strip()
        password = credentials.get(PASSWORD_FIELD) or ""

        member = self.repository.get_by_email(email) if email else None
        if not member or not member.password_hash:
            return AuthenticationResult.failure(wrong_credentials_message(self.locale))
        if not check_password_hash(member.password_hash, password):
            return AuthenticationResult.failure(wrong_credentials_message(self.locale))
        return AuthenticationResult.success(member)


def _load_member_seed(raw: Union[str, Iterable[Mapping[str, Any]], None], path: str = "") -> list[dict]:
    """
    Returns member seed entries from, in order of precedence:
      1) ``raw`` as a list of dicts (programmatic config)
      2) ``raw`` as a JSON array string (MEMBERS env)
      3) ``path`` pointing at a JSON file with the same schema (MEMBERS_FILE env)
    """
    if raw and not isinstance(raw, str):
        return _seed_entries(raw)

    text = raw or ""
    if not text and path:
        try:
            with open(path, "r", encoding="utf-8") as fh:
                text = fh.read()
        except OSError as exc:
            raise ConfigurationError(
                "Could not read members file", details={"path": path, "reason": str(exc)}
            ) from exc

    if not text.strip():
        return []

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError("Failed to parse members JSON", details={"reason": str(exc)}) from exc
    if not isinstance(data, list):
        raise ConfigurationError("Members seed must be a JSON array")
    return _seed_entries(data)


def _seed_entries(items: Iterable[Any]) -> list[dict]:
    entries = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ConfigurationError(
                f"Invalid member seed entry #{index + 1}",
                details={"reason": f"expected an object, got {type(item).__name__}"},
            )
        entries.append(dict(item))
    return entries


def _member_from_seed(index: int, entry: Mapping[str, Any]) -> Member:
    entry = dict(entry)
    password = entry.pop("password", None)
    if password is not None:
        entry["password_hash"] = generate_password_hash(password)
    email = entry.get("email") or entry.get("Email")
    entry.setdefault("id", str(email).strip().lower() if email else str(index + 1))
    try:
        return Member.model_validate(entry)
    except ModelValidationError as exc:
        raise ConfigurationError(
            f"Invalid member seed entry #{index + 1}",
            details={"errors": exc.errors(include_url=False, include_context=False, include_input=False)},
        ) from exc


def ensure_default_members(
    repository: MemberRepository,
    raw: Union[str, Iterable[Mapping[str, Any]], None] = None,
    path: str = "",
) -> int:
    """Idempotently seed the directory. Returns the number of members added."""
    added = 0
    for index, entry in enumerate(_load_member_seed(raw, path)):
        member = _member_from_seed(index, entry)
        if repository.get_by_email(str(member.email)) or repository.get_by_id(member.id):
            continue
        repository.create(member)
        added += 1
    logger.info("Member directory seeded with %d member(s)", added)
    return added
