"""Utility for translating user-facing messages.

Messages are looked up by key in a small in-process catalog for the active
locale. When the locale or the key is unknown the caller-supplied template is
used instead, so English strings never need catalog entries. Placeholders use
``{name}`` syntax; placeholders without a matching parameter are left as
written.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

DEFAULT_LOCALE = "en_US"

# Mapping: locale -> {message key -> template}
_CATALOG: dict[str, dict[str, str]] = {
    "de_DE": {
        "Member.WELCOMEBACK": "Willkommen zurück, {firstname}",
        "Member.PASSWORDEXPIRED": "Ihr Passwort ist abgelaufen. Bitte wählen Sie ein neues.",
        "Member.ERRORWRONGCRED": (
            "Die angegebenen Daten scheinen nicht korrekt zu sein. Bitte versuchen Sie es erneut."
        ),
    },
    "fr_FR": {
        "Member.WELCOMEBACK": "Bienvenue, {firstname}",
        "Member.PASSWORDEXPIRED": "Votre mot de passe a expiré. Veuillez en choisir un nouveau.",
        "Member.ERRORWRONGCRED": (
            "Les informations fournies ne semblent pas correctes. Veuillez réessayer."
        ),
    },
}


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def translate(
    key: str,
    template: str,
    params: Optional[Mapping[str, Any]] = None,
    locale: Optional[str] = None,
) -> str:
    """Return the message for ``key`` in ``locale`` with ``params`` substituted."""

    locale = locale or DEFAULT_LOCALE
    text = _CATALOG.get(locale, {}).get(key, template)
    if not params:
        return text
    try:
        return text.format_map(_KeepMissing(params))
    except (ValueError, IndexError):
        # Malformed braces in a catalog entry; show it unformatted.
        return text
