"""Transient value objects exchanged during a single login request."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# Form field names submitted by the login form.
EMAIL_FIELD = "Email"
PASSWORD_FIELD = "Password"
REMEMBER_FIELD = "Remember"
BACK_URL_FIELD = "BackURL"

# Form values that leave a checkbox unticked.
_UNCHECKED = (None, False, 0, "", "0")


def is_checked(value: Any) -> bool:
    """Return True for a ticked checkbox value; ``"0"`` and empty values count as unticked."""
    if isinstance(value, str):
        value = value.strip()
    return value not in _UNCHECKED


class LoginAttempt(BaseModel):
    """One submission of the login form."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    credentials: Dict[str, Any] = Field(default_factory=dict)
    back_url: Optional[str] = None
    request_context: Any = None

    @property
    def remember(self) -> bool:
        return is_checked(self.credentials.get(REMEMBER_FIELD))


class SessionEcho(BaseModel):
    """Non-secret form values kept across a failed login so the form can be re-filled.

    Extra fields are forbidden, so a password can never be smuggled in.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    email: Optional[str] = None
    remember: bool = False

    @classmethod
    def from_credentials(cls, credentials: Mapping[str, Any]) -> "SessionEcho":
        return cls(
            email=str(credentials[EMAIL_FIELD]),
            remember=is_checked(credentials.get(REMEMBER_FIELD)),
        )


class RedirectKind(StrEnum):
    CHANGE_PASSWORD = "change_password"
    BACK_URL = "back_url"
    DEFAULT_DESTINATION = "default_destination"
    REFERER_BACK = "referer_back"


class RedirectDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: RedirectKind
    url: str


class MessageType(StrEnum):
    GOOD = "good"
    BAD = "bad"
    WARNING = "warning"
    INFO = "info"


# Flask flash categories used by the templates.
_FLASH_CATEGORIES = {
    MessageType.GOOD: "success",
    MessageType.BAD: "danger",
    MessageType.WARNING: "warning",
    MessageType.INFO: "info",
}


class SessionMessage(BaseModel):
    """A one-shot message shown on the next page render."""

    model_config = ConfigDict(frozen=True)

    text: str
    type: MessageType = MessageType.GOOD

    @property
    def category(self) -> str:
        return _FLASH_CATEGORIES[self.type]


class LoginOutcome(BaseModel):
    success: bool
    redirect: Optional[RedirectDecision] = None
    redirect_to_form: bool = False
    messages: List[SessionMessage] = Field(default_factory=list)

    @property
    def message(self) -> Optional[str]:
        return self.messages[0].text if self.messages else None
