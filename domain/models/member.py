from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Member(BaseModel):
    """An authenticated identity produced by an authenticator."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Stable member identifier")
    email: EmailStr = Field(..., alias="Email", description="Login identifier")
    first_name: str = Field(default="", alias="FirstName")
    surname: str = Field(default="", alias="Surname")
    password_hash: Optional[str] = Field(default=None, exclude=True, repr=False)
    password_expired: bool = Field(default=False, description="Member must choose a new password")

    def is_password_expired(self) -> bool:
        return self.password_expired


class AuthenticationResult(BaseModel):
    """Outcome of ``Authenticator.authenticate``: a member or a failure message."""

    member: Optional[Member] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.member is not None

    @classmethod
    def success(cls, member: Member) -> "AuthenticationResult":
        return cls(member=member)

    @classmethod
    def failure(cls, message: Optional[str] = None) -> "AuthenticationResult":
        return cls(message=message)
