# showcase/schemas/user.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

Role = Literal["user", "artist"]


def _strip_or_none(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    return v or None


class SignupRequest(SQLModel):
    """
    Payload for account creation.

    Every field is optional at the schema level so the service can answer a
    missing field with its own "All fields are required" error.
    """

    model_config = ConfigDict(extra="forbid")

    username: str | None = Field(default=None, max_length=50)
    email: EmailStr | None = None
    password: str | None = None

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str | None) -> str | None:
        return _strip_or_none(v)


class UserUpdate(SQLModel):
    """
    Username/email pair from the profile-update form.

    The router receives multipart form fields, so the service builds this
    model itself to get the same checks as signup.
    """

    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1, max_length=50)
    email: EmailStr = Field(max_length=255)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        return v.strip()


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: str | None = None
    password: str | None = None


class PasswordUpdate(SQLModel):
    """Password change: the current password plus the new one, twice."""

    model_config = ConfigDict(extra="forbid")

    old_password: str | None = None
    new_password: str | None = None
    confirm_password: str | None = None


class EmailChange(SQLModel):
    """
    Email change. current_email must match the stored email and the
    password must be correct.
    """

    model_config = ConfigDict(extra="forbid")

    current_email: str | None = None
    new_email: EmailStr | None = None
    password: str | None = None


class AccountDelete(SQLModel):
    model_config = ConfigDict(extra="forbid")

    password: str | None = None


class UserRead(SQLModel):
    """Response schema returned to clients. No password hash, no tokens."""

    id: uuid.UUID
    username: str
    email: str
    role: Role
    profile_image_url: str | None = None
    artist_profile_id: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime


class LoginRead(SQLModel):
    user: UserRead
    access_token: str
    refresh_token: str


class UserWithTokenRead(SQLModel):
    """Returned by profile updates: the fresh user plus a new access token."""

    user: UserRead
    access_token: str


class AccessTokenRead(SQLModel):
    access_token: str


class MessageRead(SQLModel):
    message: str
