# showcase/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Account record.

    Identity:
      - id: random UUID4, used as the JWT "sub"
      - email: stored lower-cased; unique index (case-insensitive in effect)
      - username: unique index

    Role:
      - "user" | "artist"

    artist_profile_id is set once the user has created an artist profile and
    is intentionally kept when the user switches back to role "user".
    password_hash never leaves the repository/service layer.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    username: str = Field(
        max_length=50,
        unique=True,
        index=True,
        description="Public handle",
    )

    email: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="Login email (lower-cased)",
    )

    password_hash: str = Field(
        description="bcrypt hash of the password",
    )

    role: str = Field(
        default="user",
        index=True,
        description="Application role: user | artist",
    )

    profile_image_url: str | None = Field(
        default=None,
        description="Public URL of the avatar in Supabase Storage",
    )

    artist_profile_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="artist_profiles.id",
        description="Linked artist profile, if one was ever created",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last modification timestamp (UTC)",
    )
