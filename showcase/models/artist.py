# showcase/models/artist.py
import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field


class ArtistProfile(SQLModel, table=True):
    """
    Public performer profile linked 1:1 to a User.

    owner_user_id is a plain back-reference (no FK): deleting the account
    leaves the profile in place.
    """

    __tablename__ = "artist_profiles"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    owner_user_id: uuid.UUID = Field(
        index=True,
        description="User who created this profile",
    )

    artist_name: str = Field(
        max_length=100,
        description="Stage / display name",
    )

    location: str = Field(max_length=100)

    bio: str

    start_date: date = Field(
        description="When the artist started performing",
    )

    shows_performed: int = Field(
        default=0,
        ge=0,
        description="Number of shows performed so far",
    )

    # Ordered list of genre names
    genres: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
