# showcase/schemas/artist.py
import uuid
from datetime import date, datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class ArtistShowCreate(SQLModel):
    """
    Payload for creating the artist profile ("create show").

    Fields are optional here; the service reports missing ones as a
    validation failure. shows_performed cannot be negative.
    """

    model_config = ConfigDict(extra="forbid")

    artist_name: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=100)
    bio: str | None = None
    start_date: date | None = None
    shows_performed: int | None = Field(default=None, ge=0)
    genres: list[str] | None = None

    @field_validator("artist_name", "location", "bio")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return v.strip() or None

    @field_validator("genres")
    @classmethod
    def clean_genres(cls, v: list[str] | None) -> list[str] | None:
        # keep order, drop blanks
        if v is None:
            return v
        return [g.strip() for g in v if g and g.strip()]


class ArtistProfileRead(SQLModel):
    id: uuid.UUID
    owner_user_id: uuid.UUID
    artist_name: str
    location: str
    bio: str
    start_date: date
    shows_performed: int
    genres: list[str]
    created_at: datetime
