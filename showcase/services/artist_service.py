# showcase/services/artist_service.py
import logging
import uuid

from sqlmodel import Session

from showcase.core.errors import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    Result,
    ValidationError,
)
from showcase.models.artist import ArtistProfile
from showcase.models.user import User
from showcase.repositories.artist_repo import ArtistRepository
from showcase.repositories.user_repo import UserRepository
from showcase.schemas.artist import ArtistShowCreate

logger = logging.getLogger(__name__)

ROLE_USER = "user"
ROLE_ARTIST = "artist"


class ArtistService:
    """
    Role transitions and artist profile creation.

    Transitions:
      - user   -> artist : become_artist (rejected if already an artist)
      - any    -> user   : become_user (always allowed, profile link kept)
      - artist           : create_show creates and links the profile once
    """

    def __init__(self, users: UserRepository, artists: ArtistRepository):
        self.users = users
        self.artists = artists

    def _load(self, session: Session, user_id: uuid.UUID) -> Result[User]:
        user = self.users.get_by_id(session, user_id)
        if user is None:
            return Result.failure(NotFoundError("User not found"))
        return Result.success(user)

    def become_artist(self, session: Session, user_id: uuid.UUID) -> Result[User]:
        loaded = self._load(session, user_id)
        if not loaded.ok:
            return loaded
        user = loaded.value

        if user.role != ROLE_USER:
            return Result.failure(InvalidStateError("User is already an artist"))

        user.role = ROLE_ARTIST
        result = self.users.update(session, user)
        if result.ok:
            logger.info("User %s became an artist", user_id)
        return result

    def become_user(self, session: Session, user_id: uuid.UUID) -> Result[User]:
        """
        Switch back to a plain user.

        artist_profile_id is left untouched so the profile can be picked up
        again later.
        """
        loaded = self._load(session, user_id)
        if not loaded.ok:
            return loaded
        user = loaded.value

        user.role = ROLE_USER
        return self.users.update(session, user)

    def create_show(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: ArtistShowCreate,
    ) -> Result[User]:
        """
        Create the artist profile and link it to the user.

        Rules:
          - every field is required (shows_performed may be 0)
          - caller must currently have role "artist"
          - a user gets at most one profile
        """
        if (
            not payload.artist_name
            or not payload.location
            or not payload.bio
            or payload.start_date is None
            or payload.shows_performed is None
            or not payload.genres
        ):
            return Result.failure(ValidationError("All fields are required"))

        loaded = self._load(session, user_id)
        if not loaded.ok:
            return loaded
        user = loaded.value

        if user.role != ROLE_ARTIST:
            return Result.failure(ForbiddenError("User is not an artist"))

        if user.artist_profile_id is not None:
            return Result.failure(InvalidStateError("Artist profile already exists"))

        profile = ArtistProfile(
            owner_user_id=user.id,
            artist_name=payload.artist_name,
            location=payload.location,
            bio=payload.bio,
            start_date=payload.start_date,
            shows_performed=payload.shows_performed,
            genres=list(payload.genres),
        )
        user = self.artists.create_and_link(session, user, profile)
        logger.info("Artist profile %s linked to user %s", user.artist_profile_id, user_id)
        return Result.success(user)

    def get_profile(
        self,
        session: Session,
        profile_id: uuid.UUID,
    ) -> Result[ArtistProfile]:
        profile = self.artists.get_by_id(session, profile_id)
        if profile is None:
            return Result.failure(NotFoundError("Artist profile not found"))
        return Result.success(profile)
