# showcase/repositories/artist_repo.py
import uuid
from datetime import datetime, timezone

from sqlmodel import Session

from showcase.models.artist import ArtistProfile
from showcase.models.user import User


class ArtistRepository:
    """
    Data access layer for ArtistProfile.

    Responsibilities:
      - Create a profile and link it to its owner in one commit
      - Lookups by id
    """

    def get_by_id(
        self, session: Session, profile_id: uuid.UUID
    ) -> ArtistProfile | None:
        return session.get(ArtistProfile, profile_id)

    def create_and_link(
        self,
        session: Session,
        user: User,
        profile: ArtistProfile,
    ) -> User:
        """
        Insert the profile and point user.artist_profile_id at it.

        Both rows are written in the same transaction, so a failure leaves
        neither an orphan profile nor a dangling reference.
        """
        session.add(profile)
        session.flush()

        user.artist_profile_id = profile.id
        user.updated_at = datetime.now(timezone.utc)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
