# showcase/routers/artists.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from showcase.core.auth import require_auth
from showcase.core.errors import unwrap
from showcase.database import get_session
from showcase.models.user import User
from showcase.repositories.artist_repo import ArtistRepository
from showcase.repositories.user_repo import UserRepository
from showcase.schemas.artist import ArtistProfileRead, ArtistShowCreate
from showcase.schemas.user import UserRead
from showcase.services.artist_service import ArtistService

router = APIRouter(prefix="/artists", tags=["Artists"])

service = ArtistService(UserRepository(), ArtistRepository())


# -------- Role transitions --------


@router.post("/become-artist", response_model=UserRead)
def become_artist(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Switch the authenticated user to role "artist".

    Rejected with 409 if the user already is an artist.
    """
    return unwrap(service.become_artist(session, current_user.id))


@router.post("/become-user", response_model=UserRead)
def become_user(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Switch the authenticated user back to role "user".

    Any existing artist profile stays linked.
    """
    return unwrap(service.become_user(session, current_user.id))


@router.post("/show", response_model=UserRead)
def create_show(
    payload: ArtistShowCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Create the artist profile for the authenticated artist and link it.

    Auth:
      - Requires role "artist" (403 otherwise).
    """
    return unwrap(service.create_show(session, current_user.id, payload))


# -------- Public --------


@router.get("/profiles/{profile_id}", response_model=ArtistProfileRead)
def get_profile(
    profile_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """Public read of an artist profile."""
    return unwrap(service.get_profile(session, profile_id))
