import uuid
from datetime import date

from sqlmodel import select

from showcase.core.errors import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from showcase.models.artist import ArtistProfile
from showcase.schemas.artist import ArtistShowCreate
from showcase.schemas.user import AccountDelete, SignupRequest

SHOW = dict(
    artist_name="Amy Live",
    location="Hanoi",
    bio="Jazz singer",
    start_date=date(2020, 5, 1),
    shows_performed=12,
    genres=["jazz", "soul"],
)


def _user(user_service, session):
    return user_service.signup(
        session,
        SignupRequest(username="amy", email="amy@x.com", password="pw123456"),
    ).value


def test_become_artist_from_user(user_service, artist_service, session):
    user = _user(user_service, session)
    result = artist_service.become_artist(session, user.id)
    assert result.ok
    assert result.value.role == "artist"


def test_become_artist_twice_is_rejected(user_service, artist_service, session):
    user = _user(user_service, session)
    artist_service.become_artist(session, user.id)

    result = artist_service.become_artist(session, user.id)

    assert isinstance(result.error, InvalidStateError)
    assert session.get(type(user), user.id).role == "artist"


def test_unknown_user(artist_service, session):
    assert isinstance(
        artist_service.become_artist(session, uuid.uuid4()).error, NotFoundError
    )
    assert isinstance(
        artist_service.become_user(session, uuid.uuid4()).error, NotFoundError
    )


def test_become_user_from_any_state(user_service, artist_service, session):
    user = _user(user_service, session)
    assert artist_service.become_user(session, user.id).value.role == "user"
    artist_service.become_artist(session, user.id)
    assert artist_service.become_user(session, user.id).value.role == "user"


def test_create_show_requires_artist_role(user_service, artist_service, session):
    user = _user(user_service, session)
    result = artist_service.create_show(session, user.id, ArtistShowCreate(**SHOW))
    assert isinstance(result.error, ForbiddenError)
    assert session.exec(select(ArtistProfile)).all() == []


def test_create_show_requires_every_field(user_service, artist_service, session):
    user = _user(user_service, session)
    artist_service.become_artist(session, user.id)

    for field in SHOW:
        payload = {k: v for k, v in SHOW.items() if k != field}
        result = artist_service.create_show(session, user.id, ArtistShowCreate(**payload))
        assert isinstance(result.error, ValidationError), field


def test_create_show_allows_zero_shows(user_service, artist_service, session):
    user = _user(user_service, session)
    artist_service.become_artist(session, user.id)
    result = artist_service.create_show(
        session, user.id, ArtistShowCreate(**{**SHOW, "shows_performed": 0})
    )
    assert result.ok


def test_create_show_links_exactly_one_profile(user_service, artist_service, session):
    user = _user(user_service, session)
    artist_service.become_artist(session, user.id)

    result = artist_service.create_show(session, user.id, ArtistShowCreate(**SHOW))

    assert result.ok
    profiles = session.exec(select(ArtistProfile)).all()
    assert len(profiles) == 1
    profile = profiles[0]
    assert result.value.artist_profile_id == profile.id
    assert profile.owner_user_id == user.id
    assert profile.genres == ["jazz", "soul"]
    assert profile.start_date == date(2020, 5, 1)

    again = artist_service.create_show(session, user.id, ArtistShowCreate(**SHOW))
    assert isinstance(again.error, InvalidStateError)
    assert len(session.exec(select(ArtistProfile)).all()) == 1


def test_role_scenario_keeps_profile_link(user_service, artist_service, session):
    user = _user(user_service, session)

    assert artist_service.become_artist(session, user.id).value.role == "artist"
    linked = artist_service.create_show(session, user.id, ArtistShowCreate(**SHOW)).value
    profile_id = linked.artist_profile_id
    assert profile_id is not None

    reverted = artist_service.become_user(session, user.id).value
    assert reverted.role == "user"
    assert reverted.artist_profile_id == profile_id


def test_profile_survives_account_deletion(user_service, artist_service, session):
    user = _user(user_service, session)
    artist_service.become_artist(session, user.id)
    profile_id = artist_service.create_show(
        session, user.id, ArtistShowCreate(**SHOW)
    ).value.artist_profile_id

    user_service.delete_account(session, user.id, AccountDelete(password="pw123456"))

    assert artist_service.get_profile(session, profile_id).ok


def test_get_profile_not_found(artist_service, session):
    assert isinstance(
        artist_service.get_profile(session, uuid.uuid4()).error, NotFoundError
    )
