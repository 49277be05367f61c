from showcase.core.errors import AuthenticationError, ValidationError
from showcase.schemas.user import PasswordUpdate, SignupRequest
from showcase.services.session_service import REFRESH_COOKIE_MAX_AGE


def _signup(user_service, session):
    return user_service.signup(
        session,
        SignupRequest(username="amy", email="amy@x.com", password="pw123456"),
    ).value


def test_login_issues_tokens_and_cookie(user_service, session_service, session):
    user = _signup(user_service, session)

    result = session_service.login(session, "amy@x.com", "pw123456")

    assert result.ok
    login = result.value
    assert login.user.id == user.id
    assert login.access_token and login.refresh_token
    assert login.access_token != login.refresh_token

    cookie = login.cookie
    assert cookie.name == "refreshToken"
    assert cookie.value == login.refresh_token
    assert cookie.httponly is True
    assert cookie.samesite == "strict"
    assert cookie.max_age == REFRESH_COOKIE_MAX_AGE == 7 * 24 * 60 * 60
    assert cookie.secure is False


def test_login_email_is_case_insensitive(user_service, session_service, session):
    _signup(user_service, session)
    assert session_service.login(session, "  AMY@X.COM ", "pw123456").ok


def test_login_failures_share_one_message(user_service, session_service, session):
    _signup(user_service, session)

    wrong_password = session_service.login(session, "amy@x.com", "wrong")
    unknown_email = session_service.login(session, "nobody@x.com", "pw123456")

    assert isinstance(wrong_password.error, AuthenticationError)
    assert wrong_password.error == unknown_email.error
    assert wrong_password.error.message == "Invalid email or password"


def test_login_requires_fields(session_service, session):
    assert isinstance(session_service.login(session, "", "x").error, ValidationError)
    assert isinstance(session_service.login(session, "a@x.com", None).error, ValidationError)


def test_password_change_round_trip(user_service, session_service, session):
    user = _signup(user_service, session)
    user_service.update_password(
        session,
        user.id,
        PasswordUpdate(
            old_password="pw123456",
            new_password="newpass99",
            confirm_password="newpass99",
        ),
    )

    assert not session_service.login(session, "amy@x.com", "pw123456").ok
    assert session_service.login(session, "amy@x.com", "newpass99").ok


def test_logout_clears_cookie_every_time(session_service):
    first = session_service.logout()
    second = session_service.logout()
    assert first == second
    assert first.clears
    assert first.name == "refreshToken"


def test_secure_cookie_in_production(user_service, session, user_repo, settings):
    from showcase.core.tokens import TokenIssuer
    from showcase.services.session_service import SessionService

    prod = settings.model_copy(update={"ENVIRONMENT": "production"})
    service = SessionService(user_repo, TokenIssuer(prod), prod)
    _signup(user_service, session)

    assert service.login(session, "amy@x.com", "pw123456").value.cookie.secure is True
    assert service.logout().secure is True


def test_refresh_issues_access_token(user_service, session_service, session):
    _signup(user_service, session)
    login = session_service.login(session, "amy@x.com", "pw123456").value

    result = session_service.refresh(session, login.refresh_token)
    assert result.ok
    assert result.value != login.access_token


def test_refresh_rejects_access_token_and_missing_cookie(
    user_service, session_service, session
):
    _signup(user_service, session)
    login = session_service.login(session, "amy@x.com", "pw123456").value

    assert isinstance(
        session_service.refresh(session, login.access_token).error, AuthenticationError
    )
    assert isinstance(session_service.refresh(session, None).error, AuthenticationError)
