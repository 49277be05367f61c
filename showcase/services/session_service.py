# showcase/services/session_service.py
import logging
from dataclasses import dataclass

from sqlmodel import Session

from showcase.core.auth import decode_token
from showcase.core.config import Settings
from showcase.core.errors import AuthenticationError, Result, ValidationError
from showcase.core.security import verify_password
from showcase.core.tokens import REFRESH, TokenIssuer
from showcase.models.user import User
from showcase.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

REFRESH_COOKIE_MAX_AGE = 7 * 24 * 60 * 60  # 7 days, in seconds

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class CookieDirective:
    """
    Instruction for the transport layer to set or clear one cookie.

    value None means "clear". The router applies it to the outgoing
    response with set_cookie / delete_cookie.
    """

    name: str
    value: str | None
    max_age: int | None
    httponly: bool
    secure: bool
    samesite: str

    @property
    def clears(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    refresh_token: str
    cookie: CookieDirective


class SessionService:
    """
    Login / logout / access-token refresh.

    Login issues an access + refresh token pair and asks the transport to
    store the refresh token in an httpOnly, SameSite=strict cookie.
    Logout only clears that cookie; there is no server-side token store.
    """

    def __init__(self, repo: UserRepository, tokens: TokenIssuer, settings: Settings):
        self.repo = repo
        self.tokens = tokens
        self.settings = settings

    def _refresh_cookie(self, value: str | None) -> CookieDirective:
        return CookieDirective(
            name=self.settings.REFRESH_COOKIE_NAME,
            value=value,
            max_age=REFRESH_COOKIE_MAX_AGE if value is not None else None,
            httponly=True,
            secure=self.settings.is_production,
            samesite="strict",
        )

    def login(
        self,
        session: Session,
        email: str | None,
        password: str | None,
    ) -> Result[LoginResult]:
        """
        Verify credentials and issue tokens.

        Unknown email and wrong password produce the same error message.
        """
        if not email or not password:
            return Result.failure(ValidationError("All fields are required"))

        user = self.repo.get_by_email(session, email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            return Result.failure(AuthenticationError(INVALID_CREDENTIALS))

        pair = self.tokens.issue_pair(user.id)
        logger.info("User %s logged in", user.id)
        return Result.success(
            LoginResult(
                user=user,
                access_token=pair.access_token,
                refresh_token=pair.refresh_token,
                cookie=self._refresh_cookie(pair.refresh_token),
            )
        )

    def logout(self) -> CookieDirective:
        """Clear the refresh cookie. Safe to call when no cookie is present."""
        return self._refresh_cookie(None)

    def refresh(self, session: Session, refresh_token: str | None) -> Result[str]:
        """
        Exchange a valid refresh token for a new access token.

        The refresh token itself is not rotated.
        """
        if not refresh_token:
            return Result.failure(AuthenticationError("Refresh token missing"))

        user_id = decode_token(
            refresh_token,
            self.settings.REFRESH_TOKEN_SECRET,
            self.settings.JWT_ALG,
            REFRESH,
        )
        if user_id is None or self.repo.get_by_id(session, user_id) is None:
            return Result.failure(AuthenticationError("Invalid or expired refresh token"))

        return Result.success(self.tokens.issue_access_token(user_id))
