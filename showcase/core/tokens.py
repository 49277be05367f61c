# showcase/core/tokens.py
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import jwt

from showcase.core.config import Settings

ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenIssuer:
    """
    Stateless issuer of signed, time-bounded JWTs.

    Claims:
      - sub:  user id (string form of the UUID)
      - type: "access" | "refresh"
      - iat / exp: issue and expiry instants (UTC)
      - jti:  random id, so two tokens are never byte-identical

    Access and refresh tokens use separate secrets and lifetimes taken
    from Settings. Nothing is cached or stored server-side.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def _issue(
        self,
        user_id: uuid.UUID,
        token_type: str,
        secret: str,
        lifetime: timedelta,
    ) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "type": token_type,
            "iat": now,
            "exp": now + lifetime,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(claims, secret, algorithm=self.settings.JWT_ALG)

    def issue_access_token(self, user_id: uuid.UUID) -> str:
        return self._issue(
            user_id,
            ACCESS,
            self.settings.ACCESS_TOKEN_SECRET,
            timedelta(minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

    def issue_refresh_token(self, user_id: uuid.UUID) -> str:
        return self._issue(
            user_id,
            REFRESH,
            self.settings.REFRESH_TOKEN_SECRET,
            timedelta(days=self.settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )

    def issue_pair(self, user_id: uuid.UUID) -> TokenPair:
        return TokenPair(
            access_token=self.issue_access_token(user_id),
            refresh_token=self.issue_refresh_token(user_id),
        )
