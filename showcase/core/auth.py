# showcase/core/auth.py
import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from showcase.core.config import Settings, get_settings
from showcase.core.tokens import ACCESS
from showcase.database import get_session
from showcase.models.user import User

# HTTP Bearer scheme:
# - auto_error=False => we raise our own 401 with a consistent message.
bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(
    token: str,
    secret: str,
    algorithm: str,
    expected_type: str,
) -> uuid.UUID | None:
    """
    Verify a token issued by TokenIssuer and return its subject.

    Verification:
      - signature (HS256 with the secret for this token type)
      - expiration time (exp)
      - "type" claim matches expected_type

    Returns:
        The user id from "sub", or None if the token is invalid/expired.
    """
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        return None

    if claims.get("type") != expected_type:
        return None

    try:
        return uuid.UUID(claims.get("sub") or "")
    except ValueError:
        return None


def require_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Resolve the current user from an access token.

    Flow:
      1. Missing Authorization header => 401.
      2. Decode and verify the JWT => user id from 'sub'.
      3. Load the user; a deleted account => 401.

    Raises:
        HTTPException(401): on any of the above failures.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    user_id = decode_token(
        credentials.credentials,
        settings.ACCESS_TOKEN_SECRET,
        settings.JWT_ALG,
        ACCESS,
    )
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    user = session.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return user

