# showcase/routers/users.py
from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    Request,
    Response,
    UploadFile,
    status,
)
from sqlmodel import Session

from showcase.core.auth import require_auth
from showcase.core.config import Settings, get_settings
from showcase.core.errors import unwrap
from showcase.core.storage_utils import ImageStore, ImageUpload, get_image_store
from showcase.core.tokens import TokenIssuer
from showcase.database import get_session
from showcase.models.user import User
from showcase.repositories.user_repo import UserRepository
from showcase.schemas.user import (
    AccessTokenRead,
    AccountDelete,
    EmailChange,
    LoginRead,
    LoginRequest,
    MessageRead,
    PasswordUpdate,
    SignupRequest,
    UserRead,
    UserWithTokenRead,
)
from showcase.services.session_service import CookieDirective, SessionService
from showcase.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

repo = UserRepository()


def get_user_service(
    settings: Settings = Depends(get_settings),
    images: ImageStore = Depends(get_image_store),
) -> UserService:
    return UserService(repo, TokenIssuer(settings), images)


def get_session_service(settings: Settings = Depends(get_settings)) -> SessionService:
    return SessionService(repo, TokenIssuer(settings), settings)


def apply_cookie(response: Response, cookie: CookieDirective) -> None:
    """Translate a CookieDirective into a Set-Cookie header."""
    if cookie.clears:
        response.delete_cookie(
            cookie.name,
            httponly=cookie.httponly,
            secure=cookie.secure,
            samesite=cookie.samesite,
        )
        return
    response.set_cookie(
        cookie.name,
        cookie.value,
        max_age=cookie.max_age,
        httponly=cookie.httponly,
        secure=cookie.secure,
        samesite=cookie.samesite,
    )


# -------- Session --------


@router.post(
    "/signup",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def signup(
    payload: SignupRequest,
    session: Session = Depends(get_session),
    service: UserService = Depends(get_user_service),
):
    """
    Create an account.

    Returns the new user without password hash or tokens.
    """
    return unwrap(service.signup(session, payload))


@router.post("/login", response_model=LoginRead)
def login(
    payload: LoginRequest,
    response: Response,
    session: Session = Depends(get_session),
    sessions: SessionService = Depends(get_session_service),
):
    """
    Log in with email + password.

    Sets the refresh token as an httpOnly, SameSite=strict cookie (7 days)
    and also returns both tokens in the body.
    """
    result = unwrap(sessions.login(session, payload.email, payload.password))
    apply_cookie(response, result.cookie)
    return LoginRead(
        user=UserRead.model_validate(result.user),
        access_token=result.access_token,
        refresh_token=result.refresh_token,
    )


@router.post(
    "/logout",
    response_model=MessageRead,
    dependencies=[Depends(require_auth)],
)
def logout(
    response: Response,
    sessions: SessionService = Depends(get_session_service),
):
    """Clear the refresh-token cookie."""
    apply_cookie(response, sessions.logout())
    return MessageRead(message="Logout successful")


@router.post("/refresh", response_model=AccessTokenRead)
def refresh(
    request: Request,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
    sessions: SessionService = Depends(get_session_service),
):
    """Issue a new access token from the refresh-token cookie."""
    refresh_token = request.cookies.get(settings.REFRESH_COOKIE_NAME)
    token = unwrap(sessions.refresh(session, refresh_token))
    return AccessTokenRead(access_token=token)


# -------- Self profile --------


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(require_auth)):
    """Return the authenticated user's profile."""
    return current_user


@router.patch("/me", response_model=UserWithTokenRead)
def update_me(
    username: str | None = Form(default=None),
    email: str | None = Form(default=None),
    image: UploadFile | None = File(default=None),
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    service: UserService = Depends(get_user_service),
):
    """
    Update username, email and (optionally) the avatar image.

    Multipart form: `username`, `email`, optional `image` file.
    Returns the updated user and a fresh access token.
    """
    upload = None
    if image is not None and image.filename:
        upload = ImageUpload(image.filename, image.content_type, image.file.read())

    result = unwrap(
        service.update_profile(session, current_user.id, username, email, upload)
    )
    return UserWithTokenRead(
        user=UserRead.model_validate(result.user),
        access_token=result.access_token,
    )


@router.patch("/me/password", response_model=UserRead)
def update_password(
    payload: PasswordUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    service: UserService = Depends(get_user_service),
):
    """Change password: old password + new password + confirmation."""
    return unwrap(service.update_password(session, current_user.id, payload))


@router.patch("/me/email", response_model=UserRead)
def change_email(
    payload: EmailChange,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    service: UserService = Depends(get_user_service),
):
    """Change login email; requires the current email and password."""
    return unwrap(service.change_email(session, current_user.id, payload))


@router.delete("/me", response_model=MessageRead)
def delete_me(
    payload: AccountDelete,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    service: UserService = Depends(get_user_service),
):
    """
    Permanently delete the account (password required).

    A linked artist profile is not removed.
    """
    unwrap(service.delete_account(session, current_user.id, payload))
    return MessageRead(message="User deleted successfully")
