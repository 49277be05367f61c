# showcase/services/user_service.py
import logging
import uuid
from dataclasses import dataclass

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from showcase.core.errors import (
    AuthenticationError,
    DuplicateError,
    NotFoundError,
    Result,
    UpstreamError,
    ValidationError,
)
from showcase.core.security import hash_password, password_too_long, verify_password
from showcase.core.storage_utils import (
    ALLOWED_IMAGE_CONTENT_TYPES,
    MAX_IMAGE_BYTES,
    ImageStore,
    ImageUpload,
    generate_filename,
)
from showcase.core.tokens import TokenIssuer
from showcase.models.user import User
from showcase.repositories.user_repo import UserRepository, normalize_email
from showcase.schemas.user import (
    AccountDelete,
    EmailChange,
    PasswordUpdate,
    SignupRequest,
    UserUpdate,
)

logger = logging.getLogger(__name__)

ALL_FIELDS_REQUIRED = "All fields are required"


@dataclass(frozen=True)
class UserWithToken:
    user: User
    access_token: str


class UserService:
    """
    Account lifecycle: signup, profile/password/email changes, deletion.

    Responsibilities:
      - enforce cross-field rules (email uniqueness, password confirmation)
      - hash passwords before they reach the repository
      - order image uploads before the final write, and clean up on failure
      - return Result values; routers decide how to render failures
    """

    def __init__(
        self,
        repo: UserRepository,
        tokens: TokenIssuer,
        images: ImageStore,
    ):
        self.repo = repo
        self.tokens = tokens
        self.images = images

    # ----- Helpers -----

    def _load(self, session: Session, user_id: uuid.UUID) -> Result[User]:
        user = self.repo.get_by_id(session, user_id)
        if user is None:
            return Result.failure(NotFoundError("User not found"))
        return Result.success(user)

    @staticmethod
    def _check_new_password(password: str) -> Result[None]:
        if password_too_long(password):
            return Result.failure(
                ValidationError("Password must be at most 72 bytes long")
            )
        return Result.success()

    def _upload_avatar(
        self,
        user_id: uuid.UUID,
        image: ImageUpload,
    ) -> Result[str]:
        """
        Validate and push an avatar to the image store.

        Path pattern:
            users/<user_id>/avatar-<uuid>.<ext>
        """
        ext = ALLOWED_IMAGE_CONTENT_TYPES.get(image.content_type)
        if ext is None:
            return Result.failure(
                ValidationError("Unsupported image type. Allowed: JPEG, PNG, WEBP.")
            )
        if len(image.data) > MAX_IMAGE_BYTES:
            return Result.failure(ValidationError("Image too large (max 5MB)."))

        path = f"users/{user_id}/{generate_filename('avatar', ext)}"
        try:
            url = self.images.upload(path, image.data, image.content_type)
        except Exception:
            logger.exception("Avatar upload failed for user %s", user_id)
            return Result.failure(UpstreamError("Error uploading image"))

        if not url:
            return Result.failure(ValidationError("Error uploading image"))
        return Result.success(url)

    # ----- Signup / self -----

    def signup(self, session: Session, payload: SignupRequest) -> Result[User]:
        """
        Create an account with role "user".

        Rules:
          - username, email and password are required
          - email must not be registered yet (checked here, and enforced
            by the unique index for concurrent requests)
        """
        if not payload.username or not payload.email or not payload.password:
            return Result.failure(ValidationError(ALL_FIELDS_REQUIRED))

        checked = self._check_new_password(payload.password)
        if not checked.ok:
            return checked

        if self.repo.get_by_email(session, payload.email) is not None:
            return Result.failure(DuplicateError("User already exists"))

        user = User(
            username=payload.username,
            email=normalize_email(payload.email),
            password_hash=hash_password(payload.password),
            role="user",
        )
        result = self.repo.create(session, user)
        if result.ok:
            logger.info("Created user %s", result.value.id)
        return result

    def get_me(self, session: Session, user_id: uuid.UUID) -> Result[User]:
        return self._load(session, user_id)

    # ----- Mutations -----

    def update_profile(
        self,
        session: Session,
        user_id: uuid.UUID,
        username: str | None,
        email: str | None,
        image: ImageUpload | None = None,
    ) -> Result[UserWithToken]:
        """
        Update username/email and optionally the avatar.

        The avatar is uploaded before the row is written; if the write
        then fails, the freshly uploaded object is deleted again so the
        store and the database stay consistent. A fresh access token is
        issued on success (the refresh token is left as is).
        """
        username = (username or "").strip()
        email = (email or "").strip()
        if not username or not email:
            return Result.failure(ValidationError(ALL_FIELDS_REQUIRED))

        try:
            fields = UserUpdate(username=username, email=email)
        except SchemaValidationError:
            return Result.failure(ValidationError("Invalid username or email"))
        username, email = fields.username, fields.email

        loaded = self._load(session, user_id)
        if not loaded.ok:
            return loaded
        user = loaded.value

        if self.repo.email_taken_by_other(session, email, user.id):
            return Result.failure(DuplicateError("Email is already in use"))

        new_image_url: str | None = None
        if image is not None:
            uploaded = self._upload_avatar(user.id, image)
            if not uploaded.ok:
                return uploaded
            new_image_url = uploaded.value

        user.username = username
        user.email = email
        if new_image_url is not None:
            user.profile_image_url = new_image_url

        try:
            saved = self.repo.update(session, user)
        except SQLAlchemyError:
            if new_image_url is not None:
                self._discard_image(new_image_url)
            raise
        if not saved.ok:
            if new_image_url is not None:
                self._discard_image(new_image_url)
            return saved

        return Result.success(
            UserWithToken(
                user=saved.value,
                access_token=self.tokens.issue_access_token(user_id),
            )
        )

    def _discard_image(self, url: str) -> None:
        try:
            self.images.delete_url(url)
        except Exception:
            logger.exception("Could not delete orphaned image %s", url)

    def update_password(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: PasswordUpdate,
    ) -> Result[User]:
        if (
            not payload.old_password
            or not payload.new_password
            or not payload.confirm_password
        ):
            return Result.failure(ValidationError(ALL_FIELDS_REQUIRED))

        loaded = self._load(session, user_id)
        if not loaded.ok:
            return loaded
        user = loaded.value

        if not verify_password(payload.old_password, user.password_hash):
            return Result.failure(AuthenticationError("Invalid password"))

        if payload.new_password != payload.confirm_password:
            return Result.failure(ValidationError("Passwords do not match"))

        checked = self._check_new_password(payload.new_password)
        if not checked.ok:
            return checked

        user.password_hash = hash_password(payload.new_password)
        result = self.repo.update(session, user)
        if result.ok:
            logger.info("Password updated for user %s", user.id)
        return result

    def change_email(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: EmailChange,
    ) -> Result[User]:
        """
        Replace the login email.

        Rules:
          - current_email must match the stored one (case-insensitive)
          - password must be correct
          - new email must not belong to another account
        """
        if not payload.current_email or not payload.new_email or not payload.password:
            return Result.failure(ValidationError(ALL_FIELDS_REQUIRED))

        loaded = self._load(session, user_id)
        if not loaded.ok:
            return loaded
        user = loaded.value

        if normalize_email(payload.current_email) != user.email:
            return Result.failure(ValidationError("Invalid email"))

        if not verify_password(payload.password, user.password_hash):
            return Result.failure(AuthenticationError("Invalid password"))

        if self.repo.email_taken_by_other(session, payload.new_email, user.id):
            return Result.failure(DuplicateError("Email is already in use"))

        user.email = payload.new_email
        return self.repo.update(session, user)

    def delete_account(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: AccountDelete,
    ) -> Result[None]:
        """Permanently remove the account after re-checking the password."""
        if not payload.password:
            return Result.failure(ValidationError("Password is required"))

        loaded = self._load(session, user_id)
        if not loaded.ok:
            return loaded
        user = loaded.value

        if not verify_password(payload.password, user.password_hash):
            return Result.failure(AuthenticationError("Invalid password"))

        self.repo.delete(session, user)
        logger.info("Deleted user %s", user_id)
        return Result.success()
