# showcase/repositories/user_repo.py
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from showcase.core.errors import DuplicateError, Result
from showcase.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are compared and stored lower-cased and stripped."""
    return email.strip().lower()


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - Translate unique-index violations into DuplicateError
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Queries -----

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a User by unique email, or None if not found."""
        stmt = select(User).where(User.email == normalize_email(email))
        return session.exec(stmt).first()

    def email_taken_by_other(
        self,
        session: Session,
        email: str,
        user_id: uuid.UUID,
    ) -> bool:
        """True if the email belongs to an account other than user_id."""
        existing = self.get_by_email(session, email)
        return existing is not None and existing.id != user_id

    # ----- Writes -----

    def _commit(self, session: Session, user: User) -> Result[User]:
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            logger.info("Unique constraint rejected write for user %s", user.id)
            return Result.failure(DuplicateError("User already exists"))
        except SQLAlchemyError:
            session.rollback()
            raise
        session.refresh(user)
        return Result.success(user)

    def create(self, session: Session, user: User) -> Result[User]:
        """
        Insert a new User.

        The unique indexes on email/username are the source of truth; a
        concurrent insert that loses the race comes back as DuplicateError.
        """
        user.email = normalize_email(user.email)
        session.add(user)
        return self._commit(session, user)

    def update(self, session: Session, user: User) -> Result[User]:
        """Persist changes to an existing User and advance updated_at."""
        user.email = normalize_email(user.email)
        user.updated_at = datetime.now(timezone.utc)
        session.add(user)
        return self._commit(session, user)

    def delete(self, session: Session, user: User) -> None:
        """Delete a User. A linked artist profile is left in place."""
        session.delete(user)
        session.commit()
