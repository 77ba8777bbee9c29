"""Persistence of users and their password hashes."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from todo_api.exceptions import DuplicateEmailError, UserNotFoundError
from todo_api.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()


class CredentialStore:
    """User lookups and writes over a database session.

    Email uniqueness is enforced by the ``users.email`` unique constraint, so
    two concurrent registrations for one address end with exactly one row.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        """Get a user by email, ignoring case and surrounding whitespace."""
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_id(self, user_id: int) -> User | None:
        """Get a user by id."""
        return self.db.get(User, user_id)

    def create(self, name: str, email: str, password_hash: str) -> User:
        """Insert a new user."""
        user = User(name=name, email=normalize_email(email), password_hash=password_hash)
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        return user

    def update_profile(self, user_id: int, name: str, email: str) -> User:
        """Change a user's display name and email."""
        user = self._get(user_id)
        normalized = normalize_email(email)

        other = self.find_by_email(normalized)
        if other is not None and other.id != user.id:
            raise DuplicateEmailError(normalized)

        user.name = name
        user.email = normalized
        self._commit()
        self.db.refresh(user)
        return user

    def update_password_hash(self, user_id: int, password_hash: str) -> None:
        """Replace a user's password hash."""
        user = self._get(user_id)
        user.password_hash = password_hash
        self._commit()

    def _get(self, user_id: int) -> User:
        user = self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Rejected write that would duplicate a user email")
            raise DuplicateEmailError() from e
