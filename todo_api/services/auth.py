"""Authentication service for registration, login and credential changes."""

import logging
from typing import Any

from email_validator import EmailNotValidError, validate_email
from passlib.context import CryptContext

from todo_api.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationFailedError,
)
from todo_api.models.user import User
from todo_api.services.credential_store import CredentialStore
from todo_api.services.tokens import TokenService

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6
EMAIL_MAX_LENGTH = 255

FieldErrors = list[dict[str, Any]]


def build_password_context(rounds: int = 12) -> CryptContext:
    """Password hashing context; bcrypt cost is ``2**rounds``."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def field_error(field: str, message: str) -> dict[str, Any]:
    return {"field": field, "message": message}


def check_name(errors: FieldErrors, name: str) -> str:
    """Trim ``name`` and record an error if its length is out of range."""
    name = name.strip()
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        errors.append(
            field_error(
                "name", f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
            )
        )
    return name


def check_email(errors: FieldErrors, email: str) -> str:
    """Trim ``email`` and record an error if it is not a valid address."""
    email = email.strip()
    try:
        if len(email) > EMAIL_MAX_LENGTH:
            raise EmailNotValidError("Email is too long")
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        errors.append(field_error("email", "Please provide a valid email"))
    return email


def check_new_password(errors: FieldErrors, password: str, field: str = "password") -> None:
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(
            field_error(field, f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
        )


def check_password_present(errors: FieldErrors, password: str, field: str = "password") -> None:
    if not password:
        errors.append(field_error(field, "Password is required"))


class Authenticator:
    """Verifies credentials against the store and issues session tokens.

    Unknown emails and wrong passwords both raise ``InvalidCredentialsError``
    and both pay for one bcrypt verification, so neither the response nor its
    timing reveals whether an address is registered.
    """

    def __init__(self, store: CredentialStore, tokens: TokenService, pwd_context: CryptContext):
        self.store = store
        self.tokens = tokens
        self.pwd_context = pwd_context

    def hash_password(self, password: str) -> str:
        """Hash a password."""
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return self.pwd_context.verify(plain_password, hashed_password)

    def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """Create a user and return it with a fresh token."""
        errors: FieldErrors = []
        name = check_name(errors, name)
        email = check_email(errors, email)
        check_new_password(errors, password)
        if errors:
            raise ValidationFailedError(errors)

        # Fast path; the unique constraint still decides concurrent races
        if self.store.find_by_email(email) is not None:
            raise DuplicateEmailError(email)

        user = self.store.create(name, email, self.hash_password(password))
        logger.info(f"Registered user {user.id}")
        return user, self.tokens.issue(user.id)

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials and return the user with a fresh token."""
        errors: FieldErrors = []
        email = check_email(errors, email)
        check_password_present(errors, password)
        if errors:
            raise ValidationFailedError(errors)

        user = self.store.find_by_email(email)
        if user is None:
            self.pwd_context.dummy_verify()
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        if not self.verify_password(password, user.password_hash):
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        logger.info(f"User {user.id} logged in")
        return user, self.tokens.issue(user.id)

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        """Replace the password after re-checking the current one.

        Tokens issued before the change remain valid until they expire.
        """
        errors: FieldErrors = []
        check_password_present(errors, current_password, field="currentPassword")
        check_new_password(errors, new_password, field="newPassword")
        if errors:
            raise ValidationFailedError(errors)

        user = self.store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if not self.verify_password(current_password, user.password_hash):
            logger.info(f"Password change rejected for user {user_id}")
            raise InvalidCredentialsError()

        self.store.update_password_hash(user_id, self.hash_password(new_password))
        logger.info(f"Password changed for user {user_id}")

    def update_profile(self, user_id: int, name: str, email: str) -> User:
        """Change display name and email."""
        errors: FieldErrors = []
        name = check_name(errors, name)
        email = check_email(errors, email)
        if errors:
            raise ValidationFailedError(errors)

        user = self.store.update_profile(user_id, name, email)
        logger.info(f"Profile updated for user {user_id}")
        return user
