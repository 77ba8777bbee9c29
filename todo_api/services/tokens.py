"""Issuing and validating signed session tokens."""

import logging
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from todo_api.config import Settings
from todo_api.exceptions import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    StaleTokenError,
)
from todo_api.models.user import User
from todo_api.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("sub", "exp")


class TokenService:
    """Stateless JWT session tokens.

    A token is accepted only if its signature matches ``secret``, it has not
    expired, and (for ``resolve``) its subject still exists. There is no
    revocation list; a token stays valid until ``exp`` even after logout or a
    password change.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expiration_minutes: int = 1440):
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(minutes=expiration_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expiration_minutes=settings.jwt_expiration_minutes,
        )

    def issue(self, user_id: int, now: datetime | None = None) -> str:
        """Create a signed token for ``user_id``."""
        issued_at = now or datetime.now(UTC)
        claims = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Check signature and expiry, returning the subject's user id."""
        try:
            unverified = jwt.get_unverified_claims(token)
        except JWTError as e:
            raise MalformedTokenError("Token could not be decoded") from e

        missing = [claim for claim in REQUIRED_CLAIMS if claim not in unverified]
        if missing:
            raise MalformedTokenError(f"Token is missing claims: {', '.join(missing)}")

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise ExpiredTokenError("Token has expired") from e
        except JWTClaimsError as e:
            raise MalformedTokenError(f"Token claims are invalid: {e}") from e
        except JWTError as e:
            raise InvalidSignatureError("Token signature is invalid") from e

        try:
            return int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise MalformedTokenError("Token subject is not a user id") from e

    def resolve(self, token: str, store: CredentialStore) -> User:
        """Verify ``token`` and load the user it names."""
        user_id = self.verify(token)
        user = store.find_by_id(user_id)
        if user is None:
            raise StaleTokenError(f"User {user_id} no longer exists")
        return user
