"""Application exceptions.

Handlers in ``todo_api.api.errors`` translate these into HTTP responses. Every
token failure collapses into one generic 401 at that boundary, and both login
failure modes share ``InvalidCredentialsError``.
"""

from typing import Any


class TodoAPIError(Exception):
    """Base class for expected application errors."""


class ValidationFailedError(TodoAPIError):
    """Input failed validation; ``errors`` lists every violated field."""

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__("Validation failed")
        self.errors = errors


class DuplicateEmailError(TodoAPIError):
    """Another user already owns this email address."""


class InvalidCredentialsError(TodoAPIError):
    """Email or password did not match."""


class UserNotFoundError(TodoAPIError):
    """No user exists with the given id."""


class AuthenticationError(TodoAPIError):
    """A request could not be authenticated."""


class MissingCredentialError(AuthenticationError):
    """No usable bearer token was presented."""


class MalformedTokenError(AuthenticationError):
    """The token could not be decoded or lacks required claims."""


class InvalidSignatureError(AuthenticationError):
    """The token was not signed with the server's secret."""


class ExpiredTokenError(AuthenticationError):
    """The token's expiry has passed."""


class StaleTokenError(AuthenticationError):
    """The token names a user that no longer exists."""
