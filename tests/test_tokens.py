"""Token service tests."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from todo_api.exceptions import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    StaleTokenError,
)
from todo_api.services.tokens import TokenService


def test_issue_and_verify_round_trip(token_service):
    """A freshly issued token verifies to its subject."""
    token = token_service.issue(42)
    assert token_service.verify(token) == 42


def test_token_claims(token_service):
    """Tokens carry subject, issue time and a one-day expiry by default."""
    now = datetime(2030, 1, 1, tzinfo=UTC)
    token = token_service.issue(7, now=now)
    claims = jwt.get_unverified_claims(token)
    assert claims["sub"] == "7"
    assert claims["iat"] == int(now.timestamp())
    assert claims["exp"] == int((now + timedelta(days=1)).timestamp())


def test_expired_token_rejected(token_service):
    """A correctly signed token with an expiry in the past fails."""
    token = token_service.issue(1, now=datetime.now(UTC) - timedelta(days=2))
    with pytest.raises(ExpiredTokenError):
        token_service.verify(token)


def test_manually_built_expired_token_rejected(token_service):
    """Expiry is enforced on hand-built tokens signed with the real secret."""
    token = jwt.encode(
        {"sub": "1", "exp": datetime.now(UTC) - timedelta(minutes=1)},
        token_service.secret,
        algorithm=token_service.algorithm,
    )
    with pytest.raises(ExpiredTokenError):
        token_service.verify(token)


def test_foreign_secret_rejected(token_service):
    """A token signed with a different secret fails."""
    forged = TokenService("some-other-secret").issue(1)
    with pytest.raises(InvalidSignatureError):
        token_service.verify(forged)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c", "abc.def"])
def test_garbage_rejected(token_service, token):
    """Strings that are not JWTs are malformed."""
    with pytest.raises(MalformedTokenError):
        token_service.verify(token)


def test_missing_subject_rejected(token_service):
    token = jwt.encode(
        {"exp": datetime.now(UTC) + timedelta(hours=1)},
        token_service.secret,
        algorithm=token_service.algorithm,
    )
    with pytest.raises(MalformedTokenError):
        token_service.verify(token)


def test_missing_expiry_rejected(token_service):
    token = jwt.encode({"sub": "1"}, token_service.secret, algorithm=token_service.algorithm)
    with pytest.raises(MalformedTokenError):
        token_service.verify(token)


def test_non_numeric_subject_rejected(token_service):
    token = jwt.encode(
        {"sub": "alice", "exp": datetime.now(UTC) + timedelta(hours=1)},
        token_service.secret,
        algorithm=token_service.algorithm,
    )
    with pytest.raises(MalformedTokenError):
        token_service.verify(token)


def test_expiration_is_configurable():
    """Short-lived services issue short-lived tokens."""
    service = TokenService("secret", expiration_minutes=5)
    now = datetime(2030, 1, 1, tzinfo=UTC)
    claims = jwt.get_unverified_claims(service.issue(1, now=now))
    assert claims["exp"] - claims["iat"] == 300


def test_resolve_returns_user(token_service, store):
    user = store.create("Alice", "alice@example.com", "hash")
    assert token_service.resolve(token_service.issue(user.id), store).id == user.id


def test_resolve_stale_user(token_service, store):
    """A valid token for a user that no longer exists is stale."""
    with pytest.raises(StaleTokenError):
        token_service.resolve(token_service.issue(9999), store)


def test_non_string_subject_rejected(token_service):
    """A correctly signed token with an invalid claim type is malformed, not forged."""
    token = jwt.encode(
        {"sub": 123, "exp": datetime.now(UTC) + timedelta(hours=1)},
        token_service.secret,
        algorithm=token_service.algorithm,
    )
    with pytest.raises(MalformedTokenError):
        token_service.verify(token)
