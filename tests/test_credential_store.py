"""Credential store tests."""

from datetime import datetime

import pytest

from todo_api.exceptions import DuplicateEmailError, UserNotFoundError
from todo_api.models.user import User


def test_create_and_find(store):
    user = store.create("Alice", "alice@example.com", "hash")
    assert user.id is not None
    assert user.created_at is not None
    assert store.find_by_id(user.id).email == "alice@example.com"
    assert store.find_by_email("alice@example.com").id == user.id


def test_email_lookup_is_case_insensitive(store):
    """Emails are stored normalised and matched regardless of case."""
    user = store.create("Bob", "  Bob@Example.COM ", "hash")
    assert user.email == "bob@example.com"
    assert store.find_by_email("BOB@example.com").id == user.id


def test_find_missing(store):
    assert store.find_by_email("nobody@example.com") is None
    assert store.find_by_id(12345) is None


def test_unique_constraint_rejects_duplicate(store, db):
    """The store itself refuses a second row for the same email."""
    store.create("Alice", "alice@example.com", "hash")
    with pytest.raises(DuplicateEmailError):
        store.create("Other Alice", "ALICE@example.com", "hash2")
    assert db.query(User).count() == 1


def test_store_usable_after_duplicate(store):
    """A rejected insert leaves the session ready for further work."""
    store.create("Alice", "alice@example.com", "hash")
    with pytest.raises(DuplicateEmailError):
        store.create("Alice", "alice@example.com", "hash")
    assert store.create("Carol", "carol@example.com", "hash").id is not None


def test_update_profile(store):
    user = store.create("Alice", "alice@example.com", "hash")
    updated = store.update_profile(user.id, "Alicia", "Alicia@Example.com")
    assert updated.name == "Alicia"
    assert updated.email == "alicia@example.com"


def test_update_profile_keeps_own_email(store):
    user = store.create("Alice", "alice@example.com", "hash")
    assert store.update_profile(user.id, "Alicia", "alice@example.com").name == "Alicia"


def test_update_profile_email_collision(store):
    store.create("Alice", "alice@example.com", "hash")
    bob = store.create("Bob", "bob@example.com", "hash")
    with pytest.raises(DuplicateEmailError):
        store.update_profile(bob.id, "Bob", "alice@example.com")
    assert store.find_by_id(bob.id).email == "bob@example.com"


def test_update_password_hash(store):
    user = store.create("Alice", "alice@example.com", "old-hash")
    store.update_password_hash(user.id, "new-hash")
    assert store.find_by_id(user.id).password_hash == "new-hash"


def test_update_missing_user(store):
    with pytest.raises(UserNotFoundError):
        store.update_password_hash(404, "hash")


OLD_TIMESTAMP = datetime(2000, 1, 1)


def backdate(db, user_id: int) -> None:
    """Push a user's updated_at into the past so a refresh is detectable."""
    db.query(User).filter(User.id == user_id).update({User.updated_at: OLD_TIMESTAMP})
    db.commit()
    db.expire_all()


def updated_at(db, user_id: int) -> datetime:
    user = db.get(User, user_id)
    db.refresh(user)
    return user.updated_at.replace(tzinfo=None)


def test_update_profile_touches_updated_at(store, db):
    user = store.create("Alice", "alice@example.com", "hash")
    backdate(db, user.id)
    assert updated_at(db, user.id) == OLD_TIMESTAMP

    store.update_profile(user.id, "Alicia", "alice@example.com")
    assert updated_at(db, user.id) > OLD_TIMESTAMP


def test_update_password_hash_touches_updated_at(store, db):
    user = store.create("Alice", "alice@example.com", "hash")
    backdate(db, user.id)

    store.update_password_hash(user.id, "new-hash")
    assert updated_at(db, user.id) > OLD_TIMESTAMP
