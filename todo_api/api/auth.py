"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from todo_api.api.dependencies import CurrentIdentity, get_authenticator, get_credential_store
from todo_api.exceptions import StaleTokenError
from todo_api.schemas.auth import (
    AuthResponse,
    MessageResponse,
    PasswordChange,
    ProfileUpdate,
    UserLogin,
    UserRegister,
    UserResponse,
    UserWrapper,
)
from todo_api.services.auth import Authenticator
from todo_api.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
):
    """Register a new user."""
    user, token = authenticator.register(user_data.name, user_data.email, user_data.password)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
):
    """Login with email and password."""
    user, token = authenticator.login(credentials.email, credentials.password)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.get("/me", response_model=UserWrapper)
def get_me(
    identity: CurrentIdentity,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
):
    """Get current user information."""
    user = store.find_by_id(identity.id)
    if user is None:
        raise StaleTokenError(f"User {identity.id} no longer exists")
    return UserWrapper(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(identity: CurrentIdentity):
    """Logout (client should discard token).

    Tokens are stateless, so nothing is revoked server-side.
    """
    logger.info(f"User {identity.id} logged out")
    return MessageResponse(message="Logged out successfully")


@router.put("/profile", response_model=UserWrapper)
def update_profile(
    profile: ProfileUpdate,
    identity: CurrentIdentity,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
):
    """Update the current user's name and email."""
    user = authenticator.update_profile(identity.id, profile.name, profile.email)
    return UserWrapper(user=UserResponse.model_validate(user))


@router.put("/password", response_model=MessageResponse)
def change_password(
    passwords: PasswordChange,
    identity: CurrentIdentity,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
):
    """Change the current user's password."""
    authenticator.change_password(identity.id, passwords.current_password, passwords.new_password)
    return MessageResponse(message="Password updated successfully")
