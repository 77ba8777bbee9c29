"""Authentication schemas.

Request bodies only enforce shape here; field rules (lengths, email syntax)
are checked by the Authenticator so that every violation is reported together.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserRegister(BaseModel):
    """User registration request."""

    name: str
    email: str
    password: str


class UserLogin(BaseModel):
    """User login request."""

    email: str
    password: str


class ProfileUpdate(BaseModel):
    """Profile update request."""

    name: str
    email: str


class PasswordChange(BaseModel):
    """Password change request."""

    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(..., alias="currentPassword")
    new_password: str = Field(..., alias="newPassword")


class UserResponse(BaseModel):
    """Public projection of a user; never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime | None = None


class UserWrapper(BaseModel):
    """Response carrying a single user."""

    user: UserResponse


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    user: UserResponse
    token: str
    token_type: str = "bearer"  # noqa: S105


class Identity(BaseModel):
    """Authenticated caller attached to each protected request."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    email: str
    name: str


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
