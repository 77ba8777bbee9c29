"""Pydantic schemas for API requests and responses."""

from todo_api.schemas.auth import (
    AuthResponse,
    Identity,
    MessageResponse,
    PasswordChange,
    ProfileUpdate,
    UserLogin,
    UserRegister,
    UserResponse,
    UserWrapper,
)
from todo_api.schemas.todo import TodoCreate, TodoResponse, TodoUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "ProfileUpdate",
    "PasswordChange",
    "UserResponse",
    "UserWrapper",
    "AuthResponse",
    "Identity",
    "MessageResponse",
    "TodoCreate",
    "TodoUpdate",
    "TodoResponse",
]
