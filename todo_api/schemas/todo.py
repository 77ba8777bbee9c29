"""Todo schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

TITLE_MAX_LENGTH = 255


def strip_title(value: str | None) -> str | None:
    """Trim a title, then reject blank or overlong ones."""
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("Title is required")
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
    return value


class TodoCreate(BaseModel):
    """Create a new todo."""

    title: str

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return strip_title(value)


class TodoUpdate(BaseModel):
    """Update a todo. Omitted fields are left unchanged."""

    title: str | None = None
    completed: bool | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        return strip_title(value)


class TodoResponse(BaseModel):
    """Todo response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    completed: bool
    user_id: int
    created_at: datetime
    updated_at: datetime
