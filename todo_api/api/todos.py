"""Todo API endpoints.

Every query filters by the caller's id. A todo owned by someone else is
reported exactly like one that does not exist.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from todo_api.api.dependencies import CurrentIdentity
from todo_api.database import get_db
from todo_api.models.todo import Todo
from todo_api.schemas.auth import Identity, MessageResponse
from todo_api.schemas.todo import TodoCreate, TodoResponse, TodoUpdate

router = APIRouter(prefix="/todos", tags=["todos"])

# Largest value an INTEGER primary key can hold
MAX_TODO_ID = 2**31 - 1


def get_owned_todo(db: Session, todo_id: int, identity: Identity) -> Todo:
    """Get a todo that the caller owns."""
    if not 1 <= todo_id <= MAX_TODO_ID:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")

    todo = db.query(Todo).filter(Todo.id == todo_id, Todo.user_id == identity.id).first()
    if todo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")
    return todo


@router.get("", response_model=list[TodoResponse])
def get_todos(
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
):
    """Get all todos owned by the current user, newest first."""
    return (
        db.query(Todo)
        .filter(Todo.user_id == identity.id)
        .order_by(Todo.created_at.desc(), Todo.id.desc())
        .all()
    )


@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
def create_todo(
    todo_data: TodoCreate,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new todo."""
    todo = Todo(title=todo_data.title, user_id=identity.id)
    db.add(todo)
    db.commit()
    db.refresh(todo)
    return todo


@router.get("/{todo_id}", response_model=TodoResponse)
def get_todo(
    todo_id: int,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific todo."""
    return get_owned_todo(db, todo_id, identity)


@router.put("/{todo_id}", response_model=TodoResponse)
def update_todo(
    todo_id: int,
    todo_data: TodoUpdate,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a todo's title or completion flag."""
    todo = get_owned_todo(db, todo_id, identity)

    update_data = todo_data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(todo, field, value)

    db.commit()
    db.refresh(todo)
    return todo


@router.delete("/{todo_id}", response_model=MessageResponse)
def delete_todo(
    todo_id: int,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a todo."""
    todo = get_owned_todo(db, todo_id, identity)
    db.delete(todo)
    db.commit()
    return MessageResponse(message="Todo deleted successfully")
