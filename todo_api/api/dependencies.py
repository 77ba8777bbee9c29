"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from todo_api.config import Settings
from todo_api.database import get_db
from todo_api.exceptions import MissingCredentialError
from todo_api.schemas.auth import Identity
from todo_api.services.auth import Authenticator
from todo_api.services.credential_store import CredentialStore
from todo_api.services.tokens import TokenService

# Missing or non-Bearer headers come back as None and are rejected below,
# so they share the 401 path with bad tokens.
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running application was built with."""
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    """Get the application's token service."""
    return request.app.state.token_service


def get_password_context(request: Request) -> CryptContext:
    """Get the application's password hashing context."""
    return request.app.state.pwd_context


def get_credential_store(
    db: Annotated[Session, Depends(get_db)],
) -> CredentialStore:
    """Get credential store bound to the request's session."""
    return CredentialStore(db)


def get_authenticator(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    pwd_context: Annotated[CryptContext, Depends(get_password_context)],
) -> Authenticator:
    """Get authenticator with dependencies."""
    return Authenticator(store, tokens, pwd_context)


def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> Identity:
    """Resolve the bearer token to the calling user.

    Downstream handlers must scope every query on owned data by
    ``identity.id``.
    """
    if credentials is None or not credentials.credentials.strip():
        raise MissingCredentialError("Bearer token required")

    user = tokens.resolve(credentials.credentials.strip(), store)
    identity = Identity.model_validate(user)
    request.state.identity = identity
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
