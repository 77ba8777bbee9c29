"""Translation of application exceptions into HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from todo_api.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

UNAUTHORIZED_DETAIL = "Invalid authentication credentials"
INVALID_CREDENTIALS_DETAIL = "Invalid email or password"
DUPLICATE_EMAIL_DETAIL = "User with this email already exists"
SERVER_ERROR_DETAIL = "Internal server error"

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


async def validation_failed_handler(request: Request, exc: ValidationFailedError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": exc.errors},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies in the same shape as field validation."""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append(
            {"field": ".".join(loc) or "body", "message": error.get("msg", "Invalid value")}
        )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


async def duplicate_email_handler(request: Request, exc: DuplicateEmailError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": DUPLICATE_EMAIL_DETAIL},
    )


async def invalid_credentials_handler(
    request: Request, exc: InvalidCredentialsError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": INVALID_CREDENTIALS_DETAIL},
        headers=BEARER_CHALLENGE,
    )


async def authentication_error_handler(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    """Every token failure looks the same to the caller."""
    logger.info(f"Rejected {request.method} {request.url.path}: {type(exc).__name__}")
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": UNAUTHORIZED_DETAIL},
        headers=BEARER_CHALLENGE,
    )


async def user_not_found_handler(request: Request, exc: UserNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": UNAUTHORIZED_DETAIL},
        headers=BEARER_CHALLENGE,
    )


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": SERVER_ERROR_DETAIL},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install all application exception handlers."""
    app.add_exception_handler(ValidationFailedError, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(DuplicateEmailError, duplicate_email_handler)
    app.add_exception_handler(InvalidCredentialsError, invalid_credentials_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(UserNotFoundError, user_not_found_handler)
    app.add_exception_handler(SQLAlchemyError, server_error_handler)
    app.add_exception_handler(Exception, server_error_handler)
