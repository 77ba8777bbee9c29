"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from todo_api.api import auth, health, todos
from todo_api.api.errors import register_exception_handlers
from todo_api.config import Settings, get_settings
from todo_api.database import Database
from todo_api.services.auth import build_password_context
from todo_api.services.tokens import TokenService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging once per process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database at startup and close it at shutdown."""
    database: Database = app.state.database
    owns_database = not database.is_open
    if owns_database:
        database.open()
    if app.state.settings.auto_create_tables:
        database.create_all()
    yield
    if owns_database:
        database.close()


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application around explicit settings and a database handle."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Todo List API",
        description="Multi-user todo list with password authentication",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database or Database(settings.database_url)
    app.state.token_service = TokenService.from_settings(settings)
    app.state.pwd_context = build_password_context(settings.bcrypt_rounds)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response

    register_exception_handlers(app)

    # Register routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(todos.router)

    return app


app = create_app()
