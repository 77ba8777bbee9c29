"""Health check endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from todo_api.api.dependencies import get_app_settings
from todo_api.config import Settings
from todo_api.database import Database, get_database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(settings: Annotated[Settings, Depends(get_app_settings)]):
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}


@router.get("/db")
def database_health(database: Annotated[Database, Depends(get_database)]):
    """Check that the database is reachable."""
    try:
        database.ping()
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "healthy"}
