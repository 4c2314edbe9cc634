"""Health check endpoint."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from bloglist import __version__
from bloglist.api.deps import get_connection
from bloglist.database import ConnectionFailure

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str


@router.get("/api/health", response_model=HealthResponse)
async def health_check(
    connection: Annotated[AsyncConnection | ConnectionFailure, Depends(get_connection)],
) -> HealthResponse:
    """Health check endpoint for monitoring and load balancers."""
    db_status = "ok"
    if isinstance(connection, ConnectionFailure):
        db_status = "error"
    else:
        try:
            await connection.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.warning("Health check database query failed", exc_info=True)
            db_status = "error"

    return HealthResponse(
        status="ok" if db_status == "ok" else "degraded",
        version=__version__,
        database=db_status,
    )
