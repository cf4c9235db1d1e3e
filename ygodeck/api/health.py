"""
Health check endpoints.

Provides liveness and readiness probes. Readiness checks the database and
the card catalog, since no deck request can be served without either.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ygodeck.db.database import get_session
from ygodeck.services.catalog_store import CatalogFormatError, get_catalog

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    catalog: str | None = None
    card_count: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 if the database is unreachable or the catalog is missing.
    """
    result = HealthResponse(status="ready")

    try:
        await session.execute(text("SELECT 1"))
        result.database = "connected"
    except Exception:
        result.database = "disconnected"

    try:
        result.card_count = len(get_catalog())
        result.catalog = "loaded"
    except (FileNotFoundError, CatalogFormatError):
        result.catalog = "unavailable"

    if result.database != "connected" or result.catalog != "loaded":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        result.status = "not ready"

    return result
