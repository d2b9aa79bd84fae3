# This project was developed with assistance from AI tools.
"""Liveness and readiness probes -- no authentication required."""

from db import DatabaseService, get_db_service
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("/")
async def liveness() -> dict[str, str]:
    """Process is up."""
    return {"status": "ok"}


@router.get("/ready")
async def readiness(db_service: DatabaseService = Depends(get_db_service)):
    """Database reachable."""
    if await db_service.health_check():
        return {"status": "ok", "database": "ok"}
    return JSONResponse(status_code=503, content={"status": "degraded", "database": "unavailable"})
