"""
Health check endpoint.

Reports process liveness and whether the database answers; it never
touches request-handling state.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from rth_backend.fastapi.dependencies.database import Database, get_database


router = APIRouter(tags=["health"])


@router.get("/health", summary="Health Check")
async def health(database: Database = Depends(get_database)):
    if database.ping():
        return {"status": "ok", "database": "connected"}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "degraded", "database": "unavailable"},
    )
