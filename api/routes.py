"""
Operational routes.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from database.repository import StorageError, ping

logger = logging.getLogger(__name__)

router = APIRouter(tags=["monitoring"])


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    """Report whether the database answers."""
    try:
        await ping(request.app.state.engine)
    except StorageError as exc:
        logger.error("Health check failed: %s", exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "error", "message": "Database connection failed"},
        )
    return JSONResponse(content={"status": "ok"})
