"""
Global middleware.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, Response, status

from api.errors import error_response

logger = logging.getLogger(__name__)

ALLOW_METHODS = "GET,POST,PATCH,PUT,DELETE,OPTIONS"
ALLOW_HEADERS = "Content-Type,Authorization"


def _apply_cors_headers(request: Request, response: Response) -> None:
    # Credentialed requests reject a wildcard origin, so echo the caller's.
    origin = request.headers.get("origin")
    response.headers["Access-Control-Allow-Origin"] = origin or "*"
    response.headers["Access-Control-Allow-Credentials"] = "true"
    response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
    response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
    response.headers["Vary"] = "Origin"


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware."""

    @app.middleware("http")
    async def catch_unhandled(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        logger.debug(
            "%s %s -> %d in %.3fs",
            request.method, request.url.path, response.status_code, elapsed,
        )
        return response

    # Added last so it is outermost: preflights never reach routing and
    # every response, including 500s, carries the CORS headers.
    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=status.HTTP_204_NO_CONTENT)
        else:
            response = await call_next(request)
        _apply_cors_headers(request, response)
        return response
