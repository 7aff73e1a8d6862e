"""
NYC58 classifieds API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as ops_router
from auth.routes import router as user_router
from auth.sessions import SessionManager
from config.settings import Settings, config
from database.session import build_engine, build_session_factory, init_models

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("aiomysql", "httpx", "httpcore"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    engine: Optional[AsyncEngine] = None,
    settings: Settings = config,
) -> FastAPI:
    app = FastAPI(
        title="NYC58 API",
        version="1.0.0",
        description="User registration, login and session lookup for the NYC58 classifieds site.",
    )

    engine = engine or build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.sessions = SessionManager()

    register_exception_handlers(app)
    register_middleware(app)

    # Routes
    app.include_router(ops_router)
    app.include_router(user_router, prefix="/api/v1")

    @app.on_event("startup")
    async def on_startup():
        try:
            await init_models(engine)
            logger.info("Database tables verified/created.")
        except Exception as exc:
            # Keep serving; /health reports the database as down.
            logger.error("Error initializing database: %s", exc, exc_info=True)
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await engine.dispose()
        logger.info("Database pool closed.")

    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )


if __name__ == "__main__":
    run()
