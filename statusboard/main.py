"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from statusboard.api import auth, health, statuses, users
from statusboard.config import Settings, get_settings
from statusboard.database import Database
from statusboard.errors import register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database handle on startup and dispose it on shutdown."""
    settings: Settings = app.state.settings
    app.state.database = Database(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"Status board starting ({settings.environment})")
    yield
    app.state.database.dispose()
    logger.info("Status board shut down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for the given settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Team Status Board API",
        description="Team availability board with per-user status",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else settings.cors_origins,
        allow_credentials=not settings.is_development,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(statuses.router)
    app.include_router(users.router)
    if settings.admin_routes_enabled:
        logger.warning("Unauthenticated admin status route is enabled")
        app.include_router(users.admin_router)

    return app


app = create_app()
