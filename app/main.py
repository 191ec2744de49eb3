"""FastAPI application entry point.

This module creates and configures the FastAPI application instance.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import ROUTERS, register_exception_handlers
from app.core.config import get_config
from app.core.container import shutdown_container
from app.core.database import check_db_connection, init_db
from app.core.logging import get_logger, setup_logging

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Creates tables in development when the database is reachable, and
    releases the HTTP client and connection pools on shutdown.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    config = get_config()
    logger.info("Starting SeagullsFM API", env=config.app_env)

    # Initialize database (only in development with available DB)
    if config.is_development:
        try:
            if await check_db_connection():
                await init_db()
                logger.info("Database initialized")
            else:
                logger.warning("Database connection not available, skipping initialization")
        except Exception as e:
            logger.warning(
                "Database initialization skipped", error=str(e), hint="Use migrations in production"
            )

    yield

    logger.info("Shutting down SeagullsFM API")
    await shutdown_container()
    logger.info("Cleanup complete")


def create_app() -> FastAPI:
    """Build the application with middleware, routers and error handlers."""
    config = get_config()
    application = FastAPI(
        title=config.app_name,
        description="Multi-channel radio station content management API",
        version="1.0.0",
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)
    for router in ROUTERS:
        application.include_router(router)

    @application.get("/")
    async def root() -> dict[str, str]:
        return {"message": "Welcome to SeagullsFM API"}

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "OK", "message": "Server is running"}

    return application


app = create_app()
