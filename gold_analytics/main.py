"""
Gold Analytics API

Read-only HTTP surface over the reporting views and the analytical query
library. Run with ``python run_server.py`` or
``gunicorn gold_analytics.main:app -c gunicorn.conf.py``.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import structlog

from gold_analytics.config import get_settings
from gold_analytics.config.logging import configure_logging
from gold_analytics.database.connection import close_database, init_database
from gold_analytics.serving.api.middleware import RequestLoggingMiddleware
from gold_analytics.serving.api.routes import (
    analytics_router,
    health_router,
    reports_router,
)

logger = structlog.get_logger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and open the warehouse connection for the app's lifetime"""
    configure_logging()
    logger.info("Starting Gold Analytics API", version=app.version)

    try:
        await init_database()
    except Exception as e:
        # Served as degraded; /health reports the outage
        logger.warning("Database unavailable at startup", error=str(e))

    yield

    await close_database()
    logger.info("Gold Analytics API stopped")


def create_app() -> FastAPI:
    """Build the FastAPI application"""
    settings = get_settings()

    application = FastAPI(
        title="Gold Analytics API",
        description="Customer and product reports and analytical queries over the gold star schema",
        version=settings.version,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    application.add_middleware(GZipMiddleware, minimum_size=1000)
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(health_router, prefix=API_PREFIX, tags=["Health"])
    application.include_router(reports_router, prefix=f"{API_PREFIX}/reports", tags=["Reports"])
    application.include_router(analytics_router, prefix=f"{API_PREFIX}/analytics", tags=["Analytics"])

    @application.get(f"{API_PREFIX}/info")
    async def api_info() -> Dict[str, Any]:
        return {
            "name": application.title,
            "version": settings.version,
            "environment": settings.app_env,
            "documentation": application.docs_url,
        }

    return application


app = create_app()
