"""
FastAPI Application

Read-only HTTP access to the storefront reports.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
import structlog

from shoplab.config import get_settings
from shoplab.database.connection import init_database, close_database
from shoplab.serving.api.middleware import RequestLoggingMiddleware
from shoplab.serving.api.routes import health_router, reports_router

settings = get_settings()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    from shoplab.config.logging import configure_logging
    configure_logging()

    logger.info("Starting Shoplab API")
    await init_database()

    yield

    logger.info("Shutting down...")
    await close_database()


app = FastAPI(
    title="Shoplab API",
    description="Storefront schema reports",
    version=settings.version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(health_router, prefix="/api/v1", tags=["Health"])
app.include_router(reports_router, prefix="/api/v1/reports", tags=["Reports"])


@app.get("/api/v1/info")
async def api_info():
    """API information endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.version,
        "environment": settings.app_env,
        "documentation": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
