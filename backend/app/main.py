"""
FastAPI main application module for the Storefront Admin API
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
import time
import logging

from app.core.config import Settings, settings as default_settings
from app.core.cors import OriginPredicateCORSMiddleware, parse_allowed_origins
from app.core.database_utils import check_database_connection
from app.api.api import api_router
from app.schemas import ErrorResponse
from app.services.catalog import ProductCatalog
from app.services.health_monitor import HealthCheckPoller
from app.services.sitemap_cache import SitemapConfig, SitemapService

# Configure logging
logging.basicConfig(level=default_settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    sitemap_service: Optional[SitemapService] = None,
    health_poller: Optional[HealthCheckPoller] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Raises:
        ConfigurationError: if the sitemap base URL is ambiguous
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Storefront Admin API",
        description="Administrative backend for the storefront: sitemap, health and maintenance jobs",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    allowed_origins = parse_allowed_origins(settings.CLIENT_URL)
    app.state.settings = settings
    app.state.allowed_origins = allowed_origins
    app.state.sitemap_service = sitemap_service or SitemapService(
        SitemapConfig.from_settings(settings), ProductCatalog()
    )
    if health_poller is None and settings.HEALTH_ROUTE:
        health_poller = HealthCheckPoller(
            settings.HEALTH_ROUTE,
            interval_ms=settings.HEALTH_INTERVAL_MS,
            timeout_ms=settings.HEALTH_TIMEOUT_MS,
        )
    app.state.health_poller = health_poller

    # CORS middleware
    app.add_middleware(OriginPredicateCORSMiddleware, allowed_origins=allowed_origins)

    # Request timing middleware
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    app.include_router(api_router)

    @app.get("/")
    async def root():
        """Root liveness endpoint"""
        logger.info("Health check endpoint hit successfully")
        return PlainTextResponse("Admin API is running smoothly...")

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception):
        logger.warning(f"404 Not Found: {request.method} {request.url.path}")
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(message="Route not found.").model_dump(),
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(message=str(exc) or "Internal Server Error").model_dump(),
        )

    @app.on_event("startup")
    async def startup_event():
        """Initialize application on startup"""
        logger.info("Starting Storefront Admin API...")
        logger.info(f"Mode: {settings.ENVIRONMENT}")
        logger.info(f"Client URL(s): {', '.join(allowed_origins)}")

        if not check_database_connection():
            logger.error("Failed to connect to database")
            raise Exception("Database connection failed")

        if settings.ENVIRONMENT == "development":
            from app.core.database import create_tables
            create_tables()

        poller = app.state.health_poller
        if poller is not None:
            poller.start()
        else:
            logger.info("HEALTH_ROUTE not set; health checks are disabled.")

        logger.info("Application startup complete")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Stop background work before the server exits"""
        logger.info("Shutting down Storefront Admin API...")
        poller = app.state.health_poller
        if poller is not None:
            try:
                await poller.stop()
            except Exception as e:
                logger.warning(f"Could not stop health checks cleanly: {e}")
        logger.info("Server closed.")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
        log_level="info",
        timeout_graceful_shutdown=10,
    )
