"""Entry point for the FastAPI application.

This module constructs the FastAPI app, includes the routers and sets
up startup and shutdown events. Run it with uvicorn, or through the
``duplicate-detector`` console script which calls :func:`run`.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import sentry_sdk
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from duplicate_detector.core.config import settings
from duplicate_detector.core.observability import init_sentry
from duplicate_detector.api.endpoints.health import router as health_router
from duplicate_detector.api.routes.duplicates import router as duplicates_router
from duplicate_detector.api.error_handlers import (
    validation_exception_handler,
    http_exception_handler,
    generic_exception_handler,
)

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    # Startup
    logger.info("Starting %s on port %s", settings.PROJECT_NAME, settings.PORT)
    logger.info("Detection criteria: Exact price + Exact date + Store name subset match")
    if init_sentry("duplicate-detector"):
        logger.info("Sentry SDK initialized")
    yield
    # Shutdown
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)


# Middleware to enrich Sentry scope with lightweight request info
@app.middleware("http")
async def sentry_context_middleware(request: Request, call_next):  # type: ignore
    if settings.SENTRY_DSN:
        scope = sentry_sdk.get_current_scope()
        scope.set_tag("path", request.url.path)
        scope.set_tag("method", request.method)
    return await call_next(request)


"""CORS configuration.

In development allow all origins ( * ); otherwise use BACKEND_CORS_ORIGINS,
deduplicated while preserving order.
"""
env_is_dev = (settings.ENVIRONMENT or "development").lower() == "development"
allow_origins = ["*"] if env_is_dev else list(dict.fromkeys(settings.BACKEND_CORS_ORIGINS or []))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=not env_is_dev,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register custom exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include routers
app.include_router(health_router)
app.include_router(duplicates_router)


def run() -> None:
    """Serve the app with uvicorn using the configured host and port."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":  # pragma: no cover
    run()
