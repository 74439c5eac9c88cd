"""
Custom exception handlers for FastAPI.
Provides clear, actionable error messages for validation, routing and server errors.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_405_METHOD_NOT_ALLOWED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from duplicate_detector.core.observability import sentry_capture
from duplicate_detector.utils.helpers import utc_timestamp

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /health",
    "POST /duplicates/check",
    "POST /duplicates/check-single",
    "GET /duplicates/criteria",
    "GET /duplicates/metrics",
]


def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed request shapes are client errors, reported as 400 like any
    # other rejected request.
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and known paths hit with the wrong method both list the
    # routes that do exist.
    if exc.status_code == HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return JSONResponse(
            status_code=HTTP_404_NOT_FOUND,
            content={
                "error": "Endpoint not found",
                "available_endpoints": AVAILABLE_ENDPOINTS,
            },
        )
    if exc.status_code == HTTP_405_METHOD_NOT_ALLOWED:
        return JSONResponse(
            status_code=HTTP_405_METHOD_NOT_ALLOWED,
            content={
                "error": "Method not allowed",
                "available_endpoints": AVAILABLE_ENDPOINTS,
            },
            headers=getattr(exc, "headers", None),
        )
    # Routes raise HTTPException(detail={"error": ..., "details": ...}); keep
    # that envelope flat instead of nesting it under "detail".
    if isinstance(exc.detail, dict):
        content = dict(exc.detail)
    else:
        content = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


def generic_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error: %s", exc, exc_info=exc)
    sentry_capture(exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "details": str(exc),
            "timestamp": utc_timestamp(),
        },
    )
