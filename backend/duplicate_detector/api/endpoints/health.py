"""Health check endpoints for monitoring."""
from typing import Dict, Any
from fastapi import APIRouter

from duplicate_detector.core.config import settings
from duplicate_detector.utils.helpers import utc_timestamp

router = APIRouter()

FEATURES = ["Exact Price Match", "Exact Date Match", "Store Name Subset Match"]


@router.api_route("/health", methods=["GET", "HEAD"])
async def health_check() -> Dict[str, Any]:
    """Basic health check endpoint (supports GET & HEAD)."""
    return {
        "service": settings.PROJECT_NAME,
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": settings.SERVICE_VERSION,
        "features": FEATURES,
        "timestamp": utc_timestamp(),
    }
