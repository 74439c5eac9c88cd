"""API routes for duplicate receipt detection.

The routes are a thin layer over :mod:`duplicate_detector.services.duplicate_service`:
they enforce the batch size limit, time the computation, update the
process counters and shape the response envelope. Any fault raised
while checking is logged and answered with a 500 rather than
propagating.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from duplicate_detector.core.config import settings
from duplicate_detector.core.observability import sentry_breadcrumb, sentry_capture
from duplicate_detector.models.schemas import (
    DuplicateCheckRequest,
    DuplicateCheckResponse,
    SingleCheckRequest,
    SingleCheckResponse,
)
from duplicate_detector.services.criteria import CRITERIA_DESCRIPTION
from duplicate_detector.services.duplicate_service import find_duplicates, find_matches
from duplicate_detector.services.stats import stats
from duplicate_detector.utils.helpers import utc_timestamp

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/duplicates", tags=["duplicates"])


def _failure(error: str, exc: Exception) -> JSONResponse:
    stats.record_failure()
    sentry_capture(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": error,
            "details": str(exc),
            "timestamp": utc_timestamp(),
        },
    )


@router.post("/check", response_model=DuplicateCheckResponse)
def check_duplicates(payload: DuplicateCheckRequest):
    """Find duplicate groups within a batch of receipts."""
    receipts = payload.receipts

    if not receipts:
        return DuplicateCheckResponse(
            message="No receipts to check",
            duplicate_groups=[],
            total_duplicates=0,
            total_receipts=0,
            timestamp=utc_timestamp(),
        )

    if len(receipts) > settings.MAX_BATCH_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Too many receipts",
                "details": f"Maximum {settings.MAX_BATCH_SIZE} receipts can be checked at once",
            },
        )

    mode = payload.grouping_mode or settings.GROUPING_MODE
    logger.info("Checking %d receipts for duplicates (%s grouping)...", len(receipts), mode.value)
    sentry_breadcrumb("duplicates", "batch check", data={"receipts": len(receipts), "mode": mode.value})

    try:
        start = time.perf_counter()
        groups = find_duplicates(receipts, mode=mode)
        elapsed_ms = (time.perf_counter() - start) * 1000
    except Exception as e:
        logger.exception("Duplicate check failed: %s", e)
        return _failure("Duplicate check failed", e)

    total_duplicates = sum(group.duplicate_count for group in groups)
    stats.record_batch(len(receipts), len(groups), total_duplicates, elapsed_ms)
    logger.info(
        "Found %d duplicate groups with %d total duplicates in %.1fms",
        len(groups),
        total_duplicates,
        elapsed_ms,
    )

    return DuplicateCheckResponse(
        message=f"Duplicate check completed for {len(receipts)} receipts",
        duplicate_groups=groups,
        total_duplicates=total_duplicates,
        total_receipts=len(receipts),
        processing_time_ms=round(elapsed_ms, 3),
        timestamp=utc_timestamp(),
    )


@router.post("/check-single", response_model=SingleCheckResponse)
def check_single(payload: SingleCheckRequest):
    """Check whether one new receipt duplicates any existing receipt."""
    existing = payload.existing_receipts
    logger.info("Checking if new receipt is duplicate of %d existing receipts...", len(existing))

    try:
        start = time.perf_counter()
        matches = find_matches(payload.new_receipt, existing)
        elapsed_ms = (time.perf_counter() - start) * 1000
    except Exception as e:
        logger.exception("Single duplicate check failed: %s", e)
        return _failure("Single duplicate check failed", e)

    is_duplicate = len(matches) > 0
    stats.record_single(len(existing), len(matches), elapsed_ms)
    logger.info("%s duplicates for new receipt in %.1fms", "Found" if is_duplicate else "No", elapsed_ms)

    if is_duplicate:
        message = f"Found {len(matches)} potential duplicate{'s' if len(matches) > 1 else ''}"
    else:
        message = "No duplicates found"

    return SingleCheckResponse(
        is_duplicate=is_duplicate,
        message=message,
        matches=matches,
        new_receipt=payload.new_receipt,
        processing_time_ms=round(elapsed_ms, 3),
        timestamp=utc_timestamp(),
    )


@router.get("/criteria")
def get_criteria() -> Dict[str, Any]:
    """Describe the detection criteria, rules and confidence levels."""
    return CRITERIA_DESCRIPTION


@router.get("/metrics")
def get_metrics() -> Dict[str, Any]:
    """Process-local counters since startup."""
    return {
        "service": settings.PROJECT_NAME,
        "metrics": stats.snapshot(),
        "timestamp": utc_timestamp(),
    }
