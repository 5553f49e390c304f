"""Health check endpoint."""

import time
from fastapi import APIRouter

from problemdetail.config import get_settings
from problemdetail.models.responses import HealthResponse

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Service health check."""
    return HealthResponse(
        status="healthy",
        uptime_seconds=round(time.time() - _start_time, 2),
        default_validation_level=get_settings().DEFAULT_VALIDATION_LEVEL,
    )
