"""
Health check endpoint for monitoring
"""

from datetime import datetime, timezone
import time

from fastapi import APIRouter

from app.schemas import HealthResponse

router = APIRouter()

_STARTED_AT = time.monotonic()


@router.get("", response_model=HealthResponse)
async def health():
    """Process liveness with uptime in whole seconds"""
    return HealthResponse(
        status="ok",
        uptime=int(time.monotonic() - _STARTED_AT),
        timestamp=datetime.now(timezone.utc),
    )
