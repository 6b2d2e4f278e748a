# routers/health.py

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter()
logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()


@router.get("/health", summary="Health Check Endpoint")
def health_check():
    logger.debug("Health check endpoint was called.")
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
    }
