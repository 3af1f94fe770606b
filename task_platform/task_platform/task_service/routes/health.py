"""
Liveness and readiness probes for the task service
"""
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status

from ..db import check_db_connection

SERVICE_NAME = "task-service"

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, Any]:
    """Liveness: the process is up, no database round trip."""
    return {
        "service": SERVICE_NAME,
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/ready", status_code=status.HTTP_200_OK)
async def readiness_check() -> Dict[str, Any]:
    """
    Readiness: MongoDB must answer a ping.

    Raises:
        HTTPException: 503 if MongoDB does not answer
    """
    if not await check_db_connection():
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database unavailable")

    return {
        "service": SERVICE_NAME,
        "status": "ready",
        "database": "connected",
        "timestamp": datetime.utcnow().isoformat(),
    }
