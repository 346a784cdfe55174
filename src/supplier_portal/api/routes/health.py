"""
Health check endpoints for monitoring application status.

Provides:
- Basic liveness check
- Readiness check with database connectivity
"""

import time
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from supplier_portal import __version__
from supplier_portal.database.connection import SessionLocal
from supplier_portal.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("", status_code=status.HTTP_200_OK)
def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns 200 while the process is running.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "service": "supplier-portal",
        "version": __version__,
    }


@router.get("/ready", status_code=status.HTTP_200_OK)
def readiness_check(response: Response) -> Dict[str, Any]:
    """
    Readiness check endpoint.

    Returns 503 when the database cannot be reached.
    """
    checks = {"database": _check_database()}

    all_healthy = all(check["status"] == "healthy" for check in checks.values())
    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if all_healthy else "unhealthy",
        "timestamp": datetime.utcnow().isoformat(),
        "checks": checks,
    }


def _check_database() -> Dict[str, Any]:
    """Check database connectivity."""
    start_time = time.time()

    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        duration = time.time() - start_time
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "error": str(e)[:100],
            "response_time_ms": round(duration * 1000, 2),
        }
    finally:
        db.close()

    duration = time.time() - start_time
    return {
        "status": "healthy",
        "response_time_ms": round(duration * 1000, 2),
    }
