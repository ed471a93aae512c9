"""Health check endpoints."""

from fastapi import APIRouter, Response, status
from sqlalchemy import text

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(response: Response):
    """
    Readiness check - verify the archive database is reachable.
    The in-memory store needs no check.
    """
    health_status = {
        "status": "ready",
        "checks": {
            "archive_db": "unknown",
        }
    }

    try:
        from abendlog.app.core.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        health_status["checks"]["archive_db"] = "ok"
    except Exception as e:
        health_status["checks"]["archive_db"] = f"failed: {str(e)}"
        health_status["status"] = "not_ready"

    if health_status["status"] != "ready":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return health_status
