import logging
from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from movesbook.core.config import settings
from movesbook.db.async_session import check_async_database_health

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def health_check():
    """
    Service and database health.

    Returns 503 with the same body when the database is unreachable.
    """
    database = await check_async_database_health()
    healthy = database.get("status") == "healthy"
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "database": database,
    }
    if not healthy:
        logger.warning(f"Health check failed: {database.get('error')}")
        return JSONResponse(status_code=503, content=body)
    return body
