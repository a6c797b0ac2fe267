"""Health check endpoints."""
from fastapi import APIRouter
import logging

from ..core.cache import cache_manager
from ..core.config import settings
from ..core.database import health_check_db

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
async def health_check():
    """Simple health check that doesn't test external services"""
    return {
        "status": "healthy",
        "service": "School Ledger API",
        "version": settings.app_version
    }

@router.get("/full")
async def full_health_check():
    """Database and cache reachability"""
    db_healthy = await health_check_db()
    components = {
        "database": "healthy" if db_healthy else "unhealthy",
        "cache": "disabled" if not cache_manager.enabled else "unknown",
    }

    if cache_manager.enabled:
        await cache_manager.initialize()
        try:
            await cache_manager.redis.ping()
            components["cache"] = "healthy"
        except Exception as e:
            logger.error(f"Cache health check failed: {e}")
            components["cache"] = "unhealthy"

    overall_status = "healthy" if all(
        status in ("healthy", "disabled") for status in components.values()
    ) else "degraded"

    return {
        "status": overall_status,
        "components": components
    }
