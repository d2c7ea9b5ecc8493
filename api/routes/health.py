"""Health check routes"""

from fastapi import APIRouter
from pymongo.errors import PyMongoError
import logging

from adapters import mongo_adapter
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("nutriadmin.api.health")


@router.get("/health-check")
def health_check():
    """Basic health check endpoint"""
    try:
        mongo_adapter.get_db().command("ping")
        database = "ok"
    except (RuntimeError, PyMongoError) as e:
        # RuntimeError: not connected yet
        logger.warning("MongoDB ping failed: %s", e)
        database = "unavailable"
    return {"status": "ok", "service": settings.app_name, "database": database}
