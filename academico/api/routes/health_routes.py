"""
Health Routes

GET /health - Liveness and database check
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from academico import __version__
from academico.core.config import get_settings
from academico.db.session import test_database_connection

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    database = test_database_connection()
    return {
        "status": "healthy" if database else "degraded",
        "version": __version__,
        "database": "connected" if database else "disconnected",
        "directus": "configured" if get_settings().directus_enabled else "not configured",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
