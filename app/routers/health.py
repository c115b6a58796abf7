"""
Health Check Router
Simple health check endpoint
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.core.config import Settings
from app.db.memory import MemoryStore
from app.deps import get_settings, get_store

router = APIRouter()


@router.get("/health")
def health_check(
    store: MemoryStore = Depends(get_store),
    app_settings: Settings = Depends(get_settings),
):
    """
    Health check endpoint.
    Returns API status and how many records the in-memory store holds.
    """
    return {
        "status": "healthy",
        "service": app_settings.PROJECT_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "records": store.counts(),
    }
