"""
Health check API endpoints.

Liveness, readiness and a detailed report covering local storage, the
generation provider configuration and the live session.
"""

import logging
from sqlite3 import Error as SQLiteError
from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from adapters.db.database import Database
from config import settings

from . import dependencies

logger = logging.getLogger(__name__)

SERVICE_NAME = "littlechef-api"
SERVICE_VERSION = "1.0.0"

router = APIRouter(prefix="/api/v1/health", tags=["health"])


def _storage_check() -> Dict[str, Any]:
    try:
        with Database(settings.sqlite_db) as db:
            rows = db.execute_query(
                "SELECT key FROM local_storage ORDER BY key"
            )
    except SQLiteError as e:
        logger.error(f"Storage health check failed: {e}")
        return {"status": "unhealthy", "error": str(e)}
    return {"status": "healthy", "slots": [row["key"] for row in rows]}


def _provider_check() -> Dict[str, Any]:
    configured = bool(settings.gemini_api_key)
    return {
        "status": "healthy" if configured else "unhealthy",
        "details": {
            "provider": settings.llm_provider,
            "api_key_configured": configured,
            "recipe_model": settings.recipe_model_name,
            "image_model": settings.image_model_name,
            "image_aspect_ratio": settings.image_aspect_ratio,
            "debug_mode": settings.debug,
        },
    }


def _session_check() -> Dict[str, Any]:
    session = dependencies._session
    if session is None:
        return {"status": "unhealthy", "error": "Session not initialized"}
    state = session.state
    return {
        "status": "healthy",
        "phase": state.phase.value,
        "saved_recipes": len(state.saved_recipes),
        "shopping_items": len(state.shopping_list),
        "image_in_flight": session.has_background_work,
    }


@router.get(
    "/",
    response_model=Dict[str, Any],
    summary="Basic health check",
    description="Check if the API is running and responsive",
)
async def health_check() -> Dict[str, Any]:
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get(
    "/detailed",
    response_model=Dict[str, Any],
    summary="Detailed health check",
    description="Storage, provider configuration and session status",
)
async def detailed_health_check() -> Dict[str, Any]:
    """
    Detailed health check endpoint.

    The overall status is ``degraded`` as soon as any single check is not
    healthy.
    """
    checks = {
        "storage": _storage_check(),
        "configuration": _provider_check(),
        "session": _session_check(),
    }
    healthy = all(c["status"] == "healthy" for c in checks.values())
    return {
        "status": "healthy" if healthy else "degraded",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "checks": checks,
    }


@router.get(
    "/ready",
    response_model=Dict[str, Any],
    summary="Readiness check",
    description="Check if the service can generate recipes",
)
async def readiness_check() -> Dict[str, Any]:
    if not settings.gemini_api_key:
        raise HTTPException(
            status_code=503, detail="No generation provider configured"
        )
    if dependencies._session is None:
        raise HTTPException(status_code=503, detail="Session not initialized")
    return {"status": "ready"}
