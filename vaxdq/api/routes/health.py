"""GET /health -- liveness check and loaded record count."""
from __future__ import annotations

from fastapi import APIRouter, Request

from vaxdq.core.settings import get_settings

router = APIRouter(tags=["health"])


@router.get("/health", summary="Basic health check")
def health_check(request: Request) -> dict[str, str | int]:
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.app_env,
        "records_loaded": len(getattr(request.app.state, "records", [])),
    }
