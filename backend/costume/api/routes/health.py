"""Health check endpoint.

Reports whether the model credential is configured without calling the
model API (every call costs money). Always returns 200 so load balancers
keep routing.
"""

from __future__ import annotations

from fastapi import APIRouter

from costume import __version__
from costume.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    return {
        "status": "ok",
        "version": __version__,
        "environment": settings.environment,
        "model": "configured" if settings.openai_api_key else "missing",
    }
