"""Health check endpoints."""

from fastapi import APIRouter

from magicsniff.config import get_settings
from magicsniff.signatures.table import get_file_signatures


router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live")
async def liveness() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "alive"}


@router.get("/ready")
async def readiness() -> dict[str, str | int]:
    """Readiness probe - the signature table is loaded and non-empty."""
    signatures = len(get_file_signatures())
    return {
        "status": "ready" if signatures else "not_ready",
        "environment": get_settings().environment,
        "signatures": signatures,
    }


@router.get("")
async def health() -> dict[str, str]:
    settings = get_settings()
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.app_version,
    }
