"""Health check endpoint — no dependencies, always available."""

from fastapi import APIRouter

from sitebuilder.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "services": {
            "contentGeneration": bool(settings.openrouter_api_key.strip()),
            "imageSearch": settings.pexels_configured,
        },
    }
