"""Health check endpoints."""

from fastapi import APIRouter

from story_enhance.config import settings

router = APIRouter()


@router.get("")
async def health():
    """Basic health check."""
    return {"status": "healthy"}


@router.get("/provider")
async def provider_health():
    """Report which rewriting provider is configured, without calling it."""
    api_key = {
        "openai": settings.openai_api_key,
        "anthropic": settings.anthropic_api_key,
    }.get(settings.enhance_provider, "")
    return {
        "status": "healthy" if api_key else "unconfigured",
        "provider": settings.enhance_provider,
    }
