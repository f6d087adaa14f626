"""Rate limiting middleware using SlowAPI."""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from story_enhance.config import settings

logger = logging.getLogger(__name__)


def get_client_key(request: Request) -> str:
    """Extract client identifier for rate limiting.

    Uses the user id if an upstream auth layer set one, otherwise the IP address.
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"

    return f"ip:{get_remote_address(request)}"


# In-memory storage by default; point RATE_LIMIT_STORAGE_URI at Redis when running several workers
limiter = Limiter(
    key_func=get_client_key,
    storage_uri=settings.rate_limit_storage_uri,
    default_limits=[f"{settings.rate_limit_general_per_minute}/minute"],
    headers_enabled=True,  # Include X-RateLimit-* headers in responses
    enabled=settings.rate_limit_enabled,
)


def rate_limit_enhance():
    """Decorator for the AI enhancement endpoint (each call costs provider tokens)."""
    return limiter.limit(f"{settings.rate_limit_enhance_per_minute}/minute")
