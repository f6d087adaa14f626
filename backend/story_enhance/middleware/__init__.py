"""Middleware components for request validation and protection."""

from story_enhance.middleware.rate_limit import get_client_key, limiter
from story_enhance.middleware.size_limit import RequestSizeLimitMiddleware

__all__ = [
    "RequestSizeLimitMiddleware",
    "limiter",
    "get_client_key",
]
