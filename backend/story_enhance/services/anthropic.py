"""Anthropic Claude SDK wrapper service.

Provides a singleton AsyncAnthropic client for the story rewriting calls.
"""

from anthropic import AsyncAnthropic

from story_enhance.config import settings


# Singleton client instance
_client: AsyncAnthropic | None = None


def get_client() -> AsyncAnthropic:
    """
    Get or create the singleton AsyncAnthropic client.

    Returns:
        The shared AsyncAnthropic client instance.
    """
    global _client
    if _client is None:
        _client = AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=settings.enhance_timeout_seconds,
            max_retries=0,  # Retries are handled by the transformer
        )
    return _client


async def close_client() -> None:
    """
    Close the singleton client and release resources.

    Should be called during application shutdown for graceful cleanup.
    """
    global _client
    if _client is not None:
        await _client.close()
        _client = None
