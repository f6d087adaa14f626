"""OpenAI SDK wrapper service."""

from openai import AsyncOpenAI

from story_enhance.config import settings

# Singleton client - reused across requests
_client: AsyncOpenAI | None = None


def get_client() -> AsyncOpenAI:
    """Get or create the async OpenAI client."""
    global _client
    if _client is None:
        _client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.enhance_timeout_seconds,
            max_retries=0,  # Retries are handled by the transformer
        )
    return _client


async def close_client() -> None:
    """Close the client and release its connection pool."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None
