"""PostHog analytics service for LLM tracing.

Manually tracks story rewriting calls with metrics like tokens, latency, and model.
"""

import logging
import time
from typing import Any

from story_enhance.config import settings

logger = logging.getLogger(__name__)

# Singleton PostHog client
_posthog_client = None


def get_posthog_client():
    """
    Get or create the singleton PostHog client.

    Returns:
        The shared PostHog client instance, or None if disabled/not configured.
    """
    global _posthog_client
    if settings.posthog_enabled and settings.posthog_api_key:
        if _posthog_client is None:
            from posthog import Posthog

            _posthog_client = Posthog(
                settings.posthog_api_key,
                host=settings.posthog_host,
            )
        return _posthog_client
    return None


def shutdown_posthog() -> None:
    """
    Shutdown the PostHog client gracefully.

    Should be called during application shutdown.
    """
    global _posthog_client
    if _posthog_client is not None:
        _posthog_client.shutdown()
        _posthog_client = None


def track_llm_generation(
    distinct_id: str,
    provider: str,
    model: str,
    input_tokens: int,
    output_tokens: int,
    latency_ms: float,
    is_error: bool = False,
    properties: dict[str, Any] | None = None,
) -> None:
    """
    Track an LLM generation event in PostHog.

    Args:
        distinct_id: User ID, or "anonymous" when the caller is unknown
        provider: "openai" or "anthropic"
        model: Model used (e.g., "gpt-4o-mini")
        input_tokens: Number of input tokens
        output_tokens: Number of output tokens
        latency_ms: Response latency in milliseconds
        is_error: Whether the call failed
        properties: Additional custom properties (e.g., enhance mode)
    """
    client = get_posthog_client()
    if client is None:
        logger.debug(
            f"PostHog client not initialized (enabled={settings.posthog_enabled}, "
            f"api_key_set={bool(settings.posthog_api_key)})"
        )
        return

    # PostHog expects latency in seconds
    latency_seconds = latency_ms / 1000.0

    event_properties: dict[str, Any] = {
        "$ai_model": model,
        "$ai_provider": provider,
        "$ai_input_tokens": input_tokens,
        "$ai_output_tokens": output_tokens,
        "$ai_latency": latency_seconds,
        "$ai_is_error": is_error,
    }

    if properties:
        event_properties.update(properties)

    client.capture(
        distinct_id=distinct_id,
        event="$ai_generation",
        properties=event_properties,
    )
    logger.info(
        f"PostHog: tracked $ai_generation for {distinct_id} - "
        f"{input_tokens} in / {output_tokens} out tokens, {latency_seconds:.2f}s"
    )


class LLMTimer:
    """Context manager for timing LLM calls."""

    def __init__(self):
        self.start_time: float = 0
        self.end_time: float = 0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.end_time = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (self.end_time - self.start_time) * 1000
