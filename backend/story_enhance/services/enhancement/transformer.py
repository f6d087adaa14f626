"""Text rewriting clients used by the enhancement pipeline.

A transformer is any async callable taking (text, title, mode) and returning
rewritten plain text. It knows nothing about media; the pipeline only sends it
the text extracted from a story.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

import anthropic
import openai
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from story_enhance.config import settings
from story_enhance.enums import EnhanceMode
from story_enhance.exceptions import TRANSIENT_ERRORS, EmptyEnhancementError, TransformerError
from story_enhance.services import anthropic as anthropic_service
from story_enhance.services import openai as openai_service
from story_enhance.services.enhancement.prompts import build_prompt
from story_enhance.services.posthog import LLMTimer, track_llm_generation

logger = logging.getLogger(__name__)

TRANSIENT_PROVIDER_ERRORS = (
    *TRANSIENT_ERRORS,
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
    anthropic.APIConnectionError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)

PROVIDER_ERRORS = (openai.OpenAIError, anthropic.AnthropicError, *TRANSIENT_ERRORS)

_retry_transient = retry(
    retry=retry_if_exception_type(TRANSIENT_PROVIDER_ERRORS),
    wait=wait_exponential(multiplier=settings.enhance_retry_backoff_seconds, max=30),
    stop=stop_after_attempt(settings.enhance_max_attempts),
    reraise=True,
)


class Transformer(Protocol):
    async def __call__(self, text: str, title: str | None, mode: EnhanceMode) -> str: ...


@dataclass
class Completion:
    text: str
    input_tokens: int = 0
    output_tokens: int = 0


class LLMTransformer:
    """Rewrites story text with a chat model.

    Subclasses implement _complete for their provider.
    """

    provider = ""

    def __init__(
        self,
        model: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
        distinct_id: str = "anonymous",
    ):
        self.model = model
        self.temperature = settings.enhance_temperature if temperature is None else temperature
        self.max_tokens = max_tokens or settings.enhance_max_tokens
        self.distinct_id = distinct_id

    async def __call__(self, text: str, title: str | None, mode: EnhanceMode) -> str:
        """
        Rewrite story text.

        Raises:
            TransformerError: If the provider call fails after retries
            EmptyEnhancementError: If the provider answers with no text
        """
        prompt = build_prompt(text, title, mode)
        logger.info(f"Enhancing story ({mode}) with {self.provider}:{self.model}")

        error: Exception | None = None
        with LLMTimer() as timer:
            try:
                completion = await self._complete(prompt)
            except PROVIDER_ERRORS as e:
                error = e
                completion = Completion(text="")

        self._track(completion, timer, mode, is_error=error is not None)
        if error is not None:
            logger.warning(f"{self.provider} enhancement failed: {error}")
            raise TransformerError() from error

        enhanced = (completion.text or "").strip()
        if not enhanced:
            raise EmptyEnhancementError()
        return enhanced

    async def _complete(self, prompt: str) -> Completion:
        raise NotImplementedError

    def _track(self, completion: Completion, timer: LLMTimer, mode: EnhanceMode, is_error: bool = False) -> None:
        track_llm_generation(
            distinct_id=self.distinct_id,
            provider=self.provider,
            model=self.model,
            input_tokens=completion.input_tokens,
            output_tokens=completion.output_tokens,
            latency_ms=timer.elapsed_ms,
            is_error=is_error,
            properties={"enhance_mode": str(mode)},
        )


class OpenAITransformer(LLMTransformer):
    """Rewrites story text with an OpenAI chat completion."""

    provider = "openai"

    def __init__(self, model: str | None = None, **kwargs):
        super().__init__(model or settings.openai_model, **kwargs)

    @_retry_transient
    async def _complete(self, prompt: str) -> Completion:
        client = openai_service.get_client()
        response = await client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        content = response.choices[0].message.content if response.choices else None
        usage = response.usage
        return Completion(
            text=content or "",
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )


class AnthropicTransformer(LLMTransformer):
    """Rewrites story text with a Claude message."""

    provider = "anthropic"

    def __init__(self, model: str | None = None, **kwargs):
        super().__init__(model or settings.claude_model, **kwargs)

    @_retry_transient
    async def _complete(self, prompt: str) -> Completion:
        client = anthropic_service.get_client()
        response = await client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            messages=[{"role": "user", "content": prompt}],
        )
        text = "".join(block.text for block in response.content if block.type == "text")
        return Completion(
            text=text,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


TRANSFORMERS: dict[str, type[LLMTransformer]] = {
    OpenAITransformer.provider: OpenAITransformer,
    AnthropicTransformer.provider: AnthropicTransformer,
}


def get_transformer() -> Transformer:
    """Build the transformer for the configured provider."""
    try:
        transformer_class = TRANSFORMERS[settings.enhance_provider]
    except KeyError:
        raise ValueError(f"Unknown enhance provider: {settings.enhance_provider}") from None
    return transformer_class()
