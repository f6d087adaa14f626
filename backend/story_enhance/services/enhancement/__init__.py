"""AI writing assistant services."""

from story_enhance.services.enhancement.pipeline import EnhancementPipeline, EnhancementResult
from story_enhance.services.enhancement.prompts import build_prompt
from story_enhance.services.enhancement.session import EnhancementSession
from story_enhance.services.enhancement.transformer import (
    AnthropicTransformer,
    OpenAITransformer,
    Transformer,
    get_transformer,
)

__all__ = [
    "AnthropicTransformer",
    "EnhancementPipeline",
    "EnhancementResult",
    "EnhancementSession",
    "OpenAITransformer",
    "Transformer",
    "build_prompt",
    "get_transformer",
]
