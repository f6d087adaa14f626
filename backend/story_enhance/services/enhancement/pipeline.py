"""Media-preserving story enhancement pipeline.

story HTML -> extract -> transformer(text only) -> reintegrate -> new story HTML
"""

import logging
from dataclasses import dataclass

from story_enhance.config import settings
from story_enhance.enums import EnhanceMode
from story_enhance.exceptions import ContentTooShortError, EmptyEnhancementError
from story_enhance.services.content import (
    ExtractedDocument,
    RichContent,
    extract,
    parse_rich_content,
    reintegrate,
)
from story_enhance.services.enhancement.transformer import Transformer

logger = logging.getLogger(__name__)


@dataclass
class EnhancementResult:
    """A rewritten story offered to the author for review."""

    original_html: str
    mode: EnhanceMode
    extracted: ExtractedDocument
    enhanced_text: str
    document: RichContent

    @property
    def html(self) -> str:
        return self.document.to_html()

    @property
    def media_count(self) -> int:
        return self.document.media_count


class EnhancementPipeline:
    """Runs a story through a text-only transformer without losing its media."""

    def __init__(self, transformer: Transformer, min_content_length: int | None = None):
        self.transformer = transformer
        self.min_content_length = (
            settings.min_content_length if min_content_length is None else min_content_length
        )

    def prepare(self, content_html: str) -> ExtractedDocument:
        """
        Extract a story and check it has enough text to rewrite.

        Raises:
            ContentTooShortError: If the text is under min_content_length characters
        """
        extracted = extract(parse_rich_content(content_html))
        if len(extracted.text_only.strip()) < self.min_content_length:
            raise ContentTooShortError()
        return extracted

    async def enhance(
        self,
        content_html: str,
        title: str | None,
        mode: EnhanceMode | str = EnhanceMode.POLISH,
    ) -> EnhancementResult:
        """
        Rewrite a story's text and put its media back.

        Either a complete result is returned or an exception is raised; the
        original HTML is never modified.

        Args:
            content_html: Story HTML from the editor
            title: Story title, passed to the transformer for context
            mode: polish, expand or simplify

        Returns:
            EnhancementResult holding the rewritten story

        Raises:
            ContentTooShortError: If the story has too little text
            TransformerError: If the rewriting service fails
            EmptyEnhancementError: If the rewriting service returns no text
        """
        if not isinstance(mode, EnhanceMode):
            mode = EnhanceMode.parse(mode)

        extracted = self.prepare(content_html)
        enhanced_text = await self.transformer(extracted.text_only, title, mode)

        if not enhanced_text or not enhanced_text.strip():
            raise EmptyEnhancementError()

        document = reintegrate(enhanced_text, extracted.media)
        logger.info(
            f"Enhanced story ({mode}): {extracted.text_block_count} -> "
            f"{len(document.text_blocks)} paragraphs, {document.media_count} media items",
            extra={"mode": str(mode), "media_count": document.media_count},
        )

        return EnhancementResult(
            original_html=content_html,
            mode=mode,
            extracted=extracted,
            enhanced_text=enhanced_text,
            document=document,
        )

    def reapply(self, result: EnhancementResult, edited_text: str) -> EnhancementResult:
        """Rebuild a result from the author's edits to the enhanced text."""
        document = reintegrate(edited_text, result.extracted.media)
        return EnhancementResult(
            original_html=result.original_html,
            mode=result.mode,
            extracted=result.extracted,
            enhanced_text=edited_text,
            document=document,
        )
