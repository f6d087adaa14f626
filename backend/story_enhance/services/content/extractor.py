"""Split a story into plain text for the AI and the media it must not touch."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from story_enhance.enums import BlockKind
from story_enhance.services.content.models import (
    PARAGRAPH_SEPARATOR,
    ContentBlock,
    ExtractedDocument,
    MediaItem,
    RichContent,
)
from story_enhance.services.content.parser import parse_rich_content

logger = logging.getLogger(__name__)


@dataclass
class _ExtractionState:
    paragraphs: list[str] = field(default_factory=list)
    media: list[MediaItem] = field(default_factory=list)
    dropped: int = 0


def _take_text(state: _ExtractionState, block: ContentBlock) -> None:
    text = (block.text_content or "").strip()
    if not text:
        state.dropped += 1
        return
    state.paragraphs.append(text)


def _take_media(state: _ExtractionState, block: ContentBlock) -> None:
    state.media.append(
        MediaItem(
            type=block.media_type,
            html=block.raw_markup,
            position=len(state.paragraphs),
        )
    )


def _skip_caption(state: _ExtractionState, block: ContentBlock) -> None:
    pass


def _drop(state: _ExtractionState, block: ContentBlock) -> None:
    state.dropped += 1


_HANDLERS: dict[BlockKind, Callable[[_ExtractionState, ContentBlock], None]] = {
    BlockKind.TEXT_PARAGRAPH: _take_text,
    BlockKind.HEADING: _take_text,
    BlockKind.LIST: _take_text,
    BlockKind.IMAGE: _take_media,
    BlockKind.VIDEO_EMBED: _take_media,
    BlockKind.CAPTION: _skip_caption,
    BlockKind.UNKNOWN: _drop,
}


def extract(document: RichContent | str) -> ExtractedDocument:
    """
    Separate a story's text from its media.

    Text blocks are joined with blank lines. Each media item records how many
    text blocks preceded it. Captions are skipped and unknown blocks dropped.

    Args:
        document: Parsed story, or the editor's HTML

    Returns:
        ExtractedDocument with text_only and media in document order
    """
    if isinstance(document, str):
        document = parse_rich_content(document)

    state = _ExtractionState()
    for block in document.blocks:
        _HANDLERS.get(block.kind, _drop)(state, block)

    logger.debug(
        f"Extracted {len(state.paragraphs)} text blocks and {len(state.media)} media items"
        f" ({state.dropped} blocks dropped)"
    )

    return ExtractedDocument(
        text_only=PARAGRAPH_SEPARATOR.join(state.paragraphs),
        media=state.media,
        text_block_count=len(state.paragraphs),
    )
