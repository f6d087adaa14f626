"""Data models for rich story content."""

import html
import re
from dataclasses import dataclass, field

from story_enhance.enums import BlockKind, MediaType

PARAGRAPH_SEPARATOR = "\n\n"


@dataclass
class ContentBlock:
    """A paragraph-level unit of a story."""

    kind: BlockKind
    raw_markup: str
    text_content: str | None = None

    @property
    def is_text(self) -> bool:
        return self.kind.is_text

    @property
    def is_media(self) -> bool:
        return self.kind.is_media

    @property
    def media_type(self) -> MediaType | None:
        if self.kind == BlockKind.IMAGE:
            return MediaType.IMAGE
        if self.kind == BlockKind.VIDEO_EMBED:
            return MediaType.VIDEO
        return None

    @classmethod
    def paragraph(cls, text: str) -> "ContentBlock":
        """Wrap plain text as a paragraph block."""
        return cls(
            kind=BlockKind.TEXT_PARAGRAPH,
            raw_markup=f"<p>{html.escape(text, quote=False)}</p>",
            text_content=text,
        )


@dataclass
class MediaItem:
    """An image or embed lifted out of a story, replayed verbatim later.

    position is the number of text blocks that came before the item.
    """

    type: MediaType
    html: str
    position: int

    def to_block(self) -> ContentBlock:
        kind = BlockKind.IMAGE if self.type == MediaType.IMAGE else BlockKind.VIDEO_EMBED
        return ContentBlock(kind=kind, raw_markup=self.html)


@dataclass
class ExtractedDocument:
    """Plain text and media split out of a story."""

    text_only: str
    media: list[MediaItem] = field(default_factory=list)
    text_block_count: int = 0

    @property
    def paragraphs(self) -> list[str]:
        if not self.text_only:
            return []
        return [p for p in re.split(r"\n\s*\n", self.text_only) if p.strip()]


@dataclass
class RichContent:
    """An ordered sequence of top-level blocks."""

    blocks: list[ContentBlock] = field(default_factory=list)

    @property
    def text_blocks(self) -> list[ContentBlock]:
        return [b for b in self.blocks if b.is_text]

    @property
    def media_blocks(self) -> list[ContentBlock]:
        return [b for b in self.blocks if b.is_media]

    @property
    def media_count(self) -> int:
        return len(self.media_blocks)

    def to_html(self) -> str:
        return "".join(block.raw_markup for block in self.blocks)
