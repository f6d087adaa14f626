"""Enums for block kinds, media types and enhancement modes."""

from enum import StrEnum


class BlockKind(StrEnum):
    """Kind of a top-level block in an authored story."""

    TEXT_PARAGRAPH = "text-paragraph"
    HEADING = "heading"
    LIST = "list"
    IMAGE = "image"
    VIDEO_EMBED = "video-embed"
    CAPTION = "caption"
    UNKNOWN = "unknown"

    @property
    def is_text(self) -> bool:
        return self in (BlockKind.TEXT_PARAGRAPH, BlockKind.HEADING, BlockKind.LIST)

    @property
    def is_media(self) -> bool:
        return self in (BlockKind.IMAGE, BlockKind.VIDEO_EMBED)


class MediaType(StrEnum):
    """Type of a media item carried through enhancement."""

    IMAGE = "image"
    VIDEO = "video"


class EnhanceMode(StrEnum):
    """How the AI writing assistant rewrites a story."""

    POLISH = "polish"
    EXPAND = "expand"
    SIMPLIFY = "simplify"

    @classmethod
    def parse(cls, value: str | None) -> "EnhanceMode":
        """Resolve a mode name, falling back to polish for unknown values."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.POLISH
