"""Story content extraction and media reintegration."""

from story_enhance.services.content.extractor import extract
from story_enhance.services.content.models import (
    ContentBlock,
    ExtractedDocument,
    MediaItem,
    RichContent,
)
from story_enhance.services.content.parser import parse_rich_content
from story_enhance.services.content.reintegrator import reintegrate

__all__ = [
    "ContentBlock",
    "ExtractedDocument",
    "MediaItem",
    "RichContent",
    "extract",
    "parse_rich_content",
    "reintegrate",
]
