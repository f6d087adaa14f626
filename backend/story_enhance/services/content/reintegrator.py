"""Put media back into rewritten story text.

The rewritten text's paragraph boundaries have nothing to do with the
original's, so each media item's place is rescaled proportionally:

    target = round(position / max(1, M) * N)

where M is the number of distinct positions and N the number of rewritten
paragraphs. Items that shared a position stay together and in order. Any
group still unplaced after the last paragraph is appended at the end, so the
number of media items out always equals the number in.
"""

import logging
import math
import re

from story_enhance.services.content.models import ContentBlock, MediaItem, RichContent

logger = logging.getLogger(__name__)

_BLANK_LINE = re.compile(r"\n\s*\n")


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines into trimmed, non-empty paragraphs."""
    if not text:
        return []
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return [p.strip() for p in _BLANK_LINE.split(text) if p.strip()]


def group_media_by_position(media: list[MediaItem]) -> dict[int, list[MediaItem]]:
    """Group media by original position, in ascending position order.

    Items keep their relative order inside a group.
    """
    groups: dict[int, list[MediaItem]] = {}
    for item in media:
        groups.setdefault(item.position, []).append(item)
    return {position: groups[position] for position in sorted(groups)}


def compute_target_index(position: int, group_count: int, paragraph_count: int) -> int:
    """Rescale an original position onto the rewritten paragraph count.

    Rounds half up, so 0.5 goes to 1 rather than to the even neighbour.
    """
    return math.floor(position / max(1, group_count) * paragraph_count + 0.5)


def reintegrate(enhanced_text: str, media: list[MediaItem]) -> RichContent:
    """
    Build a story from rewritten text and the media lifted out of the original.

    Args:
        enhanced_text: Plain text returned by the rewriting service
        media: Media items from extraction, in document order

    Returns:
        RichContent of paragraph blocks interleaved with the original media markup
    """
    paragraphs = split_paragraphs(enhanced_text)
    if not media:
        return RichContent(blocks=[ContentBlock.paragraph(p) for p in paragraphs])

    groups = group_media_by_position(media)
    targets = {
        position: compute_target_index(position, len(groups), len(paragraphs))
        for position in groups
    }
    last_index = len(paragraphs) - 1
    placed: set[int] = set()
    blocks: list[ContentBlock] = []

    for index, paragraph in enumerate(paragraphs):
        blocks.append(ContentBlock.paragraph(paragraph))
        for position, items in groups.items():
            if position in placed:
                continue
            target = targets[position]
            if target == index or (index == last_index and target >= index):
                blocks.extend(item.to_block() for item in items)
                placed.add(position)

    leftover = [position for position in groups if position not in placed]
    for position in leftover:
        blocks.extend(item.to_block() for item in groups[position])

    if leftover:
        logger.info(
            f"Appended {len(leftover)} media groups after {len(paragraphs)} paragraphs",
            extra={"paragraph_count": len(paragraphs), "media_count": len(media)},
        )

    return RichContent(blocks=blocks)
