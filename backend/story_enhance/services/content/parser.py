"""Story HTML parsing into top-level content blocks."""

import logging

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from story_enhance.config import settings
from story_enhance.enums import BlockKind
from story_enhance.services.content.models import ContentBlock, RichContent

logger = logging.getLogger(__name__)

HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
LIST_TAGS = {"ul", "ol"}
EMPHASIS_TAGS = ["em", "i"]

# Wrapper classes the story editor puts on its embed nodes
EMBED_CLASSES = {"video-embed", "link-embed"}
EMBED_TAGS = {"iframe", "video"}


def flatten_text(element: Tag) -> str:
    """Return an element's inner text with whitespace collapsed."""
    return " ".join(element.get_text().split())


def _is_embed(element: Tag) -> bool:
    if element.name in EMBED_TAGS:
        return True
    if EMBED_CLASSES.intersection(element.get("class") or []):
        return True
    return element.find(class_=lambda c: c in EMBED_CLASSES) is not None


def _contains_image(element: Tag) -> bool:
    return element.name == "img" or element.find("img") is not None


def _is_caption(element: Tag, caption_prefix: str) -> bool:
    """A paragraph that opens with an emphasised caption marker and holds no image."""
    if element.name != "p" or element.find("img") is not None:
        return False
    first = next(
        (child for child in element.children if not (isinstance(child, NavigableString) and not child.strip())),
        None,
    )
    if not isinstance(first, Tag) or first.name not in EMPHASIS_TAGS:
        return False
    return flatten_text(first).startswith(caption_prefix)


def _list_text(element: Tag) -> str:
    items = []
    for li in element.find_all("li", recursive=False):
        text = flatten_text(li)
        if text:
            items.append(text)
    return "\n".join(items)


def classify_element(element: Tag, caption_prefix: str | None = None) -> ContentBlock:
    """Classify one top-level element into a content block.

    Embeds are checked before images because link cards carry preview images.
    Unrecognised or empty elements come back as BlockKind.UNKNOWN.
    """
    caption_prefix = caption_prefix or settings.caption_prefix
    markup = str(element)
    tag_name = element.name.lower() if element.name else ""

    if _is_embed(element):
        return ContentBlock(kind=BlockKind.VIDEO_EMBED, raw_markup=markup)

    if _is_caption(element, caption_prefix):
        return ContentBlock(kind=BlockKind.CAPTION, raw_markup=markup)

    if _contains_image(element):
        return ContentBlock(kind=BlockKind.IMAGE, raw_markup=markup)

    if tag_name == "p":
        kind, text = BlockKind.TEXT_PARAGRAPH, flatten_text(element)
    elif tag_name in HEADING_TAGS:
        kind, text = BlockKind.HEADING, flatten_text(element)
    elif tag_name in LIST_TAGS:
        kind, text = BlockKind.LIST, _list_text(element)
    else:
        return ContentBlock(kind=BlockKind.UNKNOWN, raw_markup=markup)

    if not text:
        return ContentBlock(kind=BlockKind.UNKNOWN, raw_markup=markup)

    return ContentBlock(kind=kind, raw_markup=markup, text_content=text)


def parse_rich_content(html_content: str, caption_prefix: str | None = None) -> RichContent:
    """
    Parse story HTML into its sequence of top-level blocks.

    Args:
        html_content: HTML produced by the story editor
        caption_prefix: Marker that identifies image captions (defaults to settings)

    Returns:
        RichContent with one block per top-level element, in document order
    """
    if not html_content or not html_content.strip():
        return RichContent()

    soup = BeautifulSoup(html_content, "lxml")
    body = soup.find("body")
    if body is None:
        return RichContent()

    blocks: list[ContentBlock] = []
    for node in body.children:
        if isinstance(node, Comment):
            continue
        if isinstance(node, NavigableString):
            if node.strip():
                blocks.append(ContentBlock(kind=BlockKind.UNKNOWN, raw_markup=str(node)))
            continue
        if isinstance(node, Tag):
            blocks.append(classify_element(node, caption_prefix))

    logger.debug(f"Parsed story HTML into {len(blocks)} blocks")
    return RichContent(blocks=blocks)
