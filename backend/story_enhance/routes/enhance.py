"""AI writing assistant endpoints."""

import logging

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, Field

from story_enhance.config import settings
from story_enhance.enums import EnhanceMode, MediaType
from story_enhance.middleware.rate_limit import rate_limit_enhance
from story_enhance.services.content import MediaItem, extract, reintegrate
from story_enhance.services.enhancement import EnhancementPipeline, Transformer, get_transformer

logger = logging.getLogger(__name__)

router = APIRouter()


class MediaItemModel(BaseModel):
    type: MediaType
    html: str
    position: int = Field(..., ge=0)


class EnhanceRequest(BaseModel):
    content: str
    title: str | None = Field(default=None, max_length=settings.max_title_length)
    mode: str = EnhanceMode.POLISH


class EnhanceResponse(BaseModel):
    enhanced: str
    document: str
    mode: EnhanceMode
    media_count: int


class ExtractRequest(BaseModel):
    content: str


class ExtractResponse(BaseModel):
    text_only: str
    media: list[MediaItemModel]
    text_block_count: int


class ReintegrateRequest(BaseModel):
    enhanced_text: str
    media: list[MediaItemModel] = Field(default_factory=list)


class ReintegrateResponse(BaseModel):
    document: str
    media_count: int


def get_pipeline(transformer: Transformer = Depends(get_transformer)) -> EnhancementPipeline:
    """Build the enhancement pipeline around the configured transformer."""
    return EnhancementPipeline(transformer)


@router.post("/enhance", response_model=EnhanceResponse)
@rate_limit_enhance()
async def enhance_story(
    request: Request,
    response: Response,
    body: EnhanceRequest,
    pipeline: EnhancementPipeline = Depends(get_pipeline),
):
    """Rewrite a story's text with AI, keeping its images and embeds in place.

    The result is a suggestion; the caller decides whether to use it.
    """
    result = await pipeline.enhance(body.content, body.title, body.mode)
    return EnhanceResponse(
        enhanced=result.enhanced_text,
        document=result.html,
        mode=result.mode,
        media_count=result.media_count,
    )


@router.post("/extract", response_model=ExtractResponse)
async def extract_story(body: ExtractRequest):
    """Split a story into plain text and its media."""
    extracted = extract(body.content)
    return ExtractResponse(
        text_only=extracted.text_only,
        media=[
            MediaItemModel(type=item.type, html=item.html, position=item.position)
            for item in extracted.media
        ],
        text_block_count=extracted.text_block_count,
    )


@router.post("/reintegrate", response_model=ReintegrateResponse)
async def reintegrate_story(body: ReintegrateRequest):
    """Put media back into rewritten text."""
    media = [MediaItem(type=m.type, html=m.html, position=m.position) for m in body.media]
    document = reintegrate(body.enhanced_text, media)
    return ReintegrateResponse(document=document.to_html(), media_count=document.media_count)
