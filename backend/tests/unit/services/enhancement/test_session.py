"""Tests for the enhance, review and accept cycle."""

import asyncio

import pytest

from story_enhance.enums import EnhanceMode
from story_enhance.exceptions import (
    EnhancementBusyError,
    NoPendingEnhancementError,
    TransformerError,
)
from story_enhance.services.enhancement import EnhancementPipeline, EnhancementSession


class GatedTransformer:
    """Holds polish requests until released; other modes answer at once."""

    def __init__(self):
        self.gate = asyncio.Event()

    async def __call__(self, text: str, title: str | None, mode: EnhanceMode) -> str:
        if mode == EnhanceMode.POLISH:
            await self.gate.wait()
            return "Late polished text.\n\nSecond paragraph."
        return f"Fresh {mode} text.\n\nSecond paragraph."


@pytest.fixture
def session(fake_transformer, story_html) -> EnhancementSession:
    return EnhancementSession(EnhancementPipeline(fake_transformer), story_html, "Harbour days")


@pytest.fixture
def gated() -> GatedTransformer:
    return GatedTransformer()


@pytest.fixture
def gated_session(gated, story_html) -> EnhancementSession:
    return EnhancementSession(EnhancementPipeline(gated), story_html, "Harbour days")


class TestStart:
    """Tests for EnhancementSession.start."""

    @pytest.mark.asyncio
    async def test_stores_result(self, session):
        result = await session.start(EnhanceMode.EXPAND)

        assert result is not None
        assert session.result is result
        assert session.mode == EnhanceMode.EXPAND
        assert not session.is_busy
        assert session.error is None

    @pytest.mark.asyncio
    async def test_busy_while_pending(self, gated, gated_session):
        task = asyncio.create_task(gated_session.start())
        await asyncio.sleep(0)

        assert gated_session.is_busy
        with pytest.raises(EnhancementBusyError):
            await gated_session.start()

        gated.gate.set()
        assert await task is not None
        assert not gated_session.is_busy

    @pytest.mark.asyncio
    async def test_failure_sets_error_and_keeps_original(self, make_transformer, story_html):
        pipeline = EnhancementPipeline(make_transformer(error=TransformerError()))
        session = EnhancementSession(pipeline, story_html)

        assert await session.start() is None

        assert session.error == "AI service temporarily unavailable. Please try again."
        assert session.result is None
        assert not session.is_busy
        assert session.reject() == story_html

    @pytest.mark.asyncio
    async def test_short_story_sets_error(self, fake_transformer):
        session = EnhancementSession(EnhancementPipeline(fake_transformer), "<p>Hi</p>")

        assert await session.start() is None
        assert session.error == "Please write at least a few sentences before enhancing"


class TestCancel:
    """Tests for abandoning a pending request."""

    @pytest.mark.asyncio
    async def test_cancelled_response_discarded(self, gated, gated_session):
        task = asyncio.create_task(gated_session.start())
        await asyncio.sleep(0)

        gated_session.cancel()
        assert not gated_session.is_busy

        gated.gate.set()
        assert await task is None
        assert gated_session.result is None

    @pytest.mark.asyncio
    async def test_different_mode_overtakes_pending_request(self, gated, gated_session):
        stale = asyncio.create_task(gated_session.start(EnhanceMode.POLISH))
        await asyncio.sleep(0)

        gated_session.try_different_mode(EnhanceMode.SIMPLIFY)
        fresh = await gated_session.start()

        gated.gate.set()
        assert await stale is None
        assert gated_session.result is fresh
        assert fresh.enhanced_text.startswith("Fresh simplify text.")
        assert not gated_session.is_busy

    def test_cancel_when_idle_is_noop(self, session):
        session.cancel()

        assert not session.is_busy


class TestReview:
    """Tests for editing, accepting and rejecting."""

    @pytest.mark.asyncio
    async def test_accept_returns_enhanced_html(self, session):
        result = await session.start()

        html = session.accept()

        assert html == result.html
        assert "harbour.jpg" in html
        assert not session.has_result

    @pytest.mark.asyncio
    async def test_accept_uses_edits(self, session):
        await session.start()
        session.edit("My rewrite.\n\nStill mine.")

        html = session.accept()

        assert html.startswith("<p>My rewrite.</p><p>Still mine.</p>")
        assert "harbour.jpg" in html

    @pytest.mark.asyncio
    async def test_reject_returns_original(self, session, story_html):
        await session.start()

        assert session.reject() == story_html
        assert not session.has_result

    @pytest.mark.asyncio
    async def test_try_different_mode_clears_result(self, session):
        await session.start()

        session.try_different_mode("expand")

        assert not session.has_result
        assert session.mode == EnhanceMode.EXPAND

    def test_accept_without_result(self, session):
        with pytest.raises(NoPendingEnhancementError):
            session.accept()

    def test_edit_without_result(self, session):
        with pytest.raises(NoPendingEnhancementError):
            session.edit("text")
