"""Test configuration and shared fixtures."""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Override settings before importing app modules
os.environ["OPENAI_API_KEY"] = "test-openai-key"
os.environ["ANTHROPIC_API_KEY"] = "test-anthropic-key"
os.environ["ENHANCE_PROVIDER"] = "openai"
os.environ["ENHANCE_RETRY_BACKOFF_SECONDS"] = "0"
os.environ["POSTHOG_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["FRONTEND_URL"] = "http://localhost:3000"

from story_enhance.enums import EnhanceMode
from story_enhance.services.enhancement import get_transformer
from main import app

# Three text blocks with two images between them, plus an attribution caption
STORY_HTML = (
    "<h2>Harbour days</h2>"
    "<p>Every summer we walked down to the harbour at Mousehole to watch the boats come in.</p>"
    '<img src="https://cdn.example.com/harbour.jpg">'
    "<p><em>Photo: Jane Penrose</em></p>"
    "<p>My grandfather mended nets on the quay while the gulls argued over scraps.</p>"
)

LONG_REWRITE = (
    "Every summer we wandered down to Mousehole harbour to watch the boats return.\n\n"
    "The air smelled of salt and diesel.\n\n"
    "Grandfather sat on the quay mending nets.\n\n"
    "Above him the gulls argued over scraps."
)


class FakeTransformer:
    """Records calls and answers with a fixed rewrite."""

    def __init__(self, reply: str = LONG_REWRITE, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str | None, EnhanceMode]] = []

    async def __call__(self, text: str, title: str | None, mode: EnhanceMode) -> str:
        self.calls.append((text, title, mode))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def story_html() -> str:
    return STORY_HTML


@pytest.fixture
def long_rewrite() -> str:
    return LONG_REWRITE


@pytest.fixture
def make_transformer() -> type[FakeTransformer]:
    return FakeTransformer


@pytest.fixture
def fake_transformer() -> FakeTransformer:
    return FakeTransformer()


@pytest.fixture
async def client(fake_transformer) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with the rewriting service replaced by a fake."""
    app.dependency_overrides[get_transformer] = lambda: fake_transformer
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
