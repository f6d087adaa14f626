import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from story_enhance.config import settings
from story_enhance.exceptions import (
    ContentTooShortError,
    EmptyEnhancementError,
    EnhancementBusyError,
    EnhancementError,
    TransformerError,
)
from story_enhance.middleware import RequestSizeLimitMiddleware, limiter
from story_enhance.routes import enhance, health
from story_enhance.services.anthropic import close_client as close_anthropic_client
from story_enhance.services.openai import close_client as close_openai_client
from story_enhance.services.posthog import shutdown_posthog

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


class CSRFProtectionMiddleware(BaseHTTPMiddleware):
    """Validate Origin header for state-changing requests to prevent CSRF."""

    async def dispatch(self, request: Request, call_next):
        # Only check state-changing methods
        if request.method in ("POST", "PUT", "DELETE", "PATCH"):
            origin = request.headers.get("origin")
            # Allow requests without Origin (same-origin, non-browser)
            if origin and origin not in settings.cors_origins:
                return JSONResponse(
                    status_code=403,
                    content={"detail": "CSRF validation failed: invalid origin"},
                )
        return await call_next(request)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Shutdown - cleanup SDK clients
    await close_openai_client()
    await close_anthropic_client()
    shutdown_posthog()


app = FastAPI(
    title="Story Enhance API",
    description="AI writing assistant that rewrites stories without losing their media",
    version="0.1.0",
    lifespan=lifespan,
)

# Rate limiter state (required by slowapi)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Status per failure; the original story is never touched on any of them
ERROR_STATUS: list[tuple[type[EnhancementError], int]] = [
    (ContentTooShortError, 400),
    (EnhancementBusyError, 409),
    (EmptyEnhancementError, 500),
    (TransformerError, 502),
]


@app.exception_handler(EnhancementError)
async def enhancement_error_handler(request: Request, exc: EnhancementError):
    status_code = next(
        (code for error_type, code in ERROR_STATUS if isinstance(exc, error_type)),
        500,
    )
    if status_code >= 500:
        logger.error(f"Story enhancement failed: {exc!r}", exc_info=exc.__cause__)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


# Request size limit middleware (prevents memory exhaustion)
app.add_middleware(RequestSizeLimitMiddleware)

# CSRF protection - validates Origin header for state-changing requests
app.add_middleware(CSRFProtectionMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(enhance.router, prefix="/api/ai", tags=["ai"])
app.include_router(health.router, prefix="/api/health", tags=["health"])
