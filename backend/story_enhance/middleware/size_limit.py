"""Request body size limit middleware."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from story_enhance.config import settings

logger = logging.getLogger(__name__)


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject story payloads larger than max_size.

    Checks the Content-Length header before the body is read.
    """

    def __init__(self, app, max_size: int | None = None):
        super().__init__(app)
        self.max_size = max_size or settings.max_request_size_bytes

    async def dispatch(self, request: Request, call_next):
        declared = request.headers.get("content-length")
        if not declared:
            return await call_next(request)

        try:
            size = int(declared)
        except ValueError:
            # Malformed header, leave it to the server
            return await call_next(request)

        if size > self.max_size:
            logger.warning(
                f"Rejected {request.method} {request.url.path}: {size} bytes over {self.max_size}",
                extra={"content_length": size, "max_size": self.max_size},
            )
            return JSONResponse(
                status_code=413,
                content={"detail": f"Request body exceeds maximum size of {self.max_size} bytes"},
            )

        return await call_next(request)
