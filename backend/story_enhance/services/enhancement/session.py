"""Review state for one story going through the AI writing assistant.

Only one enhancement may be in flight at a time. A request that is cancelled,
or overtaken by a different mode, is not stopped on the provider side; its
response is simply ignored when it arrives. Nothing replaces the original
story until the author accepts the enhanced version.
"""

import logging

from story_enhance.enums import EnhanceMode
from story_enhance.exceptions import (
    EnhancementBusyError,
    EnhancementError,
    NoPendingEnhancementError,
)
from story_enhance.services.enhancement.pipeline import EnhancementPipeline, EnhancementResult

logger = logging.getLogger(__name__)


class EnhancementSession:
    """Tracks one author's enhance, review and accept cycle."""

    def __init__(self, pipeline: EnhancementPipeline, content_html: str, title: str | None = None):
        self.pipeline = pipeline
        self.original_html = content_html
        self.title = title
        self.mode = EnhanceMode.POLISH
        self.result: EnhancementResult | None = None
        self.edited_text: str | None = None
        self.error: str | None = None
        self._busy = False
        self._generation = 0

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def has_result(self) -> bool:
        return self.result is not None

    async def start(self, mode: EnhanceMode | str | None = None) -> EnhancementResult | None:
        """
        Request an enhanced version of the story.

        Returns:
            The result, or None if the request failed or was abandoned.
            On failure error holds the message to show the author.

        Raises:
            EnhancementBusyError: If another request is still pending
        """
        if self._busy:
            raise EnhancementBusyError()

        if mode is not None:
            self.mode = mode if isinstance(mode, EnhanceMode) else EnhanceMode.parse(mode)

        self._generation += 1
        generation = self._generation
        self._busy = True
        self.error = None
        self.result = None
        self.edited_text = None

        try:
            result = await self.pipeline.enhance(self.original_html, self.title, self.mode)
        except EnhancementError as e:
            if generation != self._generation:
                logger.debug(f"Ignoring failure of abandoned enhancement #{generation}")
                return None
            self.error = str(e)
            return None
        finally:
            if generation == self._generation:
                self._busy = False

        if generation != self._generation:
            logger.debug(f"Discarding stale enhancement #{generation}")
            return None

        self.result = result
        return result

    def cancel(self) -> None:
        """Abandon the pending request, if any."""
        if self._busy:
            logger.debug(f"Abandoning enhancement #{self._generation}")
            self._generation += 1
            self._busy = False

    def try_different_mode(self, mode: EnhanceMode | str | None = None) -> None:
        """Discard the current result so another mode can be requested."""
        self.cancel()
        self.result = None
        self.edited_text = None
        self.error = None
        if mode is not None:
            self.mode = mode if isinstance(mode, EnhanceMode) else EnhanceMode.parse(mode)

    def edit(self, text: str) -> None:
        """Replace the enhanced text with the author's edits."""
        if self.result is None:
            raise NoPendingEnhancementError()
        self.edited_text = text

    def preview(self) -> str:
        """HTML of the version that accept() would return."""
        if self.result is None:
            raise NoPendingEnhancementError()
        if self.edited_text is not None:
            return self.pipeline.reapply(self.result, self.edited_text).html
        return self.result.html

    def accept(self) -> str:
        """Use the enhanced version. Returns the story HTML to save."""
        html = self.preview()
        self._reset()
        return html

    def reject(self) -> str:
        """Keep the original. Returns the unchanged story HTML."""
        self._reset()
        return self.original_html

    def _reset(self) -> None:
        self.cancel()
        self.result = None
        self.edited_text = None
        self.error = None
