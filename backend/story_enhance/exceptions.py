"""Exception taxonomy for story enhancement.

Distinguishes between input the author must fix (don't retry) and failures of
the AI service (recoverable, the original story is kept).
"""


class EnhancementError(Exception):
    """Base class for enhancement errors."""

    user_message = "Failed to enhance story. Please try again."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.user_message)


class ContentTooShortError(EnhancementError):
    """The story does not have enough text to be worth rewriting."""

    user_message = "Please write at least a few sentences before enhancing"


class TransformerError(EnhancementError):
    """The AI rewriting service failed or is unavailable.

    Examples: network timeout, rate limiting, provider outage.
    """

    user_message = "AI service temporarily unavailable. Please try again."


class EmptyEnhancementError(TransformerError):
    """The AI rewriting service answered with no text."""

    user_message = "Failed to enhance story"


class EnhancementBusyError(EnhancementError):
    """An enhancement is already in flight for this session."""

    user_message = "An enhancement is already in progress"


class NoPendingEnhancementError(EnhancementError):
    """There is no enhanced version to accept or edit."""

    user_message = "There is no enhanced version to use"


# Provider exceptions worth retrying before giving up
TRANSIENT_ERRORS = (
    ConnectionError,
    TimeoutError,
)
