"""
Exception hierarchy for the note-synthesis pipeline.

Every error carries a human-readable message plus an optional ``details``
dictionary with context for logging.
"""

from typing import Any


class NoteSynthesisError(Exception):
    """Base exception for all note-synthesis errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class EmbeddingFailed(NoteSynthesisError):
    """Raised when the embedding provider cannot embed a text.

    Recovered locally by the deduplicator (the item is kept).
    """


class GenerationTimeout(NoteSynthesisError):
    """Raised when the model provider times out while generating a note."""

    USER_MESSAGE = "Note generation timed out. The text might be too long or the model is busy."

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(self.USER_MESSAGE, details)


class GenerationFailed(NoteSynthesisError):
    """Raised when the model provider fails for any reason other than a timeout."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None) -> None:
        self.reason = reason
        super().__init__(f"Failed to generate note: {reason or 'Unknown error'}", details)


class ResponseParseFailed(NoteSynthesisError):
    """Raised when a chat-style model reply cannot be parsed into a note."""


class EmptyMergeInput(NoteSynthesisError):
    """Raised when merge is called without any notes."""

    def __init__(self) -> None:
        super().__init__("Cannot merge empty notes list")


class NoChunksProduced(NoteSynthesisError):
    """Raised when the captured content yields no text to generate from."""


class NoNotesGenerated(NoteSynthesisError):
    """Raised when generation finished without producing a single note."""


class NotePipelineError(NoteSynthesisError):
    """Opaque failure reported by the top-level pipeline entry point.

    ``details["reason"]`` holds the diagnostic message of the underlying error,
    which is also chained as ``__cause__``.
    """
