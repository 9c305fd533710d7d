"""Configuration settings for note synthesis.

Centralized configuration for the pipeline variant (input mode, generation
backend, chunk sizing), deduplication, retry logic and processing parameters.
"""

from dataclasses import dataclass
from typing import List, Optional

from notesynth.errors import GenerationTimeout

PIPELINE_MODES = ("ocr-text", "structured-items")
GENERATION_BACKENDS = ("structured", "chat")
CHUNK_SIZE_POLICIES = ("words", "chars")

# Default chunk bound per sizing policy
DEFAULT_MAX_CHUNK_SIZE = {
    "words": 1024,
    "chars": 250000,
}


@dataclass
class PipelineConfig:
    """Selects one variant of the note pipeline."""

    # Input handling
    MODE: str = "ocr-text"  # "ocr-text" | "structured-items"
    CLEAN_OCR_TEXT: bool = True  # Lowercase, strip punctuation, drop stopwords

    # Model call style
    GENERATION_BACKEND: str = "structured"  # "structured" | "chat"

    # Chunking
    CHUNK_SIZE_POLICY: str = "words"  # "words" | "chars", never mixed
    MAX_CHUNK_SIZE: Optional[int] = None  # None uses DEFAULT_MAX_CHUNK_SIZE[policy]

    # Batch generation
    CONCURRENCY_LIMIT: int = 3  # Generation calls in flight per window

    # Deduplication
    DEDUP_ENABLED: bool = True
    DUPLICATE_THRESHOLD: float = 0.95  # Cosine similarity above this is a duplicate

    # Merge
    TAG_LIMIT: int = 4

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if self.MODE not in PIPELINE_MODES:
            raise ValueError(f"Unknown pipeline mode: {self.MODE!r} (expected one of {PIPELINE_MODES})")
        if self.GENERATION_BACKEND not in GENERATION_BACKENDS:
            raise ValueError(
                f"Unknown generation backend: {self.GENERATION_BACKEND!r} (expected one of {GENERATION_BACKENDS})"
            )
        if self.CHUNK_SIZE_POLICY not in CHUNK_SIZE_POLICIES:
            raise ValueError(
                f"Unknown chunk size policy: {self.CHUNK_SIZE_POLICY!r} (expected one of {CHUNK_SIZE_POLICIES})"
            )
        if self.MAX_CHUNK_SIZE is not None and self.MAX_CHUNK_SIZE < 1:
            raise ValueError(f"MAX_CHUNK_SIZE must be positive, got {self.MAX_CHUNK_SIZE}")
        if self.CONCURRENCY_LIMIT < 1:
            raise ValueError(f"CONCURRENCY_LIMIT must be positive, got {self.CONCURRENCY_LIMIT}")
        if self.TAG_LIMIT < 1:
            raise ValueError(f"TAG_LIMIT must be positive, got {self.TAG_LIMIT}")

    @property
    def max_chunk_size(self) -> int:
        """Effective chunk bound for the selected sizing policy."""
        if self.MAX_CHUNK_SIZE is not None:
            return self.MAX_CHUNK_SIZE
        return DEFAULT_MAX_CHUNK_SIZE[self.CHUNK_SIZE_POLICY]


@dataclass
class RetryConfig:
    """Caller-side retry around each generation call."""

    MAX_RETRY_ATTEMPTS: int = 1  # 1 = no retry

    # Exponential backoff delays (seconds)
    RETRY_DELAYS: List[int] = None

    # Exceptions to retry
    RETRYABLE_EXCEPTIONS: tuple = (GenerationTimeout,)

    def __post_init__(self):
        """Initialize default values for mutable fields."""
        if self.RETRY_DELAYS is None:
            self.RETRY_DELAYS = [1, 2, 4]  # 1s, 2s, 4s exponential backoff


@dataclass
class ProcessingConfig:
    """Model and logging settings used by the CLI."""

    # Model configuration
    DEFAULT_MODEL_VERSION: str = "gemini-2.5-flash"
    EMBEDDING_MODEL: str = "text-embedding-3-small"

    # Logging
    LOG_LEVEL: str = "INFO"
    JSON_LOGGING: bool = False  # Use JSON format for production


@dataclass
class ApplicationConfig:
    """Master application configuration."""

    pipeline: PipelineConfig = None
    retry: RetryConfig = None
    processing: ProcessingConfig = None

    def __post_init__(self):
        """Initialize default configurations."""
        if self.pipeline is None:
            self.pipeline = PipelineConfig()
        if self.retry is None:
            self.retry = RetryConfig()
        if self.processing is None:
            self.processing = ProcessingConfig()


# Global configuration instance
config = ApplicationConfig()


def get_config() -> ApplicationConfig:
    """Get global application configuration.

    Example:
        from notesynth.orchestrator.config import get_config

        cfg = get_config()
        limit = cfg.pipeline.CONCURRENCY_LIMIT
        threshold = cfg.pipeline.DUPLICATE_THRESHOLD
    """
    return config


def update_config(**kwargs) -> None:
    """Update configuration values dynamically.

    Args:
        **kwargs: Configuration values to update

    Example:
        update_config(
            CHUNK_SIZE_POLICY="chars",
            MAX_RETRY_ATTEMPTS=3,
        )
    """
    for key, value in kwargs.items():
        # Check which config section contains the key
        if hasattr(config.pipeline, key):
            setattr(config.pipeline, key, value)
        elif hasattr(config.retry, key):
            setattr(config.retry, key, value)
        elif hasattr(config.processing, key):
            setattr(config.processing, key, value)
        else:
            raise ValueError(f"Unknown configuration key: {key}")

    config.pipeline.validate()
