"""
Embedding generation for deduplication and title selection

Supports:
- OpenAI text-embedding-3-small (default)
- Retry with exponential backoff
- Token and cost tracking
"""

import os
from typing import Dict, List, Optional, Protocol

from dotenv import load_dotenv
from openai import AsyncOpenAI

from notesynth.errors import EmbeddingFailed
from notesynth.utils.logger import get_logger
from notesynth.utils.retry import retry_with_backoff

load_dotenv()

logger = get_logger(__name__)


class EmbeddingProvider(Protocol):
    """Converts a text to a fixed-dimension vector; may fail per call."""

    async def embed(self, text: str) -> List[float]:
        ...


class OpenAIEmbedder:
    """
    Embed texts with the OpenAI embeddings API

    Features:
    - Automatic retry with exponential backoff
    - Cost tracking
    """

    # Pricing: text-embedding-3-small
    COST_PER_1M_TOKENS = 0.02  # $0.02 per 1M tokens

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize embedder

        Args:
            model: OpenAI embedding model (default: text-embedding-3-small)
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            base_url: Alternative OpenAI-compatible endpoint (e.g. a local server)
            max_retries: Maximum attempts per text
            retry_delay: Initial delay between retries (doubles each retry)
            client: Preconfigured AsyncOpenAI client (skips key lookup)
        """
        self.model = model
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        if client is None:
            api_key = api_key or os.getenv("OPENAI_API_KEY")
            if not api_key:
                raise ValueError(
                    "OpenAI API key required. "
                    "Set OPENAI_API_KEY environment variable or pass api_key parameter."
                )
            client = AsyncOpenAI(api_key=api_key, base_url=base_url or os.getenv("OPENAI_BASE_URL"))

        self.client = client

        # Track costs and usage
        self.total_tokens = 0
        self.total_cost_cents = 0.0

    def _calculate_cost(self, token_count: int) -> float:
        """Calculate cost in cents for given token count"""
        return (token_count / 1_000_000) * self.COST_PER_1M_TOKENS * 100

    async def _create_embedding(self, text: str) -> List[float]:
        response = await self.client.embeddings.create(
            model=self.model,
            input=text,
        )

        token_count = response.usage.total_tokens if response.usage else 0
        self.total_tokens += token_count
        self.total_cost_cents += self._calculate_cost(token_count)

        return list(response.data[0].embedding)

    async def embed(self, text: str) -> List[float]:
        """
        Generate embedding for a single text

        Raises:
            EmbeddingFailed: after all attempts failed
        """
        delays = [self.retry_delay * (2 ** attempt) for attempt in range(max(self.max_retries - 1, 1))]
        try:
            return await retry_with_backoff(
                self._create_embedding,
                text,
                max_attempts=self.max_retries,
                delays=delays,
            )
        except Exception as e:
            raise EmbeddingFailed(
                f"Failed to generate embedding after {self.max_retries} attempts: {e}",
                details={"model": self.model, "text_length": len(text)},
            ) from e

    def get_usage_stats(self) -> Dict:
        """Get usage statistics"""
        return {
            'total_tokens': self.total_tokens,
            'total_cost_cents': self.total_cost_cents,
            'total_cost_dollars': self.total_cost_cents / 100,
            'model': self.model,
        }

    def reset_stats(self):
        """Reset usage statistics"""
        self.total_tokens = 0
        self.total_cost_cents = 0.0
