"""
Embedding-based deduplication of captured content items.

Each item is embedded and compared against the embeddings kept earlier in the
same run; near-duplicates are dropped. The step fails open: a single embedding
failure keeps that item, and any other failure returns the input unchanged.
"""

from typing import Dict, List, Optional, Sequence

from notesynth.capture.extract import item_text
from notesynth.dedup.embedder import EmbeddingProvider
from notesynth.dedup.similarity import DEFAULT_DUPLICATE_THRESHOLD, cosine_similarity, is_duplicate
from notesynth.model.schemas import ContentItem
from notesynth.utils.logger import get_logger

logger = get_logger(__name__)


class Deduplicator:
    """
    Drop items whose embedding is a near-duplicate of an already kept item.

    Statistics of the last run are kept on the instance (see ``get_stats``).
    """

    def __init__(
        self,
        embedder: Optional[EmbeddingProvider],
        threshold: float = DEFAULT_DUPLICATE_THRESHOLD,
    ):
        """
        Args:
            embedder: Embedding provider; None disables deduplication
            threshold: Similarity that must be exceeded to count as duplicate
        """
        self.embedder = embedder
        self.threshold = threshold
        self._reset_stats()

    def _reset_stats(self) -> None:
        self.total_items = 0
        self.duplicates_removed = 0
        self.embedding_failures = 0
        self.fell_back = False

    async def deduplicate(self, items: Sequence[ContentItem]) -> List[ContentItem]:
        """
        Filter near-duplicate items, preserving input order.

        Args:
            items: Captured content items

        Returns:
            Kept items; the original sequence when deduplication could not run
        """
        self._reset_stats()
        self.total_items = len(items)

        if not items:
            return list(items)

        if self.embedder is None:
            logger.warning("No embedding provider configured, skipping deduplication")
            self.fell_back = True
            return list(items)

        try:
            unique_items = await self._filter(items)
        except Exception as e:
            logger.warning(f"Deduplication failed, using original data: {e}")
            self.duplicates_removed = 0
            self.fell_back = True
            return list(items)

        logger.info(
            f"Deduplication: removed {self.duplicates_removed} duplicates from {len(items)} items"
        )
        return unique_items

    async def _filter(self, items: Sequence[ContentItem]) -> List[ContentItem]:
        kept_embeddings: List[List[float]] = []
        unique_items: List[ContentItem] = []

        for item in items:
            text = item_text(item)

            if not text.strip():
                unique_items.append(item)
                continue

            try:
                embedding = await self.embedder.embed(text)
            except Exception as e:
                logger.warning(f"Embedding failed for item, keeping it: {e}")
                self.embedding_failures += 1
                unique_items.append(item)
                continue

            if any(
                is_duplicate(cosine_similarity(embedding, kept), self.threshold)
                for kept in kept_embeddings
            ):
                self.duplicates_removed += 1
                continue

            kept_embeddings.append(embedding)
            unique_items.append(item)

        return unique_items

    def get_stats(self) -> Dict:
        """Statistics of the last ``deduplicate`` call"""
        return {
            'total_items': self.total_items,
            'duplicates_removed': self.duplicates_removed,
            'embedding_failures': self.embedding_failures,
            'fell_back': self.fell_back,
            'similarity_threshold': self.threshold,
        }
