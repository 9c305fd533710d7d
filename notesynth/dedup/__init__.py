"""
Deduplication of captured content

This package provides item-level deduplication using:
- Embedding generation (OpenAI text-embedding-3-small)
- Cosine similarity against the items kept so far in the run
"""

from .deduplicator import Deduplicator
from .embedder import EmbeddingProvider, OpenAIEmbedder
from .similarity import cosine_similarity, is_duplicate

__all__ = [
    'Deduplicator',
    'EmbeddingProvider',
    'OpenAIEmbedder',
    'cosine_similarity',
    'is_duplicate',
]
