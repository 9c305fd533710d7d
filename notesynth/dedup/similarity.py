"""
Vector similarity for duplicate detection and title selection.
"""

import math
from typing import Sequence

DEFAULT_DUPLICATE_THRESHOLD = 0.95


def cosine_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """
    Calculate cosine similarity between two vectors

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Similarity score in [-1, 1] (higher = more similar). NaN when either
        vector has zero magnitude; NaN never passes a ``>`` comparison, so
        callers treat it as "not similar".
    """
    if len(vec1) != len(vec2):
        raise ValueError(f"Vector dimensions must match: {len(vec1)} vs {len(vec2)}")

    dot_product = sum(a * b for a, b in zip(vec1, vec2))

    magnitude1 = math.sqrt(sum(a * a for a in vec1))
    magnitude2 = math.sqrt(sum(b * b for b in vec2))

    if magnitude1 == 0 or magnitude2 == 0:
        return math.nan

    return dot_product / (magnitude1 * magnitude2)


def is_duplicate(similarity: float, threshold: float = DEFAULT_DUPLICATE_THRESHOLD) -> bool:
    """
    Determine if similarity score indicates a duplicate

    Args:
        similarity: Similarity score
        threshold: Similarity that must be exceeded (default: 0.95)

    Returns:
        True if similarity > threshold
    """
    return similarity > threshold
