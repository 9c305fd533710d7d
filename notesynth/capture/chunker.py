"""Greedy chunking of captured text and items.

Text is split on whitespace and words are packed into chunks until the next
word would push the chunk past ``max_size``. Two sizing policies exist:

- ``"words"``: a chunk's size is its word count
- ``"chars"``: a chunk's size is the length of its words joined by single spaces

A pipeline picks exactly one policy. Structured items are packed the same way,
each item sized by its compact JSON serialization.
"""

from typing import Callable, List, Sequence, TypeVar

from notesynth.capture.extract import serialize_item
from notesynth.model.schemas import ContentItem
from notesynth.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

WORDS = "words"
CHARS = "chars"


def _pack(
    units: Sequence[T],
    max_size: int,
    unit_size: Callable[[T], int],
    separator_size: int,
) -> List[List[T]]:
    """Greedy packing shared by text and item chunking.

    A unit that alone exceeds ``max_size`` becomes a chunk of its own.
    """
    chunks: List[List[T]] = []
    current: List[T] = []
    current_size = 0

    for unit in units:
        size = unit_size(unit)
        added = size if not current else separator_size + size

        if current and current_size + added > max_size:
            chunks.append(current)
            current, current_size = [], 0
            added = size

        if not current and size > max_size:
            logger.warning(f"Single unit of size {size} exceeds chunk bound {max_size}; emitting it alone")

        current.append(unit)
        current_size += added

    if current:
        chunks.append(current)

    return chunks


def _check_args(max_size: int, policy: str) -> None:
    if policy not in (WORDS, CHARS):
        raise ValueError(f"Unknown chunk size policy: {policy!r}")
    if max_size < 1:
        raise ValueError(f"max_size must be positive, got {max_size}")


def chunk_text(text: str, max_size: int, policy: str = WORDS) -> List[str]:
    """Split text into bounded chunks along word boundaries.

    Args:
        text: Input text
        max_size: Maximum words (``"words"``) or characters (``"chars"``) per chunk
        policy: Sizing policy

    Returns:
        Chunks in order; empty list for empty or whitespace-only text
    """
    _check_args(max_size, policy)

    words = text.split()
    if not words:
        return []

    if policy == WORDS:
        packed = _pack(words, max_size, unit_size=lambda word: 1, separator_size=0)
    else:
        packed = _pack(words, max_size, unit_size=len, separator_size=1)

    return [" ".join(chunk) for chunk in packed]


def chunk_items(items: Sequence[ContentItem], max_size: int, policy: str = WORDS) -> List[List[ContentItem]]:
    """Group consecutive items into bounded chunks.

    Each item is measured by its JSON serialization: word count for
    ``"words"``, character count for ``"chars"``.
    """
    _check_args(max_size, policy)

    if policy == WORDS:
        return _pack(items, max_size, unit_size=lambda item: len(serialize_item(item).split()), separator_size=0)
    # Items are serialized as a JSON array, one comma between items
    return _pack(items, max_size, unit_size=lambda item: len(serialize_item(item)), separator_size=1)
