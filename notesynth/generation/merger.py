"""
Merge of chunk-level notes into one note per recording session.
"""

import math
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from notesynth.dedup.embedder import EmbeddingProvider
from notesynth.dedup.similarity import cosine_similarity
from notesynth.errors import EmptyMergeInput
from notesynth.model.schemas import Note
from notesynth.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TAG_LIMIT = 4


async def select_title(titles: Sequence[str], reference_label: str, embedder: Optional[EmbeddingProvider]) -> str:
    """Pick the title semantically closest to ``reference_label``.

    Strict ``>`` comparison: on a tie the earlier title wins. Titles scoring
    NaN never win; if none scores, or no embedder is configured, the first
    title is returned.
    """
    if embedder is None:
        logger.warning("No embedding provider configured, using the first title")
        return titles[0]

    reference = await embedder.embed(reference_label)

    best_title = None
    best_score = -math.inf
    for title in titles:
        score = cosine_similarity(reference, await embedder.embed(title))
        if score > best_score:
            best_score = score
            best_title = title

    if best_title is None:
        logger.warning("No title could be scored against the reference label, using the first one")
        return titles[0]
    return best_title


def join_contents(contents: Iterable[str]) -> str:
    return "\n\n".join(contents)


def get_top_tags(tags: Iterable[str], limit: int = DEFAULT_TAG_LIMIT) -> List[str]:
    """Most frequent tags, highest count first.

    Counter keeps first-seen order and ``most_common`` sorts stably, so tags
    with equal counts stay in the order they first appeared.
    """
    return [tag for tag, _ in Counter(tags).most_common(limit)]


async def merge_notes(
    notes: Sequence[Note],
    reference_label: str,
    embedder: Optional[EmbeddingProvider],
    tag_limit: int = DEFAULT_TAG_LIMIT,
) -> Note:
    """
    Consolidate chunk notes into a single note.

    Notes must already be in chronological order; the merged window runs from
    the first note's start to the last note's end.

    Args:
        notes: Notes generated for the same session
        reference_label: Label the title is matched against (custom prompt or tag)
        embedder: Embedding provider used for title selection; None keeps the
            first title
        tag_limit: Number of tags kept

    Raises:
        EmptyMergeInput: notes is empty
    """
    if not notes:
        raise EmptyMergeInput()

    titles = [note.title for note in notes]
    all_tags = [tag for note in notes for tag in note.tags]

    title = await select_title(titles, reference_label, embedder)

    return Note(
        title=title,
        content=join_contents(note.content for note in notes),
        tags=get_top_tags(all_tags, tag_limit),
        start_time=notes[0].start_time,
        end_time=notes[-1].end_time,
    )
