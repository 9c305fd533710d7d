"""Windowed concurrent note generation.

Chunks are processed in consecutive windows of ``limit``. Calls inside a
window run concurrently; the next window starts only after every call of the
current one has finished. A failure anywhere aborts the whole batch once its
window has settled: no partial results are returned.
"""

import asyncio
from typing import Awaitable, Callable, List, Sequence, TypeVar

from tqdm import tqdm

from notesynth.model.schemas import Note
from notesynth.utils.logger import get_logger

logger = get_logger(__name__)

ChunkT = TypeVar("ChunkT")

DEFAULT_CONCURRENCY_LIMIT = 3


async def process_batches(
    chunks: Sequence[ChunkT],
    generate: Callable[[ChunkT], Awaitable[Note]],
    limit: int = DEFAULT_CONCURRENCY_LIMIT,
    show_progress: bool = False,
) -> List[Note]:
    """Generate one note per chunk with bounded concurrency.

    Args:
        chunks: Chunks in session order
        generate: Coroutine function producing the note for one chunk
        limit: Maximum calls in flight (window size)
        show_progress: Display a tqdm progress bar

    Returns:
        Notes in the same order as ``chunks``

    Raises:
        The first failure (in chunk order) of the failing window
    """
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")

    results: List[Note] = []
    total_windows = (len(chunks) + limit - 1) // limit

    with tqdm(total=len(chunks), desc="Generating notes", disable=not show_progress) as progress:
        for window_index, start in enumerate(range(0, len(chunks), limit)):
            window = chunks[start:start + limit]

            outcomes = await asyncio.gather(
                *(generate(chunk) for chunk in window),
                return_exceptions=True,
            )

            failures = [outcome for outcome in outcomes if isinstance(outcome, BaseException)]
            if failures:
                logger.error(
                    f"Window {window_index + 1}/{total_windows} failed "
                    f"({len(failures)}/{len(window)} calls), aborting batch"
                )
                raise failures[0]

            results.extend(outcomes)
            progress.update(len(window))

    return results
