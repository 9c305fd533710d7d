"""
Deduplication node.

Drops near-duplicate capture items before text extraction. Never fails the
run: the deduplicator falls back to the original items on any error.
"""

from langchain_core.runnables import RunnableConfig

from notesynth.dedup.deduplicator import Deduplicator
from notesynth.utils.logger import get_logger
from notesynth.workflow.state import PipelineState
from notesynth.workflow.utils import get_runtime, get_settings

logger = get_logger(__name__)


async def deduplicate_items(state: PipelineState, config: RunnableConfig) -> PipelineState:
    items = state.get("items", [])
    settings = get_settings(config)
    stats = {**state.get("stats", {})}

    if not items or not settings.DEDUP_ENABLED:
        return {**state, "unique_items": list(items), "stats": stats}

    deduplicator = Deduplicator(
        embedder=get_runtime(config, "embedder"),
        threshold=settings.DUPLICATE_THRESHOLD,
    )
    unique_items = await deduplicator.deduplicate(items)

    stats["duplicates_removed"] = deduplicator.duplicates_removed
    stats["dedup_fell_back"] = deduplicator.fell_back

    return {**state, "unique_items": unique_items, "stats": stats}
