"""
Note generation node.

Fans chunks out to the note generator through the batch scheduler. The
generator variant follows the chunk kind and the configured backend.
"""

from functools import partial

from langchain_core.runnables import RunnableConfig

from notesynth.errors import GenerationFailed, NoNotesGenerated
from notesynth.generation.generator import generate_note, generate_note_from_items, generate_note_via_chat
from notesynth.orchestrator.batch import process_batches
from notesynth.utils.logger import get_logger
from notesynth.utils.retry import retry_with_backoff
from notesynth.workflow.state import PipelineState
from notesynth.workflow.utils import fail, get_retry_settings, get_runtime, get_settings

logger = get_logger(__name__)


async def generate_notes(state: PipelineState, config: RunnableConfig) -> PipelineState:
    settings = get_settings(config)
    retry = get_retry_settings(config)
    provider = get_runtime(config, "model_provider")
    chunks = state.get("chunks", [])

    if provider is None:
        return fail(state, GenerationFailed("no model provider configured"))

    if settings.GENERATION_BACKEND == "chat":
        generator = generate_note_via_chat
    elif chunks and isinstance(chunks[0], str):
        generator = generate_note
    else:
        generator = generate_note_from_items

    generate_one = partial(
        generator,
        provider=provider,
        start_time=state["start_time"],
        end_time=state["end_time"],
        custom_prompt=state["custom_prompt"],
        model_name=getattr(provider, "model_name", None),
    )

    async def generate(chunk):
        return await retry_with_backoff(
            generate_one,
            chunk,
            max_attempts=retry.MAX_RETRY_ATTEMPTS,
            delays=retry.RETRY_DELAYS,
            exceptions=retry.RETRYABLE_EXCEPTIONS,
        )

    try:
        notes = await process_batches(
            chunks,
            generate,
            limit=settings.CONCURRENCY_LIMIT,
            show_progress=get_runtime(config, "show_progress", False),
        )
    except Exception as e:
        logger.error(f"Note generation aborted: {e}")
        return fail(state, e)

    if not notes:
        return fail(state, NoNotesGenerated("Failed to generate any notes"))

    stats = {**state.get("stats", {})}
    stats["total_notes"] = len(notes)

    return {**state, "notes": notes, "stats": stats}
