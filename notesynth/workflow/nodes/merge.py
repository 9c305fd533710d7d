"""
Merge node.

A single chunk note is the session note; several are merged.
"""

from langchain_core.runnables import RunnableConfig

from notesynth.generation.merger import merge_notes
from notesynth.workflow.state import PipelineState
from notesynth.workflow.utils import fail, get_runtime, get_settings


async def merge_session_notes(state: PipelineState, config: RunnableConfig) -> PipelineState:
    notes = state.get("notes", [])

    if len(notes) == 1:
        return {**state, "note": notes[0]}

    try:
        note = await merge_notes(
            notes,
            reference_label=state.get("reference_label") or state["custom_prompt"],
            embedder=get_runtime(config, "embedder"),
            tag_limit=get_settings(config).TAG_LIMIT,
        )
    except Exception as e:
        return fail(state, e)

    return {**state, "note": note}
