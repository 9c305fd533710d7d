"""
LangGraph note pipeline.

Captured items → dedupe → text extraction → chunking → batched generation →
merge → one Note.

```
[dedupe] → [extract_text] → [chunk]
                               │
                               ├── (error) ──→ [finalize] ──→ END
                               │
                               └── [generate]
                                      │
                                      ├── (error) ──→ [finalize]
                                      │
                                      └── [merge] ──→ [finalize] ──→ END
```
"""
from datetime import datetime
from typing import Optional, Sequence

from langgraph.graph import END, StateGraph

from notesynth.dedup.embedder import EmbeddingProvider
from notesynth.errors import NotePipelineError
from notesynth.model.schemas import ContentItem, Note
from notesynth.orchestrator.config import PipelineConfig, RetryConfig, get_config
from notesynth.utils.logger import get_logger
from notesynth.workflow.nodes import (
    chunk_content,
    deduplicate_items,
    extract_text,
    finalize,
    generate_notes,
    merge_session_notes,
)
from notesynth.workflow.state import PipelineState, create_initial_state

logger = get_logger(__name__)


def _route_on_error(state: PipelineState) -> str:
    return "finalize" if state.get("error") else "continue"


def create_note_pipeline():
    """Build and compile the note pipeline graph."""
    workflow = StateGraph(PipelineState)

    workflow.add_node("dedupe", deduplicate_items)
    workflow.add_node("extract_text", extract_text)
    workflow.add_node("chunk", chunk_content)
    workflow.add_node("generate", generate_notes)
    workflow.add_node("merge", merge_session_notes)
    workflow.add_node("finalize", finalize)

    workflow.set_entry_point("dedupe")
    workflow.add_edge("dedupe", "extract_text")
    workflow.add_edge("extract_text", "chunk")

    workflow.add_conditional_edges(
        "chunk",
        _route_on_error,
        {"continue": "generate", "finalize": "finalize"},
    )
    workflow.add_conditional_edges(
        "generate",
        _route_on_error,
        {"continue": "merge", "finalize": "finalize"},
    )

    workflow.add_edge("merge", "finalize")
    workflow.add_edge("finalize", END)

    return workflow.compile()


# Compiled pipeline graph instance
note_pipeline = create_note_pipeline()


async def run_note_pipeline(
    custom_prompt: str,
    start_time: datetime,
    end_time: datetime,
    model_provider,
    embedder: Optional[EmbeddingProvider] = None,
    items: Optional[Sequence[ContentItem]] = None,
    text: Optional[str] = None,
    reference_label: Optional[str] = None,
    settings: Optional[PipelineConfig] = None,
    retry: Optional[RetryConfig] = None,
    show_progress: bool = False,
) -> PipelineState:
    """
    Run the pipeline and return its final state (note, error, stats).

    Args:
        custom_prompt: User instructions for generation
        start_time: Start of the session window
        end_time: End of the session window
        model_provider: Structured-output provider, or chat provider when
            ``settings.GENERATION_BACKEND == "chat"``
        embedder: Embedding provider for dedup and title selection
        items: Captured content items
        text: Pre-extracted session text (skips item extraction)
        reference_label: Label for title selection (default: custom_prompt)
        settings: Pipeline variant (default: global configuration)
        retry: Caller-side generation retry (default: global configuration)
        show_progress: Display a progress bar while generating
    """
    cfg = get_config()
    initial_state = create_initial_state(
        custom_prompt=custom_prompt,
        start_time=start_time,
        end_time=end_time,
        items=list(items or []),
        text=text,
        reference_label=reference_label,
    )

    return await note_pipeline.ainvoke(
        initial_state,
        config={
            "configurable": {
                "embedder": embedder,
                "model_provider": model_provider,
                "settings": settings or cfg.pipeline,
                "retry": retry or cfg.retry,
                "show_progress": show_progress,
            }
        },
    )


async def generate_session_note(
    custom_prompt: str,
    start_time: datetime,
    end_time: datetime,
    model_provider,
    embedder: Optional[EmbeddingProvider] = None,
    items: Optional[Sequence[ContentItem]] = None,
    text: Optional[str] = None,
    reference_label: Optional[str] = None,
    settings: Optional[PipelineConfig] = None,
    retry: Optional[RetryConfig] = None,
    show_progress: bool = False,
) -> Note:
    """
    Generate one consolidated note for a capture session.

    Same arguments as ``run_note_pipeline``.

    Returns:
        The session Note

    Raises:
        NotePipelineError: any failure; ``details["reason"]`` carries the
            underlying message and the original error is chained
    """
    try:
        if not custom_prompt:
            raise ValueError("custom_prompt is required")
        if items is None and text is None:
            raise ValueError("either items or text is required")

        state = await run_note_pipeline(
            custom_prompt=custom_prompt,
            start_time=start_time,
            end_time=end_time,
            model_provider=model_provider,
            embedder=embedder,
            items=items,
            text=text,
            reference_label=reference_label,
            settings=settings,
            retry=retry,
            show_progress=show_progress,
        )
    except Exception as e:
        logger.exception("Error generating session note")
        raise NotePipelineError("could not generate any notes", details={"reason": str(e)}) from e

    if state.get("error") or state.get("note") is None:
        reason = state.get("error") or "pipeline produced no note"
        raise NotePipelineError(
            "could not generate any notes",
            details={"reason": reason},
        ) from state.get("exception")

    return state["note"]
