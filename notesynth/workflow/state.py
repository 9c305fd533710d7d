"""
LangGraph workflow state.
"""
from datetime import datetime
from typing import Any, List, Optional, TypedDict

from notesynth.model.schemas import ContentItem, Note


class PipelineState(TypedDict, total=False):
    """State flowing through the note pipeline graph."""
    # Inputs
    items: List[ContentItem]          # captured items (item-based sessions)
    text: Optional[str]               # pre-extracted text (text-based sessions)
    custom_prompt: str                # user instructions for generation
    reference_label: str              # label the merged title is matched against
    start_time: datetime
    end_time: datetime

    # Intermediate results
    unique_items: List[ContentItem]   # items left after deduplication
    chunks: List[Any]                 # str chunks or lists of items
    notes: List[Note]                 # one note per chunk

    # Output
    note: Optional[Note]
    error: Optional[str]
    exception: Optional[BaseException]
    stats: dict


def create_initial_state(
    custom_prompt: str,
    start_time: datetime,
    end_time: datetime,
    items: Optional[List[ContentItem]] = None,
    text: Optional[str] = None,
    reference_label: Optional[str] = None,
) -> PipelineState:
    """Build the initial state; the reference label defaults to the custom prompt."""
    return PipelineState(
        items=list(items or []),
        text=text,
        custom_prompt=custom_prompt,
        reference_label=reference_label or custom_prompt,
        start_time=start_time,
        end_time=end_time,
        unique_items=[],
        chunks=[],
        notes=[],
        note=None,
        error=None,
        exception=None,
        stats={},
    )
