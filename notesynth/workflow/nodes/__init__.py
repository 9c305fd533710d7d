"""
LangGraph workflow nodes.

Each node takes the PipelineState and returns the updated state.
"""

from notesynth.workflow.nodes.deduplicate import deduplicate_items
from notesynth.workflow.nodes.extract_text import extract_text
from notesynth.workflow.nodes.chunk_content import chunk_content
from notesynth.workflow.nodes.generate_notes import generate_notes
from notesynth.workflow.nodes.merge import merge_session_notes
from notesynth.workflow.nodes.finalize import finalize

__all__ = [
    "deduplicate_items",
    "extract_text",
    "chunk_content",
    "generate_notes",
    "merge_session_notes",
    "finalize",
]
