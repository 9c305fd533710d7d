"""
Chunking node.

Splits the session content into bounded chunks: text chunks in "ocr-text"
mode, groups of items in "structured-items" mode.
"""

from langchain_core.runnables import RunnableConfig

from notesynth.capture.chunker import chunk_items, chunk_text
from notesynth.errors import NoChunksProduced
from notesynth.workflow.state import PipelineState
from notesynth.workflow.utils import fail, get_settings


def chunk_content(state: PipelineState, config: RunnableConfig) -> PipelineState:
    settings = get_settings(config)
    max_size = settings.max_chunk_size
    policy = settings.CHUNK_SIZE_POLICY

    if settings.MODE == "ocr-text" or state.get("text") is not None:
        chunks = chunk_text(state.get("text") or "", max_size, policy)
    else:
        chunks = chunk_items(state.get("unique_items", []), max_size, policy)

    if not chunks:
        return fail(state, NoChunksProduced("No content to generate notes from"))

    stats = {**state.get("stats", {})}
    stats["total_chunks"] = len(chunks)

    return {**state, "chunks": chunks, "stats": stats}
