"""
Text extraction node.

In "ocr-text" mode, joins the OCR text of the kept items (and optionally
cleans it). Text handed in directly is used as-is. "structured-items" mode
keeps the items and has nothing to extract.
"""

from langchain_core.runnables import RunnableConfig

from notesynth.capture.extract import clean_ocr_text, extract_ocr_text
from notesynth.workflow.state import PipelineState
from notesynth.workflow.utils import get_settings


def extract_text(state: PipelineState, config: RunnableConfig) -> PipelineState:
    settings = get_settings(config)

    if settings.MODE != "ocr-text" or state.get("text") is not None:
        return state

    text = extract_ocr_text(state.get("unique_items", []))
    if settings.CLEAN_OCR_TEXT:
        text = clean_ocr_text(text)

    stats = {**state.get("stats", {})}
    stats["extracted_characters"] = len(text)

    return {**state, "text": text, "stats": stats}
