"""Educational note synthesis from screen and audio capture."""

from notesynth.model.schemas import ContentItem, GeneratedNote, Note
from notesynth.workflow.workflow import generate_session_note, run_note_pipeline

__version__ = "0.1.0"

__all__ = [
    "ContentItem",
    "GeneratedNote",
    "Note",
    "generate_session_note",
    "run_note_pipeline",
]
