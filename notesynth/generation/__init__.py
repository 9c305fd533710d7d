from notesynth.generation.generator import (
    generate_note,
    generate_note_from_items,
    generate_note_via_chat,
    parse_note_response,
)
from notesynth.generation.merger import get_top_tags, join_contents, merge_notes, select_title

__all__ = [
    "generate_note",
    "generate_note_from_items",
    "generate_note_via_chat",
    "parse_note_response",
    "get_top_tags",
    "join_contents",
    "merge_notes",
    "select_title",
]
