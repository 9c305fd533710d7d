"""Text extraction from captured content items.

Turns ``ContentItem`` sequences into plain text for embedding, chunking and
prompting.
"""

import json
import re
from typing import Iterable, List

from notesynth.capture.stopwords import STOPWORDS
from notesynth.model.schemas import ContentItem

OCR_TYPE = "OCR"

_NON_WORD = re.compile(r"[^a-z0-9\s']")


def item_text(item: ContentItem) -> str:
    """Textual representation of an item.

    Plain string content is used as-is, a structured payload contributes its
    ``text`` field when that is a string, anything else is serialized to JSON
    as a whole. Missing content yields an empty string.
    """
    content = item.content
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, dict) and isinstance(content.get("text"), str):
        return content["text"]
    return json.dumps(content, ensure_ascii=False, default=str)


def serialize_item(item: ContentItem) -> str:
    """Compact JSON for prompting and size accounting."""
    return item.model_dump_json(exclude_none=True)


def serialize_items(items: Iterable[ContentItem]) -> str:
    return json.dumps(
        [item.model_dump(mode="json", exclude_none=True) for item in items],
        ensure_ascii=False,
    )


def extract_ocr_text(items: Iterable[ContentItem]) -> str:
    """Join the text of OCR items with blank lines.

    Only OCR items with a structured payload carrying ``text`` contribute;
    whitespace-only texts are skipped.
    """
    texts: List[str] = []
    for item in items:
        if item.type != OCR_TYPE or not isinstance(item.content, dict):
            continue
        text = item.content.get("text")
        if isinstance(text, str) and text.strip():
            texts.append(text)
    return "\n\n".join(texts)


def clean_ocr_text(text: str, stopwords: frozenset = STOPWORDS) -> str:
    """Normalize OCR text before chunking.

    Lowercases, drops every character that is not a lowercase letter, digit,
    apostrophe or whitespace, then removes stopwords (contractions included)
    before dropping the apostrophes. Words end up separated by single spaces.
    """
    normalized = _NON_WORD.sub("", text.lower().replace("\u2019", "'"))

    words = []
    for word in normalized.split():
        word = word.strip("'")
        if not word or word in stopwords:
            continue
        words.append(word.replace("'", ""))
    return " ".join(words)
