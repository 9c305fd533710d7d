import json

from notesynth.capture.extract import clean_ocr_text, extract_ocr_text, item_text, serialize_items
from notesynth.model.schemas import ContentItem


def test_item_text_variants():
    assert item_text(ContentItem(type="Audio", content="hello there")) == "hello there"
    assert item_text(ContentItem(type="OCR", content={"text": "on screen"})) == "on screen"
    assert item_text(ContentItem(type="UI", content=None)) == ""

    payload = {"app": "editor", "action": "save"}
    assert json.loads(item_text(ContentItem(type="UI", content=payload))) == payload


def test_extract_ocr_text_joins_ocr_items_only():
    items = [
        ContentItem(type="OCR", content={"text": "first block"}),
        ContentItem(type="Audio", content="spoken words"),
        ContentItem(type="OCR", content={"text": "   "}),
        ContentItem(type="OCR", content="plain string"),
        ContentItem(type="OCR", content={"text": "second block"}),
    ]

    assert extract_ocr_text(items) == "first block\n\nsecond block"


def test_extract_ocr_text_empty():
    assert extract_ocr_text([]) == ""


def test_clean_ocr_text():
    assert clean_ocr_text("The Cat, sat on the MAT!") == "cat sat mat"


def test_clean_ocr_text_keeps_digits_and_collapses_whitespace():
    assert clean_ocr_text("Python 3.12\n\n  released") == "python 312 released"


def test_serialize_items_is_a_json_array():
    items = [ContentItem(type="Audio", content="hi"), ContentItem(type="OCR", content={"text": "x"})]

    assert json.loads(serialize_items(items)) == [
        {"type": "Audio", "content": "hi"},
        {"type": "OCR", "content": {"text": "x"}},
    ]


def test_item_text_with_non_string_text_uses_the_payload():
    payload = {"text": None, "frame": 3}

    assert json.loads(item_text(ContentItem(type="OCR", content=payload))) == payload


def test_clean_ocr_text_drops_contractions():
    assert clean_ocr_text("Don't stop, it’s fine. Aren't we?") == "stop fine"


def test_clean_ocr_text_keeps_words_that_match_contractions_without_apostrophe():
    assert clean_ocr_text("Well, the shell isn't hell") == "well shell hell"


def test_clean_ocr_text_strips_quotes():
    assert clean_ocr_text("'quoted' words") == "quoted words"
