"""End-to-end runs of the note pipeline graph with stub providers."""

import asyncio

import pytest
from stubs import FailingEmbedder, StubChatProvider, StubEmbedder, StubStructuredProvider, at

from notesynth.errors import GenerationFailed, GenerationTimeout, NoChunksProduced, NotePipelineError
from notesynth.model.schemas import ContentItem
from notesynth.orchestrator.config import PipelineConfig, RetryConfig
from notesynth.workflow.workflow import generate_session_note, run_note_pipeline


def ocr(text):
    return ContentItem(type="OCR", content={"text": text})


def session_note(provider, embedder=None, **kwargs):
    kwargs.setdefault("custom_prompt", "animals")
    return asyncio.run(generate_session_note(
        start_time=at(0),
        end_time=at(30),
        model_provider=provider,
        embedder=embedder,
        **kwargs,
    ))


def test_duplicates_are_dropped_and_chunk_notes_merged():
    provider = StubStructuredProvider()
    embedder = StubEmbedder()
    items = [ocr("the cat sat"), ocr("the cat sat"), ocr("dogs bark loudly")]
    settings = PipelineConfig(CLEAN_OCR_TEXT=False, MAX_CHUNK_SIZE=3)

    state = asyncio.run(run_note_pipeline(
        custom_prompt="animals",
        start_time=at(0),
        end_time=at(30),
        model_provider=provider,
        embedder=embedder,
        items=items,
        settings=settings,
    ))

    assert state["error"] is None
    assert state["unique_items"] == [items[0], items[2]]
    assert state["chunks"] == ["the cat sat", "dogs bark loudly"]
    assert state["stats"]["duplicates_removed"] == 1

    note = state["note"]
    assert note.content == "<p>the cat sat</p>\n\n<p>dogs bark loudly</p>"
    assert note.title in {"Notes on the cat sat", "Notes on dogs bark loudly"}
    assert note.tags == ["#capture"]
    assert (note.start_time, note.end_time) == (at(0), at(30))


def test_single_chunk_note_is_returned_as_is():
    provider = StubStructuredProvider()
    embedder = StubEmbedder()

    note = session_note(
        provider,
        embedder,
        items=[ocr("The cat sat on the mat"), ocr("Dogs bark loudly")],
    )

    assert note.content == "<p>cat sat mat dogs bark loudly</p>"
    assert len(provider.prompts) == 1
    # Only the two dedup embeddings, no title selection
    assert len(embedder.calls) == 2


def test_ocr_text_is_cleaned_before_chunking():
    provider = StubStructuredProvider()

    note = session_note(provider, StubEmbedder(), items=[ocr("The Cat, sat on the MAT!")])

    assert note.content == "<p>cat sat mat</p>"


def test_text_input_skips_extraction():
    provider = StubStructuredProvider()
    settings = PipelineConfig(MAX_CHUNK_SIZE=4)

    note = session_note(provider, StubEmbedder(), text="one two three four five six", settings=settings)

    assert note.content == "<p>one two three four</p>\n\n<p>five six</p>"


def test_structured_items_mode_prompts_with_items():
    provider = StubStructuredProvider()
    items = [ocr("on screen"), ContentItem(type="Audio", content="spoken words")]
    settings = PipelineConfig(MODE="structured-items")

    note = session_note(provider, StubEmbedder(), items=items, settings=settings)

    assert len(provider.prompts) == 1
    assert '"spoken words"' in provider.prompts[0]
    assert '"on screen"' in note.content


def test_chat_backend():
    provider = StubChatProvider()
    settings = PipelineConfig(GENERATION_BACKEND="chat", CLEAN_OCR_TEXT=False)

    note = session_note(provider, StubEmbedder(), items=[ocr("closures capture variables")], settings=settings)

    assert note.title == "Chat note"
    assert note.content == "<p>closures capture variables</p>"
    assert len(provider.calls) == 1


def test_dedup_failure_does_not_block_generation():
    provider = StubStructuredProvider()
    settings = PipelineConfig(CLEAN_OCR_TEXT=False)

    state = asyncio.run(run_note_pipeline(
        custom_prompt="animals",
        start_time=at(0),
        end_time=at(30),
        model_provider=provider,
        embedder=FailingEmbedder(),
        items=[ocr("the cat sat"), ocr("the cat sat")],
        settings=settings,
    ))

    assert state["error"] is None
    assert state["note"].content == "<p>the cat sat the cat sat</p>"


def test_dedup_can_be_disabled():
    embedder = StubEmbedder()
    settings = PipelineConfig(DEDUP_ENABLED=False)

    session_note(StubStructuredProvider(), embedder, items=[ocr("the cat sat")], settings=settings)

    assert embedder.calls == []


def test_empty_session_fails():
    with pytest.raises(NotePipelineError) as excinfo:
        session_note(StubStructuredProvider(), StubEmbedder(), items=[])

    assert excinfo.value.message == "could not generate any notes"
    assert isinstance(excinfo.value.__cause__, NoChunksProduced)


def test_generation_failure_is_reported():
    provider = StubStructuredProvider(fail_with=RuntimeError("quota exceeded"))

    with pytest.raises(NotePipelineError) as excinfo:
        session_note(provider, StubEmbedder(), items=[ocr("the cat sat")])

    assert isinstance(excinfo.value.__cause__, GenerationFailed)
    assert "quota exceeded" in excinfo.value.details["reason"]


def test_timeouts_are_retried_when_configured():
    provider = StubStructuredProvider(fail_with=[TimeoutError(), None])
    retry = RetryConfig(MAX_RETRY_ATTEMPTS=2, RETRY_DELAYS=[0])

    note = session_note(provider, StubEmbedder(), items=[ocr("the cat sat")], retry=retry)

    assert note.content == "<p>cat sat</p>"
    assert len(provider.prompts) == 2


def test_timeouts_fail_without_retry():
    provider = StubStructuredProvider(fail_with=[TimeoutError(), None])

    with pytest.raises(NotePipelineError) as excinfo:
        session_note(provider, StubEmbedder(), items=[ocr("the cat sat")], retry=RetryConfig())

    assert isinstance(excinfo.value.__cause__, GenerationTimeout)
    assert len(provider.prompts) == 1


def test_missing_inputs():
    with pytest.raises(NotePipelineError):
        session_note(StubStructuredProvider(), StubEmbedder())
    with pytest.raises(NotePipelineError):
        session_note(StubStructuredProvider(), StubEmbedder(), items=[ocr("x")], custom_prompt="")


def test_multi_chunk_session_without_embedder():
    provider = StubStructuredProvider()

    state = asyncio.run(run_note_pipeline(
        custom_prompt="counting",
        start_time=at(0),
        end_time=at(30),
        model_provider=provider,
        embedder=None,
        text="one two three four five six",
        settings=PipelineConfig(MAX_CHUNK_SIZE=3),
    ))

    assert state["error"] is None
    assert state["note"].title == "Notes on one two three"
    assert state["note"].content == "<p>one two three</p>\n\n<p>four five six</p>"
