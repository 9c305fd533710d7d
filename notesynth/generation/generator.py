"""
Note generation.

Turns one chunk of captured content into a structured note with a single
model call. No retry happens here; retry policy belongs to the caller.
"""

import json
import re
from datetime import datetime
from typing import Sequence

from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError

from notesynth.capture.extract import serialize_items
from notesynth.errors import GenerationFailed, GenerationTimeout, ResponseParseFailed
from notesynth.model.providers import ChatModelProvider, StructuredModelProvider
from notesynth.model.schemas import ContentItem, GeneratedNote, Note
from notesynth.prompts.generation import (
    CHAT_SYSTEM_PROMPT,
    CHAT_USER_PROMPT,
    NOTE_HUMAN_PROMPT,
    NOTE_SYSTEM_PROMPT,
    STRUCTURED_ITEMS_HUMAN_PROMPT,
)
from notesynth.utils.logger import get_logger

logger = get_logger(__name__)

_FENCED_JSON = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def is_timeout_error(error: BaseException) -> bool:
    """True for timeout-like provider failures."""
    if isinstance(error, TimeoutError):
        return True
    name = type(error).__name__.lower()
    return "timeout" in name or "timeout" in str(error).lower()


def _generation_error(error: Exception, model_name: str | None, prompt_length: int) -> Exception:
    logger.error(
        "LLM generation error",
        extra={
            "error_message": str(error),
            "model_used": model_name,
            "prompt_length": prompt_length,
        },
    )
    details = {"model": model_name, "prompt_length": prompt_length}
    if is_timeout_error(error):
        return GenerationTimeout(details=details)
    return GenerationFailed(str(error), details=details)


def _stamp(generated: GeneratedNote | dict, start_time: datetime, end_time: datetime) -> Note:
    data = generated.model_dump() if isinstance(generated, GeneratedNote) else dict(generated)
    data.update(start_time=start_time, end_time=end_time)
    return Note.model_validate(data)


async def _generate_structured(
    human_template: str,
    variables: dict,
    provider: StructuredModelProvider,
    start_time: datetime,
    end_time: datetime,
    model_name: str | None,
) -> Note:
    prompt = ChatPromptTemplate.from_messages([
        ("system", NOTE_SYSTEM_PROMPT),
        ("human", human_template),
    ])
    messages = prompt.format_messages(**variables)
    prompt_length = sum(len(str(message.content)) for message in messages)

    try:
        generated = await provider.generate(messages, GeneratedNote)
    except Exception as e:
        raise _generation_error(e, model_name, prompt_length) from e

    try:
        return _stamp(generated, start_time, end_time)
    except (ValidationError, TypeError) as e:
        raise GenerationFailed(f"model returned an invalid note: {e}") from e


async def generate_note(
    chunk_text: str,
    provider: StructuredModelProvider,
    start_time: datetime,
    end_time: datetime,
    custom_prompt: str,
    model_name: str | None = None,
) -> Note:
    """
    Generate a note from one text chunk with a structured-output model call.

    Args:
        chunk_text: Captured text for this chunk
        provider: Structured-output model provider
        start_time: Start of the source window, stamped on the note
        end_time: End of the source window, stamped on the note
        custom_prompt: User instructions appended to the prompt
        model_name: Model identifier for diagnostics

    Returns:
        Generated Note

    Raises:
        GenerationTimeout: provider reported a timeout
        GenerationFailed: any other provider failure
    """
    return await _generate_structured(
        NOTE_HUMAN_PROMPT,
        {"screen_data": chunk_text, "custom_prompt": custom_prompt},
        provider,
        start_time,
        end_time,
        model_name,
    )


async def generate_note_from_items(
    items: Sequence[ContentItem],
    provider: StructuredModelProvider,
    start_time: datetime,
    end_time: datetime,
    custom_prompt: str,
    model_name: str | None = None,
) -> Note:
    """Same contract as ``generate_note``, prompting with raw items serialized as JSON."""
    return await _generate_structured(
        STRUCTURED_ITEMS_HUMAN_PROMPT,
        {"items_json": serialize_items(items), "custom_prompt": custom_prompt},
        provider,
        start_time,
        end_time,
        model_name,
    )


def parse_note_response(text: str) -> GeneratedNote:
    """
    Parse a chat reply into a GeneratedNote.

    The reply is expected to be JSON, optionally wrapped in a ``` or ```json
    fenced block.

    Raises:
        ResponseParseFailed: empty reply, invalid JSON or wrong shape
    """
    if not text or not text.strip():
        raise ResponseParseFailed("Failed to get content from the model response")

    content = text.strip()
    match = _FENCED_JSON.match(content)
    if match:
        content = match.group(1).strip()

    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        raise ResponseParseFailed(
            "Failed to parse JSON from model output",
            details={"error": str(e), "response_preview": content[:200]},
        ) from e

    try:
        return GeneratedNote.model_validate(payload)
    except ValidationError as e:
        raise ResponseParseFailed(
            "Model output does not match the note schema",
            details={"error": str(e)},
        ) from e


async def generate_note_via_chat(
    content: str | Sequence[ContentItem],
    provider: ChatModelProvider,
    start_time: datetime,
    end_time: datetime,
    custom_prompt: str,
    model_name: str | None = None,
) -> Note:
    """
    Generate a note with a freeform chat completion.

    Raises:
        GenerationTimeout: provider reported a timeout
        GenerationFailed: any other provider failure
        ResponseParseFailed: reply could not be parsed into a note
    """
    if isinstance(content, str):
        screen_data = json.dumps(content, ensure_ascii=False)
    else:
        screen_data = serialize_items(content)

    user_prompt = CHAT_USER_PROMPT.format(screen_data=screen_data, custom_prompt=custom_prompt)

    try:
        reply = await provider.complete(CHAT_SYSTEM_PROMPT, user_prompt)
    except Exception as e:
        raise _generation_error(e, model_name, len(CHAT_SYSTEM_PROMPT) + len(user_prompt)) from e

    generated = parse_note_response(reply)
    return _stamp(generated, start_time, end_time)
