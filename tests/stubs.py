"""Stub providers shared by the test suite."""

import asyncio
import hashlib
import json
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from notesynth.model.schemas import Note

SESSION_START = datetime(2024, 5, 1, 9, 0, 0)


def at(minutes: int) -> datetime:
    return SESSION_START + timedelta(minutes=minutes)


def make_note(title="Note", content="<p>content</p>", tags=None, start=0, end=1) -> Note:
    return Note(title=title, content=content, tags=tags or [], start_time=at(start), end_time=at(end))


def hashed_vector(text: str, dimensions: int = 32) -> List[float]:
    """Deterministic pseudo-random vector; equal texts map to equal vectors."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return [byte - 127.5 for byte in digest[:dimensions]]


def screen_data_of(prompt: str) -> str:
    """Captured data embedded in a note human prompt."""
    body = prompt.split(":\n\n", 1)[1]
    return body.rsplit("\n\nInstructions:", 1)[0]


class StubEmbedder:
    """Embeds from a lookup table, falling back to hashed vectors."""

    def __init__(self, vectors: Optional[Dict[str, Sequence[float]]] = None, fail_on: Iterable[str] = ()):
        self.vectors = dict(vectors or {})
        self.fail_on = set(fail_on)
        self.calls: List[str] = []

    async def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if text in self.fail_on:
            raise RuntimeError(f"embedding service unavailable for {text!r}")
        if text in self.vectors:
            return list(self.vectors[text])
        return hashed_vector(text)


class FailingEmbedder:
    def __init__(self):
        self.calls = 0

    async def embed(self, text: str) -> List[float]:
        self.calls += 1
        raise RuntimeError("embedding service unavailable")


class StubStructuredProvider:
    """Structured provider answering with a note built from the prompt.

    ``fail_with`` may be an exception (raised on every call) or a list of
    exceptions/None consumed one per call.
    """

    model_name = "stub-model"

    def __init__(self, respond: Optional[Callable[[str], dict]] = None, fail_with=None, delay: float = 0):
        self.respond = respond or self.default_response
        self.fail_with = fail_with
        self.delay = delay
        self.prompts: List[str] = []
        self.system_prompts: List[str] = []

    @staticmethod
    def default_response(prompt: str) -> dict:
        data = screen_data_of(prompt)
        return {
            "title": f"Notes on {data[:40]}",
            "content": f"<p>{data}</p>",
            "tags": ["#capture"],
        }

    def _next_failure(self):
        if isinstance(self.fail_with, list):
            return self.fail_with.pop(0) if self.fail_with else None
        return self.fail_with

    async def generate(self, messages, schema):
        self.system_prompts.append(messages[0].content)
        self.prompts.append(messages[-1].content)
        if self.delay:
            await asyncio.sleep(self.delay)
        failure = self._next_failure()
        if failure is not None:
            raise failure
        return schema.model_validate(self.respond(messages[-1].content))


class StubChatProvider:
    """Chat provider replying with a fenced JSON note."""

    model_name = "stub-chat"

    def __init__(self, reply: Optional[str] = None):
        self.reply = reply
        self.calls: List[tuple] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.reply is not None:
            return self.reply
        screen = user_prompt.split("Screen data: ", 1)[1].split("\n\nTopic:", 1)[0]
        note = {"title": "Chat note", "content": f"<p>{json.loads(screen)}</p>", "tags": ["chat"]}
        return "```json\n" + json.dumps(note) + "\n```"
