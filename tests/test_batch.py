import asyncio
import random

import pytest
from stubs import make_note

from notesynth.orchestrator.batch import process_batches


class Recorder:
    """Generation stub logging start/end events and concurrency."""

    def __init__(self, fail_on=(), seed=7):
        self.fail_on = set(fail_on)
        self.events = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.random = random.Random(seed)

    async def __call__(self, chunk):
        self.events.append(("start", chunk))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(self.random.uniform(0, 0.02))
        self.in_flight -= 1
        self.events.append(("end", chunk))
        if chunk in self.fail_on:
            raise RuntimeError(f"generation failed for chunk {chunk}")
        return make_note(title=f"note {chunk}")

    def position(self, kind, chunk):
        return self.events.index((kind, chunk))


def test_results_keep_chunk_order():
    generate = Recorder()

    notes = asyncio.run(process_batches(list(range(7)), generate, limit=3))

    assert [note.title for note in notes] == [f"note {i}" for i in range(7)]


def test_windows_are_sequential():
    generate = Recorder()
    chunks = list(range(7))

    asyncio.run(process_batches(chunks, generate, limit=3))

    assert generate.max_in_flight == 3
    windows = [chunks[0:3], chunks[3:6], chunks[6:7]]
    for previous, current in zip(windows, windows[1:]):
        last_end = max(generate.position("end", chunk) for chunk in previous)
        first_start = min(generate.position("start", chunk) for chunk in current)
        assert last_end < first_start


def test_failure_aborts_after_the_window_settles():
    generate = Recorder(fail_on={4})

    with pytest.raises(RuntimeError, match="chunk 4"):
        asyncio.run(process_batches(list(range(7)), generate, limit=3))

    started = [chunk for kind, chunk in generate.events if kind == "start"]
    finished = [chunk for kind, chunk in generate.events if kind == "end"]
    assert sorted(started) == [0, 1, 2, 3, 4, 5]
    assert sorted(finished) == [0, 1, 2, 3, 4, 5]


def test_first_failure_in_chunk_order_is_raised():
    generate = Recorder(fail_on={1, 2})

    with pytest.raises(RuntimeError, match="chunk 1"):
        asyncio.run(process_batches([0, 1, 2], generate, limit=3))


def test_limit_of_one_runs_sequentially():
    generate = Recorder()

    asyncio.run(process_batches([0, 1, 2], generate, limit=1))

    assert generate.max_in_flight == 1


def test_no_chunks():
    assert asyncio.run(process_batches([], Recorder())) == []


def test_invalid_limit():
    with pytest.raises(ValueError):
        asyncio.run(process_batches([1], Recorder(), limit=0))
