#!/usr/bin/env python3
"""Note pipeline runner.

Reads captured content items (JSON list) or plain text, generates one session
note and prints it. Optionally stores the note in the notes database.

Usage:
    python run_pipeline.py capture.json --prompt "summarize what I learned about asyncio"
    python run_pipeline.py notes.txt --text --prompt "#python" --backend chat --policy chars
"""
import argparse
import asyncio
import json
import sys
import warnings
from datetime import datetime, timezone
from pathlib import Path

warnings.filterwarnings('ignore')

from dotenv import load_dotenv
load_dotenv()

from notesynth.dedup.embedder import OpenAIEmbedder
from notesynth.errors import NotePipelineError
from notesynth.model.model import get_llm
from notesynth.model.providers import LangChainChatProvider, LangChainStructuredProvider
from notesynth.model.schemas import ContentItem
from notesynth.orchestrator.config import get_config, update_config
from notesynth.utils.logger import setup_logger
from notesynth.workflow.workflow import generate_session_note


def _parse_time(value: str | None, default: datetime) -> datetime:
    """ISO 8601 time in UTC; naive input is read as local time."""
    if not value:
        return default
    return datetime.fromisoformat(value).astimezone(timezone.utc)


def _load_items(path: Path) -> list[ContentItem]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("data") or data.get("items") or []
    return [ContentItem.model_validate(item) for item in data]


def _save(note) -> int:
    from notesynth.db.connection import get_session, init_db
    from notesynth.db.operations import save_note

    init_db()
    session = get_session()
    try:
        return save_note(session, note).id
    finally:
        session.close()


def main():
    parser = argparse.ArgumentParser(description="Generate an educational note from captured content")
    parser.add_argument("input", type=str, help="Capture JSON file (list of items) or text file with --text")
    parser.add_argument("--prompt", type=str, required=True, help="Custom instructions for the note")
    parser.add_argument("--label", type=str, help="Reference label for title selection (default: prompt)")
    parser.add_argument("--text", action="store_true", help="Input is plain text, not capture items")
    parser.add_argument("--start", type=str, help="Session start (ISO 8601)")
    parser.add_argument("--end", type=str, help="Session end (ISO 8601)")
    parser.add_argument("--mode", choices=["ocr-text", "structured-items"], help="Pipeline mode")
    parser.add_argument("--backend", choices=["structured", "chat"], help="Generation backend")
    parser.add_argument("--policy", choices=["words", "chars"], help="Chunk size policy")
    parser.add_argument("--max-chunk-size", type=int, help="Chunk bound in words or characters")
    parser.add_argument("--concurrency", type=int, help="Generation calls per window")
    parser.add_argument("--no-dedup", action="store_true", help="Disable embedding deduplication")
    parser.add_argument("--model", type=str, help="Chat model name")
    parser.add_argument("--save", action="store_true", help="Store the note in the notes database")

    args = parser.parse_args()

    overrides = {
        "MODE": args.mode,
        "GENERATION_BACKEND": args.backend,
        "CHUNK_SIZE_POLICY": args.policy,
        "MAX_CHUNK_SIZE": args.max_chunk_size,
        "CONCURRENCY_LIMIT": args.concurrency,
        "DEFAULT_MODEL_VERSION": args.model,
    }
    update_config(**{key: value for key, value in overrides.items() if value is not None})
    if args.no_dedup:
        update_config(DEDUP_ENABLED=False)

    cfg = get_config()
    setup_logger(level=cfg.processing.LOG_LEVEL, json_format=cfg.processing.JSON_LOGGING)

    path = Path(args.input)
    now = datetime.now(timezone.utc)
    start_time = _parse_time(args.start, now)
    end_time = _parse_time(args.end, now)

    llm = get_llm(model=cfg.processing.DEFAULT_MODEL_VERSION)
    if cfg.pipeline.GENERATION_BACKEND == "chat":
        provider = LangChainChatProvider(llm)
    else:
        provider = LangChainStructuredProvider(llm)
    embedder = OpenAIEmbedder(model=cfg.processing.EMBEDDING_MODEL)

    print(f"📄 Input: {path}")
    print(f"🤖 Model: {cfg.processing.DEFAULT_MODEL_VERSION} ({cfg.pipeline.GENERATION_BACKEND})")
    print(f"✂️  Chunking: {cfg.pipeline.max_chunk_size} {cfg.pipeline.CHUNK_SIZE_POLICY}")
    print()

    try:
        note = asyncio.run(generate_session_note(
            custom_prompt=args.prompt,
            start_time=start_time,
            end_time=end_time,
            model_provider=provider,
            embedder=embedder,
            items=None if args.text else _load_items(path),
            text=path.read_text(encoding="utf-8") if args.text else None,
            reference_label=args.label,
            show_progress=True,
        ))
    except NotePipelineError as e:
        print(f"\n❌ Error: {e.message} ({e.details.get('reason')})")
        sys.exit(1)

    print("\n" + "=" * 60)
    print(f"📝 {note.title}")
    print("=" * 60)
    print(note.content)
    print()
    print(f"🏷️  {' '.join(note.tags)}")
    print(f"🕒 {note.start_time.isoformat()} → {note.end_time.isoformat()}")

    if args.save:
        note_id = _save(note)
        print(f"\n✅ Saved note (ID: {note_id})")


if __name__ == '__main__':
    main()
