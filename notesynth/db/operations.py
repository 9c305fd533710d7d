"""Note storage operations."""

from typing import List, Optional

from sqlalchemy.orm import Session

from notesynth.db.models import StoredNote
from notesynth.model.schemas import Note


def save_note(session: Session, note: Note) -> StoredNote:
    """Persist a generated note.

    Args:
        session: Database session
        note: Note to store

    Returns:
        Created StoredNote (with its id)
    """
    stored = StoredNote(
        title=note.title,
        content=note.content,
        tags=list(note.tags),
        start_time=note.start_time,
        end_time=note.end_time,
    )
    session.add(stored)
    session.commit()
    session.refresh(stored)
    return stored


def get_note(session: Session, note_id: int) -> Optional[StoredNote]:
    """Get note by ID, or None."""
    return session.query(StoredNote).filter_by(id=note_id).first()


def list_notes(session: Session) -> List[StoredNote]:
    """All notes, newest session first."""
    return session.query(StoredNote).order_by(StoredNote.start_time.desc(), StoredNote.id.desc()).all()


def delete_note(session: Session, note_id: int) -> bool:
    """Delete a note.

    Returns:
        True if a note was deleted
    """
    stored = get_note(session, note_id)
    if stored is None:
        return False
    session.delete(stored)
    session.commit()
    return True


def find_notes_by_tag(session: Session, tag: str) -> List[StoredNote]:
    """Notes carrying ``tag`` (exact match, e.g. "#python")."""
    # Tags live in a JSON column; filter in Python to stay backend independent
    return [stored for stored in list_notes(session) if tag in (stored.tags or [])]


def list_tags(session: Session) -> List[str]:
    """Distinct tags over all notes, in first-seen order."""
    seen = {}
    for stored in list_notes(session):
        for tag in stored.tags or []:
            seen.setdefault(tag, None)
    return list(seen)


def to_note(stored: StoredNote) -> Note:
    """Convert a stored row back to a Note."""
    return Note(
        title=stored.title,
        content=stored.content,
        tags=list(stored.tags or []),
        start_time=stored.start_time,
        end_time=stored.end_time,
    )
