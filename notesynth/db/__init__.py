from notesynth.db.connection import create_db_engine, get_database_url, get_session, init_db
from notesynth.db.models import Base, StoredNote
from notesynth.db.operations import (
    delete_note,
    find_notes_by_tag,
    get_note,
    list_notes,
    list_tags,
    save_note,
    to_note,
)

__all__ = [
    "create_db_engine",
    "get_database_url",
    "get_session",
    "init_db",
    "Base",
    "StoredNote",
    "delete_note",
    "find_notes_by_tag",
    "get_note",
    "list_notes",
    "list_tags",
    "save_note",
    "to_note",
]
