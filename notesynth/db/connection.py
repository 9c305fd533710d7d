"""Engine and session helpers for the note store.

SQLite file in the working directory by default; ``DATABASE_URL`` points the
store at any other SQLAlchemy backend.
"""

import os

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from notesynth.db.models import Base

load_dotenv()

DEFAULT_DB_FILE = "notes.db"


def get_database_url() -> str:
    return os.getenv("DATABASE_URL") or f"sqlite:///{os.path.join(os.getcwd(), DEFAULT_DB_FILE)}"


def create_db_engine(url: str = None, echo: bool = False) -> Engine:
    """Create the store engine.

    Args:
        url: Database URL (default: ``get_database_url()``)
        echo: Log every SQL statement
    """
    url = url or get_database_url()
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, connect_args=connect_args)


def init_db(engine: Engine = None) -> None:
    """Create the notes table if it does not exist."""
    Base.metadata.create_all(bind=engine or create_db_engine())


def get_session(engine: Engine = None) -> Session:
    """Open a session on ``engine`` (a new default engine if None).

    The caller closes it:
        session = get_session()
        try:
            save_note(session, note)
        finally:
            session.close()
    """
    return sessionmaker(bind=engine or create_db_engine(), autoflush=False)()
