"""SQLAlchemy models for stored notes."""

from sqlalchemy import JSON, Column, DateTime, Integer, Sequence, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class StoredNote(Base):
    """Generated session note."""

    __tablename__ = "notes"

    id = Column(Integer, Sequence('notes_id_seq'), primary_key=True)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    tags = Column(JSON, nullable=False, default=list)  # ["#tag", ...]
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
