"""
Pydantic schemas for capture items and notes.
"""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ContentItem(BaseModel):
    """One captured unit (OCR block, audio transcript fragment, UI event, ...)."""
    model_config = ConfigDict(frozen=True)

    type: str = Field(description="Capture type tag, e.g. OCR, Audio, UI")
    content: str | dict[str, Any] | None = Field(default=None, description="Plain text or structured payload")
    timestamp: datetime | None = Field(default=None, description="Capture timestamp (carried by caller)")


# LLM output schema
class GeneratedNote(BaseModel):
    """Structured note returned by the model (prompt output schema)."""
    title: str = Field(description="Brief, topic-focused title")
    content: str = Field(description="HTML-formatted educational content")
    tags: list[str] = Field(default_factory=list, description="Short labels prefixed with #")

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, tags: list[str]) -> list[str]:
        normalized = []
        for tag in tags:
            tag = tag.strip()
            if not tag:
                continue
            if not tag.startswith("#"):
                tag = f"#{tag}"
            normalized.append(tag)
        return normalized


class Note(GeneratedNote):
    """Unit of output: a generated note bounded by its source time window."""
    model_config = ConfigDict(frozen=True)

    start_time: datetime = Field(description="Start of the source window")
    end_time: datetime = Field(description="End of the source window")

    @model_validator(mode="after")
    def _check_window(self) -> "Note":
        if self.start_time > self.end_time:
            raise ValueError(
                f"start_time ({self.start_time.isoformat()}) is after end_time ({self.end_time.isoformat()})"
            )
        return self
