from notesynth.model.providers import (
    ChatModelProvider,
    LangChainChatProvider,
    LangChainStructuredProvider,
    StructuredModelProvider,
)
from notesynth.model.schemas import ContentItem, GeneratedNote, Note

__all__ = [
    "ChatModelProvider",
    "LangChainChatProvider",
    "LangChainStructuredProvider",
    "StructuredModelProvider",
    "ContentItem",
    "GeneratedNote",
    "Note",
]
