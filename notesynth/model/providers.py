"""
Model provider capabilities injected into the pipeline.

The pipeline only depends on the two protocols below; the LangChain adapters
wrap any LangChain chat model (ChatVertexAI by default, see ``get_llm``).
"""
from typing import Any, Protocol, Sequence, Type, TypeVar

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from pydantic import BaseModel

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class StructuredModelProvider(Protocol):
    """Model call constrained to return an object matching ``schema``."""

    async def generate(self, messages: Sequence[BaseMessage], schema: Type[SchemaT]) -> Any:
        ...


class ChatModelProvider(Protocol):
    """Freeform chat completion returning raw text."""

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        ...


class LangChainStructuredProvider:
    """Structured output through ``with_structured_output`` (JSON mode)."""

    def __init__(self, llm: BaseChatModel, method: str = "json_mode"):
        self.llm = llm
        self.method = method

    @property
    def model_name(self) -> str | None:
        return getattr(self.llm, "model_name", None) or getattr(self.llm, "model", None)

    async def generate(self, messages: Sequence[BaseMessage], schema: Type[SchemaT]) -> SchemaT:
        structured_llm = self.llm.with_structured_output(schema, method=self.method)
        return await structured_llm.ainvoke(list(messages))


class LangChainChatProvider:
    """Plain chat completion; returns the reply text as-is."""

    def __init__(self, llm: BaseChatModel):
        self.llm = llm

    @property
    def model_name(self) -> str | None:
        return getattr(self.llm, "model_name", None) or getattr(self.llm, "model", None)

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        response = await self.llm.ainvoke([
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ])
        content = response.content
        if isinstance(content, str):
            return content
        # Some providers return a list of content blocks
        return "".join(
            block if isinstance(block, str) else block.get("text", "")
            for block in content
        )
