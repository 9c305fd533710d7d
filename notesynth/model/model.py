"""
LLM model construction.

Builds the ChatVertexAI model used by the CLI. The pipeline itself never
constructs models; it receives providers wrapping them.
"""
import os
from dotenv import load_dotenv
from langchain_google_vertexai import ChatVertexAI

load_dotenv()


def get_llm(
    model: str | None = None,
    temperature: float = 0.0,
    max_tokens: int = 8192,
) -> ChatVertexAI:
    """
    Return a ChatVertexAI model instance.

    Args:
        model: Model name (default: VERTEX_AI_MODEL environment variable)
        temperature: Sampling temperature (default: 0.0, deterministic output)
        max_tokens: Maximum output tokens

    Returns:
        ChatVertexAI instance
    """
    model_name = model or os.getenv("VERTEX_AI_MODEL", "gemini-2.5-flash")

    return ChatVertexAI(
        model=model_name,
        temperature=temperature,
        max_tokens=max_tokens,
        project=os.getenv("GOOGLE_CLOUD_PROJECT"),
        location=os.getenv("GOOGLE_CLOUD_LOCATION", "us-central1"),
    )
