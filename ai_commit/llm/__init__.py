"""LLM Client Package"""

from ai_commit.config import EffectiveParameters
from ai_commit.llm.base import (
    BadStatusError,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    Choice,
    EmptyChoicesError,
    EmptyDiffError,
    LLMClient,
    LLMError,
    LLMResponse,
    ParseFailureError,
    TransportError,
)
from ai_commit.llm.chat import ChatCompletionClient


def get_client(params: EffectiveParameters) -> LLMClient:
    return ChatCompletionClient(params)


def generate_commit_message(diff: str, params: EffectiveParameters) -> str:
    """Return the first choice's content, unmodified."""
    return get_client(params).generate(diff).content


__all__ = [
    "BadStatusError",
    "ChatCompletionClient",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "Choice",
    "EmptyChoicesError",
    "EmptyDiffError",
    "LLMClient",
    "LLMError",
    "LLMResponse",
    "ParseFailureError",
    "TransportError",
    "generate_commit_message",
    "get_client",
]
