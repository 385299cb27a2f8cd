"""LLM Base Classes and Shared Code"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class ChatMessage:
    """One role-tagged message in a chat-completion conversation."""
    role: str
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass
class ChatRequest:
    """Request body for a chat-completion endpoint."""
    model: str
    messages: list[ChatMessage] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"model": self.model, "messages": [m.to_dict() for m in self.messages]}

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict()).encode('utf-8')


@dataclass
class Choice:
    message: ChatMessage


@dataclass
class ChatResponse:
    """Success body of a chat-completion endpoint."""
    choices: list[Choice]
    total_tokens: int = 0

    @classmethod
    def parse(cls, body: str) -> 'ChatResponse':
        """Parse and validate a response body.

        Raises:
            ValueError: body is not JSON or does not match the expected shape.
        """
        data = json.loads(body)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")

        raw_choices = data.get("choices")
        if not isinstance(raw_choices, list):
            raise ValueError("missing field `choices`" if raw_choices is None else "`choices` is not a list")

        choices = []
        for i, raw in enumerate(raw_choices):
            message = raw.get("message") if isinstance(raw, dict) else None
            if not isinstance(message, dict):
                raise ValueError(f"choices[{i}]: missing field `message`")
            for key in ("role", "content"):
                if not isinstance(message.get(key), str):
                    raise ValueError(f"choices[{i}].message: missing or non-string field `{key}`")
            choices.append(Choice(message=ChatMessage(role=message["role"], content=message["content"])))

        usage = data.get("usage")
        total_tokens = usage.get("total_tokens", 0) if isinstance(usage, dict) else 0
        if not isinstance(total_tokens, int):
            total_tokens = 0

        return cls(choices=choices, total_tokens=total_tokens)


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class EmptyDiffError(LLMError):
    """Raised when asked to describe an empty diff."""

    def __init__(self):
        super().__init__("No staged changes to commit.")


class TransportError(LLMError):
    """The endpoint could not be reached or the response could not be read."""

    def __init__(self, message: str, cause: str):
        super().__init__(f"{message}: {cause}")
        self.cause = cause


class BadStatusError(LLMError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, status: int, body: str, reason: str = ""):
        status_text = f"{status} {reason}".strip()
        super().__init__(f"API request failed with status {status_text}. \nResponse: {body}")
        self.status = status
        self.body = body


class ParseFailureError(LLMError):
    """A 2xx body did not match the chat-completion response shape."""

    def __init__(self, detail: str, body: str):
        super().__init__(f"Failed to parse JSON response: {detail}. \nRaw response: {body}")
        self.detail = detail
        self.body = body


class EmptyChoicesError(LLMError):
    """A well-formed response carried no choices."""

    def __init__(self, body: str = ""):
        super().__init__("API response is empty.")
        self.body = body


class LLMClient(ABC):
    """Abstract base for LLM clients."""

    @abstractmethod
    def generate(self, diff: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
