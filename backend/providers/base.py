from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any, List

import httpx


@dataclass
class ChatMessage:
    role: str  # "user" | "assistant" | "system" | "developer"
    content: str


@dataclass
class ChatRequest:
    messages: List[ChatMessage]
    model: str
    temperature: float = 0.6
    provider: str = "openai"
    system_prompt: str | None = None
    credential: str | None = field(default=None, repr=False)
    endpoint_override: str | None = None


@dataclass
class ChatResult:
    text: str
    model: str
    usage: Any = None

    def to_dict(self) -> dict:
        return asdict(self)


class ProtocolAdapter(ABC):
    """Speaks one protocol family's wire format.

    Adapters are stateless apart from their timeout and optional transport,
    so one instance serves every concurrent request for its family.
    """

    def __init__(self, timeout: float, transport: httpx.AsyncBaseTransport | None = None):
        self.timeout = timeout
        self.transport = transport

    @property
    @abstractmethod
    def protocol(self) -> str:
        pass

    @abstractmethod
    async def send(self, request: ChatRequest, credential: str | None, endpoint: str) -> ChatResult:
        pass

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)


def sdk_error_message(error: Exception, fallback: str) -> str:
    """Pull ``error.message`` (or a top-level ``message``) out of an SDK status error body."""
    body = getattr(error, "body", None)
    if isinstance(body, dict):
        detail = body.get("error", body)
        if isinstance(detail, dict):
            message = detail.get("message")
            if isinstance(message, str) and message.strip():
                return message.strip()
        elif isinstance(detail, str) and detail.strip():
            return detail.strip()
    return fallback
