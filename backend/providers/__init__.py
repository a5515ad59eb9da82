from .base import ChatMessage, ChatRequest, ChatResult, ProtocolAdapter
from .errors import (
    ChatError,
    InvalidPayload,
    MissingCredential,
    MissingEndpoint,
    MissingMessages,
    TransportFailure,
    UnsupportedProvider,
    VendorRejected,
)
from .registry import Provider, get_provider, list_providers
from .openai_provider import OpenAIProvider
from .claude_provider import ClaudeProvider
from .gemini_provider import GeminiProvider
from .cohere_provider import CohereProvider
from .ollama_provider import OllamaProvider

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResult",
    "ProtocolAdapter",
    "ChatError",
    "InvalidPayload",
    "MissingCredential",
    "MissingEndpoint",
    "MissingMessages",
    "TransportFailure",
    "UnsupportedProvider",
    "VendorRejected",
    "Provider",
    "get_provider",
    "list_providers",
    "OpenAIProvider",
    "ClaudeProvider",
    "GeminiProvider",
    "CohereProvider",
    "OllamaProvider",
]
