"""
Static catalog of supported chat providers.

Each entry names the protocol family that speaks to it, the endpoint used when
the caller does not (or may not) override it, and whether a credential must be
present before a request is sent. Entries are frozen and the mapping is
read-only, so the registry is safe to share across concurrent requests.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .errors import UnsupportedProvider

# Protocol families
OPENAI = "openai"
ANTHROPIC = "anthropic"
GEMINI = "gemini"
COHERE = "cohere"
OLLAMA = "ollama"

# Endpoint policies
ENDPOINT_FIXED = "fixed"
ENDPOINT_OVERRIDABLE = "overridable"
ENDPOINT_REQUIRED = "required"

DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-4.1-mini"


@dataclass(frozen=True)
class Provider:
    id: str
    display_name: str
    protocol: str
    default_endpoint: str | None
    credential_required: bool
    endpoint_policy: str
    default_model: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.display_name,
            "protocol": self.protocol,
            "defaultEndpoint": self.default_endpoint,
            "credentialRequired": self.credential_required,
            "endpointPolicy": self.endpoint_policy,
            "defaultModel": self.default_model,
        }


_PROVIDERS = [
    Provider("openai", "OpenAI", OPENAI, "https://api.openai.com/v1", True, ENDPOINT_OVERRIDABLE, DEFAULT_MODEL),
    # Any OpenAI-compatible gateway; the caller must say where it lives.
    Provider("custom", "Custom (OpenAI-compatible)", OPENAI, None, True, ENDPOINT_REQUIRED, DEFAULT_MODEL),
    Provider("openrouter", "OpenRouter", OPENAI, "https://openrouter.ai/api/v1", True, ENDPOINT_FIXED, "openai/gpt-4o-mini"),
    Provider("groq", "Groq", OPENAI, "https://api.groq.com/openai/v1", True, ENDPOINT_FIXED, "llama-3.3-70b-versatile"),
    Provider("xai", "xAI Grok", OPENAI, "https://api.x.ai/v1", True, ENDPOINT_FIXED, "grok-3"),
    Provider("moonshot", "Moonshot Kimi", OPENAI, "https://api.moonshot.cn/v1", True, ENDPOINT_FIXED, "moonshot-v1-128k"),
    Provider("deepseek", "DeepSeek", OPENAI, "https://api.deepseek.com/v1", True, ENDPOINT_FIXED, "deepseek-chat"),
    Provider("anthropic", "Anthropic", ANTHROPIC, "https://api.anthropic.com", True, ENDPOINT_FIXED, "claude-sonnet-4-20250514"),
    Provider("gemini", "Google Gemini", GEMINI, "https://generativelanguage.googleapis.com/v1beta", True, ENDPOINT_FIXED, "gemini-2.5-flash"),
    Provider("cohere", "Cohere", COHERE, "https://api.cohere.com/v2", True, ENDPOINT_FIXED, "command-r-plus-08-2024"),
    Provider("ollama", "Ollama (local)", OLLAMA, "http://localhost:11434", False, ENDPOINT_OVERRIDABLE, "llama3.2"),
]

PROVIDERS: Mapping[str, Provider] = MappingProxyType({p.id: p for p in _PROVIDERS})


def get_provider(provider_id: str) -> Provider:
    """Look up a provider by id; ids are matched case-insensitively."""
    provider = PROVIDERS.get((provider_id or "").strip().lower())
    if provider is None:
        raise UnsupportedProvider(provider_id)
    return provider


def list_providers() -> list[Provider]:
    return list(PROVIDERS.values())


def default_model_for(provider_id: str) -> str:
    provider = PROVIDERS.get(provider_id)
    return provider.default_model if provider else DEFAULT_MODEL
