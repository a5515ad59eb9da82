"""
Chat dispatch: normalize the request, resolve provider/endpoint/credential, hand it to
the adapter for that provider's protocol family, and classify whatever comes back.
"""
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from config import Settings
from normalizer import normalize_request
from providers import (
    ChatError,
    ChatRequest,
    ChatResult,
    ClaudeProvider,
    CohereProvider,
    GeminiProvider,
    MissingCredential,
    MissingEndpoint,
    OllamaProvider,
    OpenAIProvider,
    ProtocolAdapter,
    Provider,
    TransportFailure,
    get_provider,
)
from providers.registry import ENDPOINT_OVERRIDABLE, ENDPOINT_REQUIRED, OLLAMA

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Target:
    provider: Provider
    endpoint: str
    credential: str | None = field(default=None, repr=False)


class Dispatcher:
    """Stateless per call; safe to share across concurrent requests."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        hosted = settings.request_timeout
        adapters: list[ProtocolAdapter] = [
            OpenAIProvider(hosted, transport),
            ClaudeProvider(hosted, settings.max_output_tokens, transport),
            GeminiProvider(hosted, transport),
            CohereProvider(hosted, transport),
            OllamaProvider(settings.local_request_timeout, transport),
        ]
        self._adapters: dict[str, ProtocolAdapter] = {a.protocol: a for a in adapters}

    def resolve(self, request: ChatRequest) -> Target:
        provider = get_provider(request.provider)

        if provider.endpoint_policy == ENDPOINT_REQUIRED:
            endpoint = request.endpoint_override
            if not endpoint:
                raise MissingEndpoint(f"Base URL is required for the {provider.display_name} provider.")
        elif provider.endpoint_policy == ENDPOINT_OVERRIDABLE:
            default = provider.default_endpoint
            if provider.protocol == OLLAMA and self.settings.ollama_base_url:
                default = self.settings.ollama_base_url
            endpoint = request.endpoint_override or default
        else:
            endpoint = provider.default_endpoint

        credential = request.credential
        if credential is None and provider.id == "openai":
            credential = self.settings.openai_api_key
        if provider.credential_required and not credential:
            raise MissingCredential(f"Missing {provider.display_name} API key.")

        return Target(provider=provider, endpoint=endpoint.rstrip("/"), credential=credential)

    async def dispatch(self, raw: Any) -> ChatResult | ChatError:
        """Never raises: every failure comes back as a ChatError value."""
        provider_id = None
        try:
            request = normalize_request(raw)
            provider_id = request.provider
            target = self.resolve(request)
            adapter = self._adapters[target.provider.protocol]
            logger.info("chat -> provider=%s model=%s messages=%d", provider_id, request.model, len(request.messages))
            return await adapter.send(request, target.credential, target.endpoint)
        except ChatError as e:
            logger.warning("chat failed provider=%s status=%s: %s", provider_id, e.http_status, e.message)
            return e
        except Exception:
            logger.exception("Unclassified failure dispatching chat to provider=%s", provider_id)
            return TransportFailure()
