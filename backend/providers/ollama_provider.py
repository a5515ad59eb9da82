import httpx

from .base import ChatRequest, ChatResult, ProtocolAdapter
from .envelopes import OllamaError, OllamaResponse, error_message
from .errors import TransportFailure, VendorRejected
from .openai_provider import SYSTEM_ONLY_ROLES, build_messages
from .registry import OLLAMA


class OllamaProvider(ProtocolAdapter):
    """Local Ollama server. Never sends a credential, even when one was supplied."""

    protocol = OLLAMA

    async def send(self, request: ChatRequest, credential: str | None, endpoint: str) -> ChatResult:
        payload = {
            "model": request.model,
            "messages": build_messages(request, SYSTEM_ONLY_ROLES),
            "stream": False,
            "options": {"temperature": request.temperature},
        }
        async with self.http_client() as client:
            try:
                r = await client.post(f"{endpoint}/api/chat", json=payload)
            except httpx.TimeoutException:
                raise TransportFailure("Local model request timed out.", 504)
        if r.is_error:
            raise VendorRejected(r.status_code, error_message(r, OllamaError, "Ollama API error."))
        data = OllamaResponse.model_validate_json(r.content)
        return ChatResult(text=data.text(), usage=data.usage(), model=data.model or request.model)
