import httpx

from .base import ChatRequest, ChatResult, ProtocolAdapter
from .envelopes import CohereError, CohereResponse, error_message
from .errors import TransportFailure, VendorRejected
from .openai_provider import SYSTEM_ONLY_ROLES, build_messages
from .registry import COHERE


class CohereProvider(ProtocolAdapter):
    """Cohere chat v2. The response does not name the model, so the requested one is echoed."""

    protocol = COHERE

    async def send(self, request: ChatRequest, credential: str | None, endpoint: str) -> ChatResult:
        async with self.http_client() as client:
            try:
                r = await client.post(
                    f"{endpoint}/chat",
                    headers={
                        "Authorization": f"Bearer {credential}",
                        "Content-Type": "application/json",
                    },
                    json={
                        "model": request.model,
                        "messages": build_messages(request, SYSTEM_ONLY_ROLES),
                        "temperature": request.temperature,
                        "stream": False,
                    },
                )
            except httpx.TimeoutException:
                raise TransportFailure("Upstream request timed out.", 504)
        if r.is_error:
            raise VendorRejected(r.status_code, error_message(r, CohereError, "Cohere API error."))
        data = CohereResponse.model_validate_json(r.content)
        return ChatResult(text=data.text(), usage=data.usage, model=request.model)
