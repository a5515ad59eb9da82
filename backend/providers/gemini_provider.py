import httpx

from .base import ChatRequest, ChatResult, ProtocolAdapter
from .envelopes import GeminiError, GeminiResponse, error_message
from .errors import TransportFailure, VendorRejected
from .registry import GEMINI

# Gemini calls the assistant side of a conversation "model".
_ROLE_MAP = {"user": "user", "assistant": "model"}


class GeminiProvider(ProtocolAdapter):
    protocol = GEMINI

    @staticmethod
    def build_payload(request: ChatRequest) -> dict:
        system_parts = [request.system_prompt] if request.system_prompt else []
        contents = []
        for m in request.messages:
            if m.role in ("system", "developer"):
                system_parts.append(m.content)
                continue
            contents.append({"role": _ROLE_MAP.get(m.role, "user"), "parts": [{"text": m.content}]})
        payload = {
            "contents": contents,
            "generationConfig": {"temperature": request.temperature},
        }
        if system_parts:
            payload["systemInstruction"] = {"parts": [{"text": "\n\n".join(system_parts)}]}
        return payload

    async def send(self, request: ChatRequest, credential: str | None, endpoint: str) -> ChatResult:
        async with self.http_client() as client:
            try:
                r = await client.post(
                    f"{endpoint}/models/{request.model}:generateContent",
                    headers={
                        "x-goog-api-key": credential or "",
                        "Content-Type": "application/json",
                    },
                    json=self.build_payload(request),
                )
            except httpx.TimeoutException:
                raise TransportFailure("Upstream request timed out.", 504)
        if r.is_error:
            raise VendorRejected(r.status_code, error_message(r, GeminiError, "Gemini API error."))
        data = GeminiResponse.model_validate_json(r.content)
        return ChatResult(text=data.text(), usage=data.usageMetadata, model=data.modelVersion or request.model)
