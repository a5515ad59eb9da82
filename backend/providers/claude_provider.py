import anthropic
from anthropic import AsyncAnthropic

from .base import ChatRequest, ChatResult, ProtocolAdapter, sdk_error_message
from .errors import TransportFailure, VendorRejected
from .registry import ANTHROPIC


class ClaudeProvider(ProtocolAdapter):
    """Anthropic Messages API. System text travels in the first-class ``system`` field."""

    protocol = ANTHROPIC

    def __init__(self, timeout: float, max_tokens: int, transport=None):
        super().__init__(timeout, transport)
        self.max_tokens = max_tokens

    @staticmethod
    def split_system(request: ChatRequest) -> tuple[str | None, list[dict]]:
        system_parts = [request.system_prompt] if request.system_prompt else []
        anthropic_messages = []
        for m in request.messages:
            if m.role in ("system", "developer"):
                system_parts.append(m.content)
            else:
                anthropic_messages.append({"role": m.role, "content": m.content})
        system = "\n\n".join(p for p in system_parts if p) or None
        return system, anthropic_messages

    async def send(self, request: ChatRequest, credential: str | None, endpoint: str) -> ChatResult:
        system, anthropic_messages = self.split_system(request)
        kwargs = {
            "model": request.model,
            "max_tokens": self.max_tokens,
            "temperature": request.temperature,
            "messages": anthropic_messages,
        }
        if system:
            kwargs["system"] = system
        async with self.http_client() as http_client:
            client = AsyncAnthropic(
                api_key=credential,
                base_url=endpoint,
                timeout=self.timeout,
                max_retries=0,
                http_client=http_client,
            )
            try:
                r = await client.messages.create(**kwargs)
            except anthropic.APITimeoutError:
                raise TransportFailure("Upstream request timed out.", 504)
            except anthropic.APIStatusError as e:
                raise VendorRejected(e.status_code, sdk_error_message(e, "Anthropic API error."))
        content = next((block.text for block in r.content or [] if block.type == "text"), "")
        usage = r.usage.model_dump() if r.usage is not None else None
        return ChatResult(text=content or "", usage=usage, model=r.model or request.model)
