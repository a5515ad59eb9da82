import openai
from openai import AsyncOpenAI

from .base import ChatRequest, ChatResult, ProtocolAdapter, sdk_error_message
from .errors import TransportFailure, VendorRejected
from .registry import OPENAI

# For protocols without a "developer" role; it means the same as "system" there.
SYSTEM_ONLY_ROLES = {"developer": "system"}


def build_messages(request: ChatRequest, role_map: dict[str, str] | None = None) -> list[dict]:
    """Chat-completions message list: one synthesized system message, then the caller's, in order.

    ``role_map`` renames roles a protocol does not know (e.g. ``developer``).
    """
    role_map = role_map or {}
    openai_messages = []
    if request.system_prompt:
        openai_messages.append({"role": "system", "content": request.system_prompt})
    for m in request.messages:
        openai_messages.append({"role": role_map.get(m.role, m.role), "content": m.content})
    return openai_messages


class OpenAIProvider(ProtocolAdapter):
    """OpenAI chat completions; also serves every OpenAI-compatible gateway."""

    protocol = OPENAI

    async def send(self, request: ChatRequest, credential: str | None, endpoint: str) -> ChatResult:
        async with self.http_client() as http_client:
            client = AsyncOpenAI(
                api_key=credential,
                base_url=endpoint,
                timeout=self.timeout,
                max_retries=0,
                http_client=http_client,
            )
            try:
                r = await client.chat.completions.create(
                    model=request.model,
                    messages=build_messages(request),
                    temperature=request.temperature,
                )
            except openai.APITimeoutError:
                raise TransportFailure("Upstream request timed out.", 504)
            except openai.APIStatusError as e:
                raise VendorRejected(e.status_code, sdk_error_message(e, "OpenAI API error."))
        content = ""
        if r.choices:
            content = r.choices[0].message.content or ""
        usage = r.usage.model_dump() if r.usage is not None else None
        return ChatResult(text=content, usage=usage, model=r.model or request.model)
